#!/usr/bin/env python3
"""Tests for the GitPython adapter against real on-disk repositories."""

import os
import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

# Add the project root to the path
import sys
sys.path.insert(0, str(Path(__file__).parent))

from rsetup.git_sync.client import GitClient
from rsetup.git_sync.error_types import FailureReason
from rsetup.git_sync.repository_info import LocalRepositoryState


def git(*args, cwd=None) -> str:
    result = subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True)
    return result.stdout.strip()


class TestGitClient(unittest.TestCase):

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp()).resolve()
        self.global_config = self.temp_dir / "gitconfig"
        self.global_config.write_text("[user]\n\tname = Test User\n\temail = test@example.com\n")
        self.env_patch = patch.dict(os.environ, {
            "GIT_CONFIG_GLOBAL": str(self.global_config),
            "GIT_CONFIG_NOSYSTEM": "1",
        })
        self.env_patch.start()
        self.client = GitClient()

    def tearDown(self):
        self.env_patch.stop()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _repo_with_commit(self, name: str = "repo") -> Path:
        repo_dir = self.temp_dir / name
        git("init", "--initial-branch=main", str(repo_dir))
        (repo_dir / "a.txt").write_text("one\n")
        git("add", "a.txt", cwd=repo_dir)
        git("commit", "-m", "first", cwd=repo_dir)
        return repo_dir

    def test_probe_absent(self):
        self.assertEqual(self.client.probe_state(self.temp_dir / "missing"), LocalRepositoryState.ABSENT)

    def test_probe_plain_directory(self):
        plain = self.temp_dir / "plain"
        plain.mkdir()
        self.assertEqual(self.client.probe_state(plain), LocalRepositoryState.INVALID)

    def test_probe_subdirectory_of_repository_is_invalid(self):
        repo_dir = self._repo_with_commit()
        nested = repo_dir / "nested"
        nested.mkdir()
        self.assertEqual(self.client.probe_state(nested), LocalRepositoryState.INVALID)

    def test_probe_bare_repository_is_invalid(self):
        bare = self.temp_dir / "bare.git"
        git("init", "--bare", str(bare))
        self.assertEqual(self.client.probe_state(bare), LocalRepositoryState.INVALID)

    def test_probe_empty_repository(self):
        empty = self.temp_dir / "empty"
        git("init", str(empty))
        self.assertEqual(self.client.probe_state(empty), LocalRepositoryState.VALID_EMPTY)
        self.assertIsNone(self.client.head_commit(empty))

    def test_probe_repository_with_history(self):
        repo_dir = self._repo_with_commit()
        self.assertEqual(self.client.probe_state(repo_dir), LocalRepositoryState.VALID_WITH_HISTORY)
        self.assertEqual(self.client.head_commit(repo_dir), git("rev-parse", "HEAD", cwd=repo_dir))

    def test_local_changes_ignore_untracked_files(self):
        repo_dir = self._repo_with_commit()
        (repo_dir / "untracked.txt").write_text("new\n")
        self.assertFalse(self.client.has_local_changes(repo_dir))

        (repo_dir / "a.txt").write_text("two\n")
        self.assertTrue(self.client.has_local_changes(repo_dir))

    def test_stash_sets_changes_aside(self):
        repo_dir = self._repo_with_commit()
        (repo_dir / "a.txt").write_text("two\n")

        result = self.client.stash(repo_dir, "before sync")

        self.assertTrue(result.success)
        self.assertEqual(result.detail, "stash@{0}")
        self.assertEqual((repo_dir / "a.txt").read_text(), "one\n")
        self.assertIn("before sync", git("stash", "list", cwd=repo_dir))

    def test_stash_without_changes_does_not_report_older_entry(self):
        repo_dir = self._repo_with_commit()
        (repo_dir / "a.txt").write_text("two\n")
        git("stash", "push", "-m", "older work", cwd=repo_dir)

        result = self.client.stash(repo_dir, "before sync")

        self.assertTrue(result.success)
        self.assertIsNone(result.detail)
        self.assertEqual(len(git("stash", "list", cwd=repo_dir).splitlines()), 1)

    def test_clone_under_regular_file_fails_cleanly(self):
        blocker = self.temp_dir / "blocker"
        blocker.write_text("not a directory\n")

        result = self.client.clone(str(self.temp_dir / "remote.git"), blocker / "checkout")

        self.assertFalse(result.success)
        self.assertEqual(result.command, "clone")
        self.assertTrue(result.detail)

    def test_checkout_unknown_branch_fails(self):
        repo_dir = self._repo_with_commit()

        result = self.client.checkout(repo_dir, "origin", "does-not-exist")

        self.assertFalse(result.success)
        self.assertEqual(result.reason, FailureReason.BRANCH_NOT_FOUND)

    def test_checkout_existing_local_branch(self):
        repo_dir = self._repo_with_commit()
        git("branch", "feature", cwd=repo_dir)

        result = self.client.checkout(repo_dir, "origin", "feature")

        self.assertTrue(result.success)
        self.assertEqual(git("rev-parse", "--abbrev-ref", "HEAD", cwd=repo_dir), "feature")

    def test_pull_without_remote_fails(self):
        repo_dir = self._repo_with_commit()

        result = self.client.pull(repo_dir, "origin", "main")

        self.assertFalse(result.success)
        self.assertEqual(result.command, "pull origin main")
        self.assertTrue(result.detail)

    def test_global_config_round_trip(self):
        self.assertEqual(self.client.get_global_config("user.name"), "Test User")
        self.assertIsNone(self.client.get_global_config("credential.helper"))

        result = self.client.set_global_config("credential.helper", "store")

        self.assertTrue(result.success)
        self.assertEqual(self.client.get_global_config("credential.helper"), "store")
        self.assertIn("helper = store", self.global_config.read_text())


if __name__ == "__main__":
    unittest.main(verbosity=2)
