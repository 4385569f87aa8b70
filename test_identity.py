#!/usr/bin/env python3
"""Tests for global git identity and credential helper configuration."""

import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

# Add the project root to the path
import sys
sys.path.insert(0, str(Path(__file__).parent))

from rsetup.config import Config
from rsetup.git_sync.client import GitClient
from rsetup.git_sync.error_types import ErrorCategory
from rsetup.git_sync.utils import command_failed
from rsetup.identity import configure_git_identity


class TestIdentityWithRealGitConfig(unittest.TestCase):
    """Exercise read-if-present / write-if-absent against an isolated global config."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp()).resolve()
        self.global_config = self.temp_dir / "gitconfig"
        self.env_patch = patch.dict(os.environ, {
            "GIT_CONFIG_GLOBAL": str(self.global_config),
            "GIT_CONFIG_NOSYSTEM": "1",
        })
        self.env_patch.start()
        self.client = GitClient()

    def tearDown(self):
        self.env_patch.stop()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _config(self, **overrides) -> Config:
        return Config(repo_dir=self.temp_dir / "repo", workspace_root=self.temp_dir, **overrides)

    def test_existing_identity_is_kept(self):
        self.global_config.write_text("[user]\n\tname = Existing User\n\temail = old@example.com\n")
        prompt = MagicMock()

        result = configure_git_identity(self._config(git_user_name="Other"), self.client, prompt)

        self.assertTrue(result.success)
        self.assertEqual(result.details['user_name'], "Existing User")
        self.assertEqual(self.client.get_global_config("user.email"), "old@example.com")
        prompt.assert_not_called()

    def test_missing_identity_uses_configured_defaults(self):
        prompt = MagicMock()

        result = configure_git_identity(
            self._config(git_user_name="Ada", git_user_email="ada@example.com"), self.client, prompt
        )

        self.assertTrue(result.success)
        self.assertEqual(self.client.get_global_config("user.name"), "Ada")
        self.assertEqual(self.client.get_global_config("user.email"), "ada@example.com")
        prompt.assert_not_called()

    def test_missing_identity_prompts_user(self):
        prompt = MagicMock(side_effect=["prompted", "prompted@example.com"])

        result = configure_git_identity(self._config(), self.client, prompt)

        self.assertTrue(result.success)
        self.assertEqual(prompt.call_count, 2)
        self.assertEqual(self.client.get_global_config("user.name"), "prompted")
        self.assertEqual(self.client.get_global_config("user.email"), "prompted@example.com")

    def test_non_interactive_without_defaults_fails(self):
        prompt = MagicMock(side_effect=EOFError)

        result = configure_git_identity(self._config(), self.client, prompt)

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, "IDENTITY_MISSING")
        self.assertEqual(result.category, ErrorCategory.CONFIGURATION)
        self.assertIsNone(self.client.get_global_config("user.name"))

    def test_credential_helper_written_only_when_absent(self):
        self.global_config.write_text("[user]\n\tname = U\n\temail = u@example.com\n")

        result = configure_git_identity(self._config(), self.client)
        self.assertTrue(result.success)
        self.assertEqual(self.client.get_global_config("credential.helper"), "store")

        self.client.set_global_config("credential.helper", "cache")
        result = configure_git_identity(self._config(), self.client)
        self.assertEqual(result.details['credential_helper'], "cache")
        self.assertEqual(self.client.get_global_config("credential.helper"), "cache")


class TestIdentityWriteFailures(unittest.TestCase):

    def test_write_failure_is_reported(self):
        client = MagicMock(spec=GitClient)
        client.get_global_config.return_value = None
        client.set_global_config.return_value = command_failed("config", "error: could not lock config file")
        config = Config(repo_dir="/tmp/rsetup-test/repo", git_user_name="A", git_user_email="a@b.c")

        result = configure_git_identity(config, client, prompt=MagicMock())

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, "IDENTITY_WRITE_FAILED")


if __name__ == "__main__":
    unittest.main(verbosity=2)
