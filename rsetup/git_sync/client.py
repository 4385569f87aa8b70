"""Thin GitPython adapter returning structured results instead of raising."""

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from git import Repo, GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from git.cmd import Git

from .performance_logger import PerformanceLogger
from .repository_info import LocalRepositoryState
from .utils import GitCommandResult, command_failed, command_succeeded


class GitClient:
    """
    Adapter over the git command line (via GitPython).

    Every mutating operation returns a GitCommandResult; git failures are
    classified into FailureReason values rather than propagated as exceptions.
    """

    def __init__(self, performance_logger: Optional[PerformanceLogger] = None):
        self.logger = logging.getLogger('rsetup.git_sync.client')
        self.performance = performance_logger or PerformanceLogger()

    def _run(self, command: str, action: Callable[[], object]) -> GitCommandResult:
        """Run one git action, timing it and converting GitCommandError."""
        start_time = time.time()
        try:
            output = action()
        except GitCommandError as e:
            duration = time.time() - start_time
            self.performance.log_git_command_performance(command, duration, success=False)
            error_text = str(e.stderr or e)
            self.logger.debug(f"git {command} failed: {error_text}")
            return command_failed(command, error_text)

        duration = time.time() - start_time
        self.performance.log_git_command_performance(command, duration)
        return command_succeeded(command, output if isinstance(output, str) else "")

    def _open(self, path: Path) -> Repo:
        return Repo(path)

    # Inspection

    def probe_state(self, path: Path) -> LocalRepositoryState:
        """Classify the local path into one of the four repository states."""
        if not path.exists():
            return LocalRepositoryState.ABSENT

        try:
            repo = self._open(path)
        except (InvalidGitRepositoryError, NoSuchPathError):
            return LocalRepositoryState.INVALID

        if repo.bare:
            return LocalRepositoryState.INVALID

        # Repo() happily opens a subdirectory's .git; require the path itself to be the root
        if Path(repo.working_tree_dir).resolve() != path.resolve():
            return LocalRepositoryState.INVALID

        if repo.head.is_valid():
            return LocalRepositoryState.VALID_WITH_HISTORY
        return LocalRepositoryState.VALID_EMPTY

    def has_local_changes(self, path: Path) -> bool:
        """True when tracked files differ from HEAD (untracked files are ignored)."""
        repo = self._open(path)
        return repo.is_dirty(index=True, working_tree=True, untracked_files=False)

    def head_commit(self, path: Path) -> Optional[str]:
        repo = self._open(path)
        if not repo.head.is_valid():
            return None
        return repo.head.commit.hexsha

    # Operations

    def clone(self, remote_url: str, path: Path) -> GitCommandResult:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.debug(f"Cannot create parent of {path}: {e}")
            return command_failed("clone", str(e))
        return self._run("clone", lambda: Repo.clone_from(remote_url, str(path)))

    def stash(self, path: Path, message: str) -> GitCommandResult:
        """Set aside uncommitted changes; detail carries the stash reference."""
        repo = self._open(path)
        stashes_before = len(repo.git.stash("list").splitlines())
        result = self._run("stash", lambda: repo.git.stash("push", "-m", message))
        if result.success:
            # "No local changes to save" also exits 0 without adding an entry
            created = len(repo.git.stash("list").splitlines()) > stashes_before
            result.detail = "stash@{0}" if created else None
        return result

    def pull(self, path: Path, remote_name: str, branch: str) -> GitCommandResult:
        repo = self._open(path)
        return self._run(f"pull {remote_name} {branch}", lambda: repo.git.pull(remote_name, branch))

    def fetch(self, path: Path, remote_name: str) -> GitCommandResult:
        repo = self._open(path)
        return self._run(f"fetch {remote_name}", lambda: repo.git.fetch(remote_name))

    def checkout(self, path: Path, remote_name: str, branch: str) -> GitCommandResult:
        """Switch to branch, creating it from the remote-tracking ref when needed."""
        repo = self._open(path)
        command = f"checkout {branch}"

        local_branches = [head.name for head in repo.heads]
        if branch in local_branches:
            return self._run(command, lambda: repo.git.checkout(branch))

        remote_ref = f"{remote_name}/{branch}"
        remote_refs = [ref.name for ref in repo.references]
        if remote_ref in remote_refs:
            return self._run(command, lambda: repo.git.checkout("-b", branch, "--track", remote_ref))

        return command_failed(command, f"error: pathspec '{branch}' did not match any file(s) known to git")

    # Global configuration

    def get_global_config(self, key: str) -> Optional[str]:
        """Read a global git config value, or None when it is unset."""
        try:
            value = Git().config("--global", "--get", key)
        except GitCommandError:
            return None
        return value.strip() or None

    def set_global_config(self, key: str, value: str) -> GitCommandResult:
        return self._run(f"config --global {key}", lambda: Git().config("--global", key, value))
