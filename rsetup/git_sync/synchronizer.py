"""Bring a local working copy in line with a remote repository's default branch."""

import logging
import os
from datetime import datetime
from typing import Optional

from .client import GitClient
from .error_types import ErrorCategory
from .repository_info import LocalRepositoryState, SyncConfig
from .utils import GitSyncResult


class RepositorySynchronizer:
    """
    Clone or update one local working copy from one remote.

    The starting state of the local path decides what happens:

    - ABSENT: clone the remote. Failure is terminal.
    - INVALID: terminal; the directory is never modified.
    - VALID_WITH_HISTORY: stash tracked modifications, then pull the first
      branch candidate that succeeds. All candidates failing is terminal.
    - VALID_EMPTY: fetch, then check out the first branch candidate that
      exists. If nothing can be checked out the working copy is left empty
      and the result is still successful (``empty_remote`` is set).

    On success the process working directory is changed to the local path
    unless ``change_directory`` is False.
    """

    def __init__(self, sync_config: SyncConfig, client: Optional[GitClient] = None,
                 change_directory: bool = True):
        self.config = sync_config
        self.client = client or GitClient()
        self.change_directory = change_directory
        self.logger = logging.getLogger('rsetup.git_sync.synchronizer')

    def synchronize(self) -> GitSyncResult:
        path = self.config.local_path
        state = self.client.probe_state(path)
        self.logger.debug(f"Local repository state for {path}: {state.value}")

        if state is LocalRepositoryState.ABSENT:
            result = self._clone()
        elif state is LocalRepositoryState.INVALID:
            result = self._reject_invalid()
        elif state is LocalRepositoryState.VALID_WITH_HISTORY:
            self.logger.info("✓ Repository directory exists")
            result = self._pull()
        else:
            self.logger.info("✓ Repository directory exists")
            result = self._initialize_empty()

        result.initial_state = state
        result.path = path

        if result.success and self.change_directory:
            os.chdir(path)
            self.logger.debug(f"Working directory is now {path}")

        return result

    def _clone(self) -> GitSyncResult:
        self.logger.info("Cloning repository for the first time...")
        outcome = self.client.clone(self.config.remote_url, self.config.local_path)

        if not outcome.success:
            self.logger.error(f"✗ Failed to clone repository ({outcome.reason.value}): {outcome.detail}")
            return GitSyncResult(
                success=False,
                message=f"Failed to clone repository from {self.config.remote_url}",
                operation="clone_repository",
                error_code="CLONE_FAILED",
                category=ErrorCategory.CLONE_FAILURE,
                final_state=LocalRepositoryState.ABSENT
            )

        self.logger.info("✓ Repository cloned successfully")
        final_state = self.client.probe_state(self.config.local_path)
        return GitSyncResult(
            success=True,
            message=f"Repository cloned successfully from {self.config.remote_url}",
            operation="clone_repository",
            final_state=final_state,
            empty_remote=final_state is LocalRepositoryState.VALID_EMPTY
        )

    def _reject_invalid(self) -> GitSyncResult:
        self.logger.error(f"✗ Directory exists but is not a git repository: {self.config.local_path}")
        return GitSyncResult(
            success=False,
            message=f"Directory exists but is not a git repository: {self.config.local_path}",
            operation="synchronize_with_remote",
            error_code="INVALID_LOCAL_DIRECTORY",
            category=ErrorCategory.INVALID_LOCAL_DIRECTORY,
            final_state=LocalRepositoryState.INVALID
        )

    def _pull(self) -> GitSyncResult:
        path = self.config.local_path
        self.logger.info("Pulling latest changes...")

        stash_ref = None
        if self.client.has_local_changes(path):
            self.logger.warning("⚠ Local changes detected, stashing...")
            message = f"rsetup: local changes before sync {datetime.now().isoformat(timespec='seconds')}"
            stashed = self.client.stash(path, message)
            if not stashed.success:
                # Never pull over edits that could not be set aside
                self.logger.error(f"✗ Failed to stash local changes: {stashed.detail}")
                return GitSyncResult(
                    success=False,
                    message="Failed to stash local changes before pulling",
                    operation="synchronize_with_remote",
                    error_code="STASH_FAILED",
                    category=ErrorCategory.FETCH_PULL_FAILURE,
                    final_state=LocalRepositoryState.VALID_WITH_HISTORY
                )
            stash_ref = stashed.detail
            if stash_ref:
                self.logger.info(f"Local changes saved as {stash_ref} (restore with 'git stash pop')")
            else:
                self.logger.info("Nothing was stashed")

        for branch in self.config.branch_candidates:
            outcome = self.client.pull(path, self.config.remote_name, branch)
            if outcome.success:
                self.logger.info("✓ Repository updated")
                return GitSyncResult(
                    success=True,
                    message=f"Repository updated from {self.config.remote_name}/{branch}",
                    operation="synchronize_with_remote",
                    final_state=LocalRepositoryState.VALID_WITH_HISTORY,
                    branch_used=branch,
                    stashed=stash_ref is not None,
                    stash_ref=stash_ref
                )
            self.logger.debug(f"Pull from {self.config.remote_name}/{branch} failed ({outcome.reason.value})")

        self.logger.error("✗ Failed to pull. Check your connection and credentials.")
        return GitSyncResult(
            success=False,
            message=f"Failed to pull any of {', '.join(self.config.branch_candidates)} from {self.config.remote_name}",
            operation="synchronize_with_remote",
            error_code="PULL_FAILED",
            category=ErrorCategory.FETCH_PULL_FAILURE,
            final_state=LocalRepositoryState.VALID_WITH_HISTORY,
            stashed=stash_ref is not None,
            stash_ref=stash_ref
        )

    def _initialize_empty(self) -> GitSyncResult:
        path = self.config.local_path
        self.logger.warning("⚠ Repository has no commits yet. Fetching from remote...")

        fetched = self.client.fetch(path, self.config.remote_name)
        if fetched.success:
            for branch in self.config.branch_candidates:
                outcome = self.client.checkout(path, self.config.remote_name, branch)
                if outcome.success:
                    self.logger.info("✓ Repository initialized from remote")
                    return GitSyncResult(
                        success=True,
                        message=f"Repository initialized from {self.config.remote_name}/{branch}",
                        operation="initialize_from_remote",
                        final_state=LocalRepositoryState.VALID_WITH_HISTORY,
                        branch_used=branch
                    )
        else:
            self.logger.debug(f"Fetch from {self.config.remote_name} failed ({fetched.reason.value}): {fetched.detail}")

        self.logger.warning("⚠ Empty repository - will use as-is")
        return GitSyncResult(
            success=True,
            message="Empty repository - will use as-is",
            operation="initialize_from_remote",
            final_state=LocalRepositoryState.VALID_EMPTY,
            empty_remote=True
        )


def synchronize_repository(sync_config: SyncConfig, client: Optional[GitClient] = None,
                           change_directory: bool = True) -> GitSyncResult:
    """Convenience wrapper around RepositorySynchronizer.synchronize()."""
    return RepositorySynchronizer(sync_config, client, change_directory).synchronize()
