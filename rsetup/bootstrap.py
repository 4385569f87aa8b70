"""Top-to-bottom orchestration of the environment setup steps."""

import logging
from typing import Callable, List, Optional, Union

from .config import Config
from .errors import ErrorHandler, ErrorResponse
from .git_sync import GitClient, GitSyncResult, RepositorySynchronizer
from .git_sync.performance_logger import PerformanceLogger
from .identity import configure_git_identity
from .provisioner import PackageProvisioner
from .results import StepResult
from .workspace import ensure_workspace

TOTAL_STEPS = 4


class SetupRunner:
    """
    Runs workspace preparation, git identity setup, repository sync and
    R provisioning in order, stopping at the first failure.
    """

    def __init__(
        self,
        config: Config,
        client: Optional[GitClient] = None,
        provisioner: Optional[PackageProvisioner] = None,
        prompt: Callable[[str], str] = input,
        change_directory: bool = True
    ):
        self.config = config
        self.performance = PerformanceLogger()
        self.client = client or GitClient(self.performance)
        self.provisioner = provisioner or PackageProvisioner(config)
        self.prompt = prompt
        self.change_directory = change_directory
        self.error_handler = ErrorHandler()
        self.logger = logging.getLogger('rsetup.bootstrap')

        self.results: List[Union[StepResult, GitSyncResult]] = []
        self.failure: Optional[ErrorResponse] = None
        self.git_user: Optional[str] = None

    def _announce(self, number: int, title: str) -> None:
        self.logger.info(f"[{number}/{TOTAL_STEPS}] {title}")

    def _record(self, result: Union[StepResult, GitSyncResult]) -> bool:
        self.results.append(result)
        if not result.success:
            self.failure = self.error_handler.handle_result(result)
        return result.success

    def run(self) -> int:
        """Run every step; returns the process exit status."""
        self.logger.info("==================================")
        self.logger.info("UCloud R-Studio Setup Script")
        self.logger.info("==================================")

        self._announce(1, "Checking Virtual Environment...")
        with self.performance.time_operation("ensure_workspace"):
            if not self._record(ensure_workspace(self.config.workspace_dir)):
                return 1

        self._announce(2, "GitHub Authentication...")
        with self.performance.time_operation("configure_git_identity"):
            identity = configure_git_identity(self.config, self.client, self.prompt)
            if not self._record(identity):
                return 1
            self.git_user = identity.details.get('user_name')

        self._announce(3, "Repository Management...")
        synchronizer = RepositorySynchronizer(
            self.config.sync_config(),
            self.client,
            change_directory=self.change_directory
        )
        with self.performance.time_operation("synchronize_repository"):
            if not self._record(synchronizer.synchronize()):
                return 1

        self._announce(4, "Setting up R packages, Stan, and brms...")
        if self.config.skip_provisioning:
            self.logger.warning("⚠ R provisioning skipped (RSETUP_SKIP_PROVISIONING=true)")
        else:
            with self.performance.time_operation("provision_packages"):
                if not self._record(self.provisioner.provision()):
                    return 1

        self._report_completion()
        return 0

    def _report_completion(self) -> None:
        self.logger.info("==================================")
        self.logger.info("✓ Setup Complete!")
        self.logger.info("==================================")
        self.logger.info(f"Repository: {self.config.repo_dir}")
        self.logger.info(f"GitHub User: {self.git_user}")
        self.logger.info("You can now start working in R-Studio")
        self.logger.debug(f"Total setup time: {self.performance.total_duration():.1f}s")


def run_setup(config: Config, **kwargs) -> int:
    """Run the full setup for ``config`` and return the exit status."""
    return SetupRunner(config, **kwargs).run()
