"""Run the rendered R provisioning script with Rscript."""

import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from ..config import Config
from ..git_sync.error_types import ErrorCategory
from ..platform import find_rscript, get_cpu_count
from ..results import StepResult
from .r_script import render_r_script


class PackageProvisioner:
    """Installs the R package chain and CmdStan by running one R script once."""

    def __init__(self, config: Config, cores: Optional[int] = None):
        self.config = config
        self.cores = cores or get_cpu_count()
        self.logger = logging.getLogger('rsetup.provisioner')

    def _failure(self, message: str, error_code: str, **details) -> StepResult:
        return StepResult(
            success=False,
            message=message,
            operation="provision_packages",
            error_code=error_code,
            category=ErrorCategory.PROVISIONING_FAILURE,
            details=details
        )

    def provision(self) -> StepResult:
        rscript = find_rscript()
        if not rscript:
            return self._failure("Rscript executable not found on PATH", "RSCRIPT_NOT_FOUND")

        try:
            script = render_r_script(
                self.config.r_packages,
                cran_mirror=self.config.cran_mirror,
                stan_repo=self.config.stan_repo,
                cores=self.cores
            )
        except ValueError as e:
            return self._failure(f"Cannot render R setup script: {e}", "SCRIPT_RENDER_FAILED")

        fd, script_name = tempfile.mkstemp(prefix="setup_r_packages_", suffix=".R")
        script_path = Path(script_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(script)

            env = dict(os.environ, DOWNLOAD_STATIC_LIBV8="1")
            self.logger.info("Running R package installation (this may take a while on first run)...")
            self.logger.debug(f"Rscript {script_path} with {self.cores} cores")

            try:
                completed = subprocess.run([rscript, str(script_path)], env=env, check=False)
            except OSError as e:
                return self._failure(f"Failed to start Rscript: {e}", "RSCRIPT_START_FAILED")
        finally:
            script_path.unlink(missing_ok=True)

        if completed.returncode != 0:
            return self._failure(
                f"Rscript exited with status {completed.returncode}",
                "RSCRIPT_FAILED",
                returncode=completed.returncode
            )

        self.logger.info("✓ R packages, Stan, and brms configured successfully")
        return StepResult(
            success=True,
            message="R packages and CmdStan configured",
            operation="provision_packages",
            details={'returncode': 0, 'packages': list(self.config.r_packages)}
        )
