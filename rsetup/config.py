"""Configuration management for the R-Studio environment bootstrap."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Tuple

from dotenv import load_dotenv

from .git_sync.repository_info import SyncConfig
from .platform import normalize_path, validate_git_availability

DEFAULT_REPO_URL = "https://github.com/JSejrskild/Advanced_Cognitive_Modelling_2026.git"
DEFAULT_REPO_DIR = "/work/ACM_2026/Advanced_Cognitive_Modelling_2026"
DEFAULT_WORKSPACE_NAME = "r_analysis_env"
DEFAULT_BRANCH_CANDIDATES = ("main", "master")
DEFAULT_CRAN_MIRROR = "https://cloud.r-project.org"
DEFAULT_STAN_REPO = "https://mc-stan.org/r-packages/"
DEFAULT_R_PACKAGES = ("brms", "tidyverse")

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}


def _split_list(value: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of {sorted(TRUE_VALUES | FALSE_VALUES)}, got '{value}'")


@dataclass
class Config:
    """Configuration for a bootstrap run with validation and defaults."""

    # Repository
    repo_url: str = DEFAULT_REPO_URL
    repo_dir: Path = field(default_factory=lambda: Path(DEFAULT_REPO_DIR))
    branch_candidates: Tuple[str, ...] = DEFAULT_BRANCH_CANDIDATES
    remote_name: str = "origin"

    # Workspace
    workspace_name: str = DEFAULT_WORKSPACE_NAME
    workspace_root: Path = field(default_factory=Path.home)

    # Git identity; None means "ask the user" when the global config is empty
    git_user_name: Optional[str] = None
    git_user_email: Optional[str] = None
    credential_helper: str = "store"

    # R provisioning
    cran_mirror: str = DEFAULT_CRAN_MIRROR
    stan_repo: str = DEFAULT_STAN_REPO
    r_packages: Tuple[str, ...] = DEFAULT_R_PACKAGES
    skip_provisioning: bool = False

    # Logging
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.repo_dir, str):
            self.repo_dir = Path(self.repo_dir)
        if isinstance(self.workspace_root, str):
            self.workspace_root = Path(self.workspace_root)
        self.repo_dir = normalize_path(self.repo_dir)
        self.workspace_root = normalize_path(self.workspace_root)

        self.branch_candidates = tuple(self.branch_candidates)
        self.r_packages = tuple(self.r_packages)
        self.log_level = self.log_level.upper()

        if not self.repo_url:
            raise ValueError("repo_url must not be empty")

        if not self.workspace_name or "/" in self.workspace_name:
            raise ValueError(f"Invalid workspace name: {self.workspace_name!r}")

        if not self.branch_candidates:
            raise ValueError("branch_candidates must name at least one branch")

        if not self.remote_name:
            raise ValueError("remote_name must not be empty")

        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}. Must be one of {VALID_LOG_LEVELS}")

    @property
    def workspace_dir(self) -> Path:
        """Directory prepared as the analysis workspace."""
        return self.workspace_root / self.workspace_name

    def sync_config(self) -> SyncConfig:
        """Build the structure handed to the repository synchronizer."""
        return SyncConfig(
            remote_url=self.repo_url,
            local_path=self.repo_dir,
            branch_candidates=self.branch_candidates,
            remote_name=self.remote_name
        )


def load_configuration() -> Config:
    """Load configuration from environment variables (and a .env file if present)."""
    load_dotenv()

    try:
        return Config(
            repo_url=os.getenv("RSETUP_REPO_URL", DEFAULT_REPO_URL),
            repo_dir=Path(os.getenv("RSETUP_REPO_DIR", DEFAULT_REPO_DIR)),
            branch_candidates=_split_list(
                os.getenv("RSETUP_BRANCH_CANDIDATES", ",".join(DEFAULT_BRANCH_CANDIDATES))
            ),
            remote_name=os.getenv("RSETUP_REMOTE_NAME", "origin"),
            workspace_name=os.getenv("RSETUP_WORKSPACE_NAME", DEFAULT_WORKSPACE_NAME),
            workspace_root=Path(os.getenv("RSETUP_WORKSPACE_ROOT", str(Path.home()))),
            git_user_name=os.getenv("RSETUP_GIT_USER_NAME") or None,
            git_user_email=os.getenv("RSETUP_GIT_USER_EMAIL") or None,
            credential_helper=os.getenv("RSETUP_CREDENTIAL_HELPER", "store"),
            cran_mirror=os.getenv("RSETUP_CRAN_MIRROR", DEFAULT_CRAN_MIRROR),
            stan_repo=os.getenv("RSETUP_STAN_REPO", DEFAULT_STAN_REPO),
            r_packages=_split_list(os.getenv("RSETUP_R_PACKAGES", ",".join(DEFAULT_R_PACKAGES))),
            skip_provisioning=_parse_bool(
                "RSETUP_SKIP_PROVISIONING", os.getenv("RSETUP_SKIP_PROVISIONING", "false")
            ),
            log_level=os.getenv("RSETUP_LOG_LEVEL", "INFO")
        )
    except (ValueError, TypeError) as e:
        raise ValueError(f"Configuration error: {e}")


def validate_configuration(config: Config) -> List[str]:
    """Validate configuration and return any errors or warnings."""
    errors = []

    git_available, git_error = validate_git_availability()
    if not git_available:
        errors.append(f"ERROR: Git is required: {git_error}")

    if not config.repo_url.startswith(("http://", "https://", "git@", "ssh://", "file://", "/")):
        errors.append(f"WARNING: Git remote URL may be invalid: {config.repo_url}")

    if config.repo_dir.exists() and not config.repo_dir.is_dir():
        errors.append(f"ERROR: Repository path exists and is not a directory: {config.repo_dir}")

    if bool(config.git_user_name) != bool(config.git_user_email):
        errors.append("WARNING: Only one of RSETUP_GIT_USER_NAME / RSETUP_GIT_USER_EMAIL is set")

    if not config.r_packages and not config.skip_provisioning:
        errors.append("WARNING: No R packages configured; only cmdstanr and CmdStan will be installed")

    return errors
