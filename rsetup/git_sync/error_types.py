"""Error types and categorization for Git synchronization operations."""

from dataclasses import dataclass
from enum import Enum
from typing import List


class FailureReason(Enum):
    """Why a single git command failed, as reported by the git adapter."""
    NETWORK = "network"
    AUTHENTICATION = "authentication"
    REPOSITORY_NOT_FOUND = "repository_not_found"
    NOT_A_REPOSITORY = "not_a_repository"
    BRANCH_NOT_FOUND = "branch_not_found"
    MERGE_CONFLICT = "merge_conflict"
    UNKNOWN = "unknown"


class ErrorCategory(Enum):
    """Terminal failure categories of a bootstrap run."""
    CLONE_FAILURE = "clone_failure"
    INVALID_LOCAL_DIRECTORY = "invalid_local_directory"
    FETCH_PULL_FAILURE = "fetch_pull_failure"
    PROVISIONING_FAILURE = "provisioning_failure"
    CONFIGURATION = "configuration"
    WORKSPACE = "workspace"


@dataclass
class ErrorResolution:
    """Information about how to resolve a specific error."""
    category: ErrorCategory
    user_message: str
    technical_message: str
    resolution_steps: List[str]
