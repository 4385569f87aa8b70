"""Result types shared by the git adapter and the repository synchronizer."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict

from .error_types import ErrorCategory, FailureReason
from .error_strategies import build_error_patterns
from .repository_info import LocalRepositoryState

_ERROR_PATTERNS: Dict[str, FailureReason] = build_error_patterns()


@dataclass
class GitCommandResult:
    """Outcome of one git command run through the adapter."""
    success: bool
    command: str
    reason: Optional[FailureReason] = None
    detail: str = ""


@dataclass
class GitSyncResult:
    """Result of a Git synchronization operation."""
    success: bool
    message: str
    operation: str
    error_code: Optional[str] = None
    category: Optional[ErrorCategory] = None
    initial_state: Optional[LocalRepositoryState] = None
    final_state: Optional[LocalRepositoryState] = None
    branch_used: Optional[str] = None
    stashed: bool = False
    stash_ref: Optional[str] = None
    empty_remote: bool = False
    path: Optional[Path] = None


def classify_git_error(error_message: str) -> FailureReason:
    """Map git's stderr text onto a FailureReason."""
    if not error_message:
        return FailureReason.UNKNOWN

    error_lower = error_message.lower()
    for pattern, reason in _ERROR_PATTERNS.items():
        if pattern in error_lower:
            return reason
    return FailureReason.UNKNOWN


def command_succeeded(command: str, detail: str = "") -> GitCommandResult:
    return GitCommandResult(success=True, command=command, detail=detail)


def command_failed(command: str, error_message: str) -> GitCommandResult:
    """Build a failed GitCommandResult, classifying the error text."""
    return GitCommandResult(
        success=False,
        command=command,
        reason=classify_git_error(error_message),
        detail=error_message.strip()
    )
