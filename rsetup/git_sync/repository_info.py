"""Repository information and state management data structures."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Tuple


class LocalRepositoryState(Enum):
    """Enumeration of possible local repository states."""
    ABSENT = "absent"                           # Local path does not exist
    VALID_WITH_HISTORY = "valid_with_history"   # Working copy with at least one commit
    VALID_EMPTY = "valid_empty"                 # Working copy with no commits yet
    INVALID = "invalid"                         # Path exists but is not a repository root


@dataclass(frozen=True)
class SyncConfig:
    """Everything the synchronizer needs to know about one remote/local pair."""
    remote_url: str
    local_path: Path
    branch_candidates: Tuple[str, ...]
    remote_name: str

    def __post_init__(self):
        if not self.remote_url:
            raise ValueError("remote_url is required")
        if not self.branch_candidates:
            raise ValueError("at least one branch candidate is required")
        if not self.remote_name:
            raise ValueError("remote_name is required")
        object.__setattr__(self, "local_path", Path(self.local_path))
        object.__setattr__(self, "branch_candidates", tuple(self.branch_candidates))
