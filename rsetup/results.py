"""Result type for the non-git bootstrap steps."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .git_sync.error_types import ErrorCategory


@dataclass
class StepResult:
    """Outcome of a workspace, identity or provisioning step."""
    success: bool
    message: str
    operation: str
    error_code: Optional[str] = None
    category: Optional[ErrorCategory] = None
    details: Dict[str, Any] = field(default_factory=dict)
