"""Terminal failure reporting for a bootstrap run."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any, List, Optional

from .git_sync.error_strategies import build_error_strategies
from .git_sync.error_types import ErrorCategory


@dataclass
class ErrorResponse:
    """Diagnostic for a failed step, as shown to the user."""
    error: str
    error_code: str
    message: str
    timestamp: str
    category: str
    resolution_steps: List[str]
    context: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert error response to dictionary format."""
        result = {
            "error": self.error,
            "error_code": self.error_code,
            "message": self.message,
            "timestamp": self.timestamp,
            "category": self.category,
            "resolution_steps": list(self.resolution_steps)
        }
        if self.context:
            result["context"] = self.context
        return result


class ErrorHandler:
    """Turns failed step results into logged diagnostics with resolution steps."""

    def __init__(self):
        self.logger = logging.getLogger('rsetup.error_handler')
        self._strategies = build_error_strategies()

    def handle_step_failure(
        self,
        category: ErrorCategory,
        message: str,
        error_code: str,
        context: Dict[str, Any] = None
    ) -> ErrorResponse:
        """Log a terminal failure and return its structured description."""
        context = context or {}
        resolution = self._strategies[category]

        response = ErrorResponse(
            error=resolution.user_message,
            error_code=error_code,
            message=message,
            timestamp=datetime.now().isoformat(),
            category=category.value,
            resolution_steps=list(resolution.resolution_steps),
            context=context
        )

        self.logger.error(
            f"✗ {resolution.user_message}: {message}",
            extra={
                'operation': context.get('operation', category.value),
                'error_code': error_code
            }
        )
        self.logger.debug(f"{category.value}: {resolution.technical_message}")
        for step in resolution.resolution_steps:
            self.logger.warning(f"  - {step}")

        return response

    def handle_result(self, result) -> ErrorResponse:
        """Handle a failed GitSyncResult or StepResult."""
        category = result.category or ErrorCategory.CONFIGURATION
        return self.handle_step_failure(
            category,
            result.message,
            result.error_code or "UNKNOWN_ERROR",
            context={'operation': result.operation}
        )

