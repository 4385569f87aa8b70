"""Timing utilities for bootstrap steps and git commands."""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Optional, Any, Generator


@dataclass
class PerformanceMetrics:
    """Timing of one step or command."""
    operation: str
    duration: float
    start_time: float
    end_time: float
    context: Optional[Dict[str, Any]] = None
    success: bool = True


class PerformanceLogger:
    """
    Performance logger for bootstrap steps.

    Provides a timing context manager and keeps the last metrics recorded
    for each operation name.
    """

    def __init__(self, logger_name: str = 'rsetup.performance'):
        """
        Initialize performance logger.

        Args:
            logger_name: Name for the logger instance
        """
        self.logger = logging.getLogger(logger_name)
        self._metrics: Dict[str, PerformanceMetrics] = {}

    @contextmanager
    def time_operation(
        self,
        operation: str,
        context: Optional[Dict[str, Any]] = None,
        log_level: int = logging.DEBUG
    ) -> Generator[None, None, None]:
        """
        Context manager for timing operations.

        Args:
            operation: Name of the operation being timed
            context: Additional context information
            log_level: Logging level for performance messages
        """
        start_time = time.time()
        self.logger.log(log_level, f"⏱️ Starting {operation}")

        success = True
        try:
            yield
        except Exception as e:
            success = False
            self.logger.error(f"❌ {operation} failed after {time.time() - start_time:.3f}s: {e}")
            raise
        finally:
            end_time = time.time()
            duration = end_time - start_time

            self._metrics[operation] = PerformanceMetrics(
                operation=operation,
                duration=duration,
                start_time=start_time,
                end_time=end_time,
                context=context,
                success=success
            )

            if success:
                self.logger.log(log_level, f"✅ {operation} completed in {duration:.3f}s")
                if context:
                    context_str = ", ".join(f"{k}={v}" for k, v in context.items())
                    self.logger.debug(f"📊 {operation} context: {context_str}")

    def log_git_command_performance(self, command: str, duration: float, success: bool = True) -> None:
        """Log how long a git command took, warning on slow network operations."""
        status_icon = "✅" if success else "❌"
        self.logger.debug(f"{status_icon} Git command '{command}' completed in {duration:.3f}s")

        if duration > 30.0:
            self.logger.warning(f"⚠️ Slow Git operation detected: '{command}' took {duration:.3f}s")

    def get_metrics(self, operation: str) -> Optional[PerformanceMetrics]:
        return self._metrics.get(operation)

    def total_duration(self) -> float:
        return sum(metrics.duration for metrics in self._metrics.values())
