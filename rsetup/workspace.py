"""Workspace directory preparation."""

import logging
from pathlib import Path

from .git_sync.error_types import ErrorCategory
from .results import StepResult


def ensure_workspace(workspace_dir: Path) -> StepResult:
    """
    Make sure the workspace directory exists.

    An existing directory is left alone; the workspace is never removed.

    Args:
        workspace_dir: Directory to create if missing

    Returns:
        StepResult with ``details['created']`` telling whether mkdir happened
    """
    logger = logging.getLogger('rsetup.workspace')
    name = workspace_dir.name

    if workspace_dir.is_dir():
        logger.info(f"✓ Virtual environment '{name}' exists")
        return StepResult(
            success=True,
            message=f"Workspace '{name}' already exists",
            operation="ensure_workspace",
            details={'path': str(workspace_dir), 'created': False}
        )

    logger.info(f"Creating new virtual environment '{name}'...")
    try:
        workspace_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return StepResult(
            success=False,
            message=f"Cannot create workspace directory {workspace_dir}: {e}",
            operation="ensure_workspace",
            error_code="WORKSPACE_CREATE_FAILED",
            category=ErrorCategory.WORKSPACE,
            details={'path': str(workspace_dir)}
        )

    logger.info("✓ Virtual environment created")
    return StepResult(
        success=True,
        message=f"Workspace '{name}' created",
        operation="ensure_workspace",
        details={'path': str(workspace_dir), 'created': True}
    )
