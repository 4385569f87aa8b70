"""Global git identity and credential helper configuration."""

import logging
from typing import Callable, Optional

from .config import Config
from .git_sync.client import GitClient
from .git_sync.error_types import ErrorCategory
from .results import StepResult


def _failure(message: str, error_code: str) -> StepResult:
    return StepResult(
        success=False,
        message=message,
        operation="configure_git_identity",
        error_code=error_code,
        category=ErrorCategory.CONFIGURATION
    )


def _ask(prompt: Callable[[str], str], question: str) -> Optional[str]:
    try:
        answer = prompt(question)
    except EOFError:
        return None
    return answer.strip() or None


def configure_git_identity(
    config: Config,
    client: Optional[GitClient] = None,
    prompt: Callable[[str], str] = input
) -> StepResult:
    """
    Read the global git identity, writing it only when absent.

    Missing values come from the configuration first and from ``prompt``
    second. The credential helper is set only when none is configured.

    Returns:
        StepResult with ``details['user_name']`` set to the active git user
    """
    logger = logging.getLogger('rsetup.identity')
    client = client or GitClient()

    user_name = client.get_global_config("user.name")
    if user_name:
        logger.info(f"✓ Already logged in as: {user_name}")
    else:
        logger.warning("Setting up Git configuration...")
        user_name = config.git_user_name or _ask(prompt, "Enter your GitHub username: ")
        user_email = config.git_user_email or _ask(prompt, "Enter your GitHub email: ")

        if not user_name or not user_email:
            return _failure("Git user name and email are required", "IDENTITY_MISSING")

        for key, value in (("user.name", user_name), ("user.email", user_email)):
            outcome = client.set_global_config(key, value)
            if not outcome.success:
                return _failure(f"Failed to set {key}: {outcome.detail}", "IDENTITY_WRITE_FAILED")

        logger.info(f"✓ Git configured for {user_name}")

    credential_helper = client.get_global_config("credential.helper")
    if not credential_helper:
        outcome = client.set_global_config("credential.helper", config.credential_helper)
        if not outcome.success:
            return _failure(f"Failed to set credential.helper: {outcome.detail}", "CREDENTIAL_HELPER_FAILED")
        credential_helper = config.credential_helper
        logger.info("✓ Credential helper configured")

    return StepResult(
        success=True,
        message=f"Git identity configured for {user_name}",
        operation="configure_git_identity",
        details={'user_name': user_name, 'credential_helper': credential_helper}
    )
