"""Failure classification patterns and user-facing resolution guidance."""

from typing import Dict
from .error_types import ErrorCategory, ErrorResolution, FailureReason


def build_error_strategies() -> Dict[ErrorCategory, ErrorResolution]:
    """Build resolution guidance for each terminal error category."""
    return {
        ErrorCategory.CLONE_FAILURE: ErrorResolution(
            category=ErrorCategory.CLONE_FAILURE,
            user_message="Failed to clone repository",
            technical_message="git clone of the remote repository failed",
            resolution_steps=[
                "If authentication fails, you may need to use a Personal Access Token",
                "Generate one at: https://github.com/settings/tokens",
                "Verify the repository URL is correct and you have access to it",
                "Check your internet connection"
            ]
        ),

        ErrorCategory.INVALID_LOCAL_DIRECTORY: ErrorResolution(
            category=ErrorCategory.INVALID_LOCAL_DIRECTORY,
            user_message="Directory exists but is not a git repository",
            technical_message="Local path exists and is not a git working copy root",
            resolution_steps=[
                "The directory was left untouched",
                "Move or remove it manually if it does not contain data you need",
                "Run the setup again to clone a fresh copy"
            ]
        ),

        ErrorCategory.FETCH_PULL_FAILURE: ErrorResolution(
            category=ErrorCategory.FETCH_PULL_FAILURE,
            user_message="Failed to pull. Check your connection and credentials.",
            technical_message="git pull failed for every candidate branch",
            resolution_steps=[
                "Check your internet connection",
                "Verify your Git credentials are configured correctly",
                "Try running 'git config --global credential.helper' to check credential storage",
                "Resolve any merge conflicts in the repository and run the setup again"
            ]
        ),

        ErrorCategory.PROVISIONING_FAILURE: ErrorResolution(
            category=ErrorCategory.PROVISIONING_FAILURE,
            user_message="Error during R package setup",
            technical_message="Rscript exited with a non-zero status",
            resolution_steps=[
                "Scroll up for the R error output",
                "Make sure R and a C++ toolchain are installed",
                "Re-run the setup; already installed packages are skipped"
            ]
        ),

        ErrorCategory.CONFIGURATION: ErrorResolution(
            category=ErrorCategory.CONFIGURATION,
            user_message="Git configuration issue detected",
            technical_message="Global git identity or credential helper could not be configured",
            resolution_steps=[
                "Check your Git configuration with 'git config --global --list'",
                "Ensure user.name and user.email are configured",
                "Consider running 'git config --global --edit' to fix configuration"
            ]
        ),

        ErrorCategory.WORKSPACE: ErrorResolution(
            category=ErrorCategory.WORKSPACE,
            user_message="Could not create the workspace directory",
            technical_message="mkdir of the workspace directory failed",
            resolution_steps=[
                "Check that your home directory is writable",
                "Set RSETUP_WORKSPACE_ROOT to a writable location"
            ]
        )
    }


def build_error_patterns() -> Dict[str, FailureReason]:
    """Build mapping of git stderr fragments to failure reasons."""
    return {
        # Network errors
        "could not resolve host": FailureReason.NETWORK,
        "connection refused": FailureReason.NETWORK,
        "network is unreachable": FailureReason.NETWORK,
        "connection timed out": FailureReason.NETWORK,
        "no route to host": FailureReason.NETWORK,
        "temporary failure in name resolution": FailureReason.NETWORK,
        "timeout": FailureReason.NETWORK,

        # Authentication errors
        "authentication failed": FailureReason.AUTHENTICATION,
        "could not read username": FailureReason.AUTHENTICATION,
        "permission denied": FailureReason.AUTHENTICATION,
        "invalid credentials": FailureReason.AUTHENTICATION,
        "403": FailureReason.AUTHENTICATION,
        "401": FailureReason.AUTHENTICATION,

        # Repository access errors
        "repository not found": FailureReason.REPOSITORY_NOT_FOUND,
        "does not appear to be a git repository": FailureReason.REPOSITORY_NOT_FOUND,
        "not a git repository": FailureReason.NOT_A_REPOSITORY,

        # Branch errors
        "couldn't find remote ref": FailureReason.BRANCH_NOT_FOUND,
        "did not match any file(s) known to git": FailureReason.BRANCH_NOT_FOUND,
        "invalid reference": FailureReason.BRANCH_NOT_FOUND,
        "unknown revision": FailureReason.BRANCH_NOT_FOUND,

        # Merge conflicts
        "automatic merge failed": FailureReason.MERGE_CONFLICT,
        "would be overwritten by merge": FailureReason.MERGE_CONFLICT,
        "unmerged paths": FailureReason.MERGE_CONFLICT,
        "conflict": FailureReason.MERGE_CONFLICT,
    }
