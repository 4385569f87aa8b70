"""Git repository synchronization for rsetup."""

from .client import GitClient
from .error_types import ErrorCategory, FailureReason
from .repository_info import LocalRepositoryState, SyncConfig
from .synchronizer import RepositorySynchronizer, synchronize_repository
from .utils import GitCommandResult, GitSyncResult

__all__ = [
    'GitClient',
    'ErrorCategory',
    'FailureReason',
    'LocalRepositoryState',
    'SyncConfig',
    'RepositorySynchronizer',
    'synchronize_repository',
    'GitCommandResult',
    'GitSyncResult'
]
