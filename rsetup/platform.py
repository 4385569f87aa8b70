"""Cross-platform helpers for locating external tools and host resources."""

import platform
import shutil
import subprocess
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any, Union

import psutil


class PlatformType(Enum):
    """Supported platform types."""
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    UNKNOWN = "unknown"


class PlatformInfo:
    """Platform information and utilities."""

    def __init__(self):
        """Initialize platform detection."""
        self._platform_type = self._detect_platform()

    def _detect_platform(self) -> PlatformType:
        """Detect the current platform."""
        system = platform.system().lower()

        if system == "windows":
            return PlatformType.WINDOWS
        elif system == "darwin":
            return PlatformType.MACOS
        elif system == "linux":
            return PlatformType.LINUX
        else:
            return PlatformType.UNKNOWN

    @property
    def platform_type(self) -> PlatformType:
        return self._platform_type

    @property
    def is_windows(self) -> bool:
        return self._platform_type == PlatformType.WINDOWS

    def get_system_info(self) -> Dict[str, Any]:
        """Get the host details logged at startup."""
        return {
            'platform': self._platform_type.value,
            'release': platform.release(),
            'machine': platform.machine(),
            'python_version': platform.python_version(),
            'cpu_count': get_cpu_count(),
        }


_platform_info: Optional[PlatformInfo] = None


def get_platform_info() -> PlatformInfo:
    """Get the global platform info instance."""
    global _platform_info
    if _platform_info is None:
        _platform_info = PlatformInfo()
    return _platform_info


def normalize_path(path: Union[str, Path]) -> Path:
    """
    Normalize a path for the current platform.

    Args:
        path: Path to normalize

    Returns:
        Normalized Path object
    """
    if isinstance(path, str):
        path = Path(path)

    # Expand user home directory (~) first, then resolve to absolute path
    return path.expanduser().resolve()


def get_cpu_count() -> int:
    """Number of logical cores available for native toolchain builds."""
    count = psutil.cpu_count(logical=True)
    return count if count else 1


def get_git_executable() -> str:
    """Get the Git executable name for the current platform."""
    return "git.exe" if get_platform_info().is_windows else "git"


def get_rscript_executable() -> str:
    """Get the Rscript executable name for the current platform."""
    return "Rscript.exe" if get_platform_info().is_windows else "Rscript"


def find_rscript() -> Optional[str]:
    """Return the full path of Rscript, or None when R is not installed."""
    return shutil.which(get_rscript_executable())


def validate_git_availability() -> tuple[bool, Optional[str]]:
    """
    Validate that Git is available on the current platform.

    Returns:
        Tuple of (is_available, error_message)
    """
    git_cmd = get_git_executable()

    try:
        result = subprocess.run(
            [git_cmd, "--version"],
            capture_output=True,
            text=True,
            timeout=10
        )

        if result.returncode == 0:
            return True, None
        else:
            return False, f"Git command failed: {result.stderr}"

    except FileNotFoundError:
        return False, f"Git executable '{git_cmd}' not found"
    except subprocess.TimeoutExpired:
        return False, "Git command timed out"
    except OSError as e:
        return False, f"Error checking Git availability: {e}"
