"""
rsetup - bootstrap an R-Studio analysis environment.

Prepares the workspace directory, configures the global git identity,
clones or synchronizes the course repository and installs the R package
chain (cmdstanr, CmdStan, brms, tidyverse).
"""

__version__ = "1.0.0"
__description__ = "R-Studio analysis environment bootstrap"

from .cli import main

__all__ = ["main"]
