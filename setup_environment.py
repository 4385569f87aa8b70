#!/usr/bin/env python3
"""
UCloud R-Studio setup.

Ensures the workspace directory, GitHub sync and Stan/brms setup. All
settings come from RSETUP_* environment variables (or a .env file).
"""

from rsetup.cli import main

if __name__ == "__main__":
    main()
