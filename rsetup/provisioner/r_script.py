"""Rendering of the embedded R package installation script."""

import re
from pathlib import Path
from string import Template
from typing import Iterable

TEMPLATE_PATH = Path(__file__).parent / "templates" / "setup_r_packages.R"

# CRAN package naming rules: letters, digits and dots, starting with a letter
_R_PACKAGE_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9.]*[A-Za-z0-9]$")
_URL = re.compile(r"^https?://[^\s\"']+$")


def validate_package_name(name: str) -> str:
    if not _R_PACKAGE_NAME.match(name):
        raise ValueError(f"Invalid R package name: {name!r}")
    return name


def render_r_script(packages: Iterable[str], cran_mirror: str, stan_repo: str, cores: int) -> str:
    """
    Render the R provisioning script.

    Args:
        packages: Packages installed with install_if_missing, in order
        cran_mirror: CRAN repository URL
        stan_repo: Repository URL cmdstanr is installed from
        cores: Parallel jobs used when building CmdStan

    Returns:
        The script source, ready to be written to disk
    """
    packages = [validate_package_name(name) for name in packages]
    for url in (cran_mirror, stan_repo):
        if not _URL.match(url):
            raise ValueError(f"Invalid repository URL: {url!r}")
    if cores < 1:
        raise ValueError("cores must be at least 1")

    install_calls = "\n".join(f'install_if_missing("{name}")' for name in packages)
    verification = "\n".join(
        f'cat("{name} version:", as.character(packageVersion("{name}")), "\\n")'
        for name in packages
    )

    template = Template(TEMPLATE_PATH.read_text(encoding='utf-8'))
    return template.substitute(
        cran_mirror=cran_mirror,
        stan_repo=stan_repo,
        cores=cores,
        install_calls=install_calls,
        verification=verification
    )
