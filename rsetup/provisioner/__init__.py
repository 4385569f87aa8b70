"""R package provisioning for rsetup."""

from .r_script import render_r_script
from .runner import PackageProvisioner

__all__ = ['render_r_script', 'PackageProvisioner']
