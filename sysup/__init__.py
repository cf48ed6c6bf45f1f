"""sysup — keep a workstation's package managers up to date in one run."""

__version__ = "0.1.0"
