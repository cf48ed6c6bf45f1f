"""Allow ``python -m sysup``."""

from sysup.main import cli

cli()
