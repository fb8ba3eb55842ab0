"""Allow running winprov as ``python -m winprov``."""

from winprov.cli.main import app

app()
