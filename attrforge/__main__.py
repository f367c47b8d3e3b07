"""Allow `python -m attrforge`."""

from .cli import app

app()
