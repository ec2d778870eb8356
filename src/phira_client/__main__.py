"""Allow `python -m phira_client`."""

from .composition import app

app()
