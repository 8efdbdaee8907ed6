# wikiexclude/cli/__init__.py
from __future__ import annotations
from wikiexclude.cli.generic import app
from wikiexclude.cli.aliases import aliases_app

app.add_typer(aliases_app, name="aliases", help="Special page alias lookup")

# Expose the main app only
__all__ = ["app"]
