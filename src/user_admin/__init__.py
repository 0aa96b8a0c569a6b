"""User admin service.

An in-memory user store, a read-only external user source, and the merged
directory listing built from both, exposed over a FastAPI HTTP API and a
typer CLI.
"""

__version__ = "0.1.0"
