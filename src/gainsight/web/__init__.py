"""Web interface for gainsight."""

from .app import create_app

__all__ = ["create_app"]
