"""CLI commands for gainsight."""

from .dashboard import dashboard
from .init import init
from .insights import insights
from .log import log
from .serve import serve

__all__ = [
    "dashboard",
    "init",
    "insights",
    "log",
    "serve",
]
