"""Routers for the gainsight web interface."""
