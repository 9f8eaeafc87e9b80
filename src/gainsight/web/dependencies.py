"""Request dependencies shared by the routers."""

from pathlib import Path

from fastapi import Header, Request

from .. import config


def get_templates(request: Request):
    """Get templates from app state."""
    return request.app.state.templates


def get_db_path(request: Request) -> Path:
    """Database the app was created with."""
    return request.app.state.db_path


def get_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Caller identity, passed explicitly in the X-User-Id header."""
    return x_user_id or config.DEFAULT_USER_ID
