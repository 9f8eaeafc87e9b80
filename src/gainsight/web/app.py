"""FastAPI application for the gainsight web interface."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from .. import __version__
from ..db.engine import get_db_path, init_db
from .routers import dashboard, insights, logs

TEMPLATES_DIR = Path(__file__).parent / "templates"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup if the database is new."""
    db_path = app.state.db_path
    if not db_path.exists():
        await init_db(db_path)
    yield


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="gainsight",
        description="Workout, bodyweight and calorie insights",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.db_path = db_path or get_db_path()
    app.state.templates = Jinja2Templates(directory=TEMPLATES_DIR)

    app.include_router(insights.router)
    app.include_router(logs.router)
    app.include_router(dashboard.router)

    @app.get("/", response_class=HTMLResponse)
    async def root(request: Request):
        """Root redirect to the insights page."""
        return RedirectResponse(url="/insights", status_code=302)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
