"""Dashboard routes."""

from datetime import date
from pathlib import Path

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ...services.dashboard import DashboardService
from ..dependencies import get_db_path, get_user_id

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard")
async def dashboard_json(
    split: str | None = Query(None),
    as_of: date | None = Query(None),
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """Log counts, latest entries and the last session of each split."""
    result = await DashboardService(db_path).load(user_id, split=split, as_of=as_of)

    if not result.ok:
        return JSONResponse(result.to_dict(), status_code=500)
    return result.to_dict()
