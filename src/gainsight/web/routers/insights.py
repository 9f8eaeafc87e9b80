"""Insights routes."""

from datetime import date
from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse

from ... import config
from ...models.insights import AggregationMode
from ...services.insights import InsightsService
from ..dependencies import get_db_path, get_templates, get_user_id

router = APIRouter(tags=["insights"])


@router.get("/insights", response_class=HTMLResponse)
async def insights_page(
    request: Request,
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """Insights page."""
    templates = get_templates(request)

    service = InsightsService(db_path)
    result = await service.load(user_id)

    return templates.TemplateResponse(
        request,
        "insights.html",
        {
            "result": result,
            "view": result.view,
        },
    )


@router.get("/api/insights")
async def insights_json(
    mode: AggregationMode = Query(config.STRENGTH_AGGREGATION_MODE),
    as_of: date | None = Query(None),
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """Insights payload as JSON."""
    service = InsightsService(db_path, mode=mode)
    result = await service.load(user_id, as_of=as_of)

    if not result.ok:
        return JSONResponse(result.to_dict(), status_code=500)
    return result.to_dict()
