"""Digest export endpoint for one week.

Read-only: snapshot -> digest. Serves the same rendering the weekly emails
use, as a download, so it can be printed or attached elsewhere.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import Response
from loguru import logger

from app.api.dependencies.services import get_store
from app.calendar.constants import MAX_WEEK_INDEX
from app.calendar.store import CalendarStore
from app.calendar.week_keys import key_for, start_date_for
from app.notifications.digest import build_digest

router = APIRouter(prefix="/api/export", tags=["export"])


@router.get("/weeks/{week_index}")
def export_week(
    week_index: int = Path(..., ge=0, le=MAX_WEEK_INDEX, description="Zero-based week index from the epoch Monday"),
    fmt: Literal["html", "text"] = Query("html", alias="format"),
    store: CalendarStore = Depends(get_store),
):
    """Export one week's digest.

    Args:
        week_index: Week to export
        fmt: ``html`` (standalone document) or ``text``

    Returns:
        Downloadable digest; absent weeks render as an empty grid
    """
    week_key = key_for(week_index)
    week_start = start_date_for(week_index)
    logger.info(f"Exporting {week_key} as {fmt}")

    digest = build_digest(store.snapshot().week(week_key), week_start)

    if fmt == "text":
        return Response(
            digest.text,
            media_type="text/plain; charset=utf-8",
            headers={"Content-Disposition": f"attachment; filename=calendar_{week_start.isoformat()}.txt"},
        )

    document = (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        f"<title>Eva's Calendar - {week_key}</title>"
        "<style>body { font-family: Arial, sans-serif; padding: 20px; } @media print { body { padding: 0; } }</style>"
        f"</head><body>{digest.html}</body></html>"
    )
    return Response(
        document,
        media_type="text/html; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename=calendar_{week_start.isoformat()}.html"},
    )
