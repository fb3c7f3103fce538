"""Shared calendar sync endpoints.

GET returns the whole schedule; POST/PUT replace it wholesale. The body is
read raw so that unparseable JSON is reported as a malformed schedule rather
than a framework validation error, and the store stays untouched either way.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.api.dependencies.services import get_gateway
from app.calendar.errors import MalformedStateError
from app.calendar.sync import SyncGateway

router = APIRouter(prefix="/api/calendar", tags=["calendar"])


@router.get("")
def get_calendar(gateway: SyncGateway = Depends(get_gateway)) -> dict:
    """Return the full schedule (empty default on first run)."""
    return gateway.fetch()


async def _replace_calendar(request: Request, gateway: SyncGateway) -> JSONResponse:
    body = await request.body()
    try:
        success = gateway.push(body)
    except MalformedStateError as e:
        logger.warning(f"[SYNC] Rejected malformed schedule from {request.client.host if request.client else 'unknown'}: {e} {e.details}")
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": str(e), "details": e.details},
        )
    # A failed durable write is still a 200 with success=false
    return JSONResponse(content={"success": success})


@router.post("")
async def save_calendar(request: Request, gateway: SyncGateway = Depends(get_gateway)) -> JSONResponse:
    """Replace the full schedule. Last writer wins."""
    return await _replace_calendar(request, gateway)


@router.put("")
async def put_calendar(request: Request, gateway: SyncGateway = Depends(get_gateway)) -> JSONResponse:
    """Alias of POST for clients that use PUT for whole-document replace."""
    return await _replace_calendar(request, gateway)
