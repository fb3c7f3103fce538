"""Ad-hoc email endpoint used by the board's "email this plan" action."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, Field

from app.api.dependencies.services import get_mailer, get_settings
from app.config.settings import Settings
from app.notifications.mailer import MailDispatchError, Mailer, OutgoingEmail

router = APIRouter(prefix="/api", tags=["email"])


class SendEmailRequest(BaseModel):
    """Email composed by the client."""

    to: str | None = Field(default=None, description="Recipient; defaults to the operator address")
    subject: str = Field(..., min_length=1, max_length=300)
    html: str | None = Field(default=None, description="HTML body")
    text: str | None = Field(default=None, description="Plain-text body")


class SendEmailResponse(BaseModel):
    success: bool
    message: str


@router.post("/send-email", response_model=SendEmailResponse)
def send_email(
    request: SendEmailRequest,
    mailer: Mailer = Depends(get_mailer),
    settings: Settings = Depends(get_settings),
):
    """Send one email through the configured mail provider.

    Returns:
        200 with success message, or 500 with ``{success: false, error}``
    """
    recipient = request.to or settings.recipient
    logger.info(f"[EMAIL] Ad-hoc send requested to {recipient}: {request.subject}")
    try:
        mailer.send(OutgoingEmail(to=recipient, subject=request.subject, html=request.html, text=request.text))
    except MailDispatchError as e:
        logger.error(f"[EMAIL] Ad-hoc send failed: {e}")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})
    return SendEmailResponse(success=True, message="Email sent successfully")
