import asyncio
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from loguru import logger

from app.api.calendar import router as calendar_router
from app.api.email import router as email_router
from app.api.export.week_export import router as export_router
from app.calendar.store import CalendarStore
from app.calendar.sync import SyncGateway
from app.config.settings import Settings, settings as default_settings
from app.core.logger import configure_logging
from app.notifications.mailer import Mailer, SmtpMailer
from app.notifications.scheduler import build_scheduler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - start the digest scheduler on startup.

    Note: FastAPI requires async for lifespan context manager,
    even if no await operations are used.
    """
    scheduler = None
    if app.state.settings.scheduler_enabled:
        scheduler = build_scheduler(app.state.store, app.state.mailer, app.state.settings)
        scheduler.start()
        logger.info(
            f"[SCHEDULER] Weekly emails scheduled ({app.state.settings.scheduler_timezone}): "
            "Saturday 09:00 proposal, Sunday 12:00 final plan"
        )
    else:
        logger.info("[SCHEDULER] Disabled by SCHEDULER_ENABLED=false")

    await asyncio.sleep(0)
    yield

    if scheduler is not None:
        scheduler.shutdown(wait=False)
        logger.info("[SCHEDULER] Stopped weekly email scheduler")


def create_app(
    settings: Settings | None = None,
    store: CalendarStore | None = None,
    mailer: Mailer | None = None,
) -> FastAPI:
    """Build the application around an explicitly owned store.

    Args:
        settings: Configuration; defaults to the environment-loaded settings
        store: Calendar store; defaults to one on ``settings.data_file``
        mailer: Mail collaborator; defaults to SMTP from settings
    """
    settings = settings or default_settings
    if store is None:
        store = CalendarStore(settings.data_file)
        store.load()

    app = FastAPI(title="Eva's Calendar", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.gateway = SyncGateway(store)
    app.state.mailer = mailer or SmtpMailer(settings)

    app.include_router(calendar_router)
    app.include_router(email_router)
    app.include_router(export_router)

    @app.get("/api/health")
    def health():
        return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests."""
        logger.debug(f"Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.debug(f"Response: {response.status_code} for {request.method} {request.url.path}")
        return response

    @app.get("/", response_class=HTMLResponse)
    def root():
        return """
        <html>
            <head>
                <title>Eva's Calendar</title>
            </head>
            <body>
                <h1>Eva's Calendar</h1>
                <p>Shared weekly household schedule</p>
                <h2>Available Endpoints:</h2>
                <ul>
                    <li><a href="/api/calendar">GET /api/calendar</a> - full schedule</li>
                    <li>POST /api/calendar - replace the schedule</li>
                    <li>POST /api/send-email - send an email</li>
                    <li><a href="/api/export/weeks/0">GET /api/export/weeks/{index}</a> - week digest</li>
                    <li><a href="/api/health">GET /api/health</a></li>
                    <li><a href="/docs">API Documentation (Swagger)</a></li>
                </ul>
            </body>
        </html>
        """

    logger.info(f"FastAPI application initialized (data_file={store.path})")
    return app


configure_logging(default_settings)

app = create_app()
