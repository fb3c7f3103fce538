"""Loguru sinks shared by the server and the operator CLI.

The console sink is human-readable unless LOG_JSON is set. The file sink,
enabled by LOG_FILE, always writes one JSON record per line so the weekly
digest and sync history can be grepped or shipped elsewhere.
"""

import sys
from pathlib import Path

from loguru import logger

from app.config.settings import Settings

CONSOLE_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
DEBUG_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(settings: Settings, console_level: str | None = None) -> list[int]:
    """Replace every loguru sink with the ones `settings` asks for.

    Args:
        settings: Source of LOG_LEVEL, LOG_JSON, LOG_FILE, LOG_ROTATION and LOG_RETENTION
        console_level: Override for the console sink only (the CLI keeps it
            at WARNING so command output stays readable)

    Returns:
        Ids of the sinks added, console first
    """
    logger.remove()

    level = console_level or settings.log_level
    handler_ids = [
        logger.add(
            sys.stderr,
            format=DEBUG_CONSOLE_FORMAT if level == "DEBUG" else CONSOLE_FORMAT,
            level=level,
            serialize=settings.log_json,
            colorize=not settings.log_json,
        )
    ]

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler_ids.append(
            logger.add(
                log_path,
                level=settings.log_level,
                serialize=True,
                rotation=settings.log_rotation,
                retention=settings.log_retention,
                encoding="utf-8",
            )
        )

    logger.debug(f"Logging configured (console={level}, json={settings.log_json}, file={settings.log_file or 'off'})")
    return handler_ids
