"""Service dependencies.

The store, gateway and mailer are created once by the application factory
and hung off ``app.state``; routes receive them through these dependencies
so tests can build an app around an isolated store.
"""

from __future__ import annotations

from fastapi import Request

from app.calendar.store import CalendarStore
from app.calendar.sync import SyncGateway
from app.config.settings import Settings
from app.notifications.mailer import Mailer


def get_store(request: Request) -> CalendarStore:
    return request.app.state.store


def get_gateway(request: Request) -> SyncGateway:
    return request.app.state.gateway


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
