"""Root conftest for all tests.

Every test gets its own calendar file under tmp_path; nothing touches the
configured DATA_FILE or a real SMTP server.
"""

import pytest
from fastapi.testclient import TestClient

from app.calendar.store import CalendarStore
from app.config.settings import Settings
from app.main import create_app
from app.notifications.mailer import MailDispatchError, OutgoingEmail


class RecordingMailer:
    """Mail collaborator double that records sends, or fails on demand."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[OutgoingEmail] = []

    def send(self, email: OutgoingEmail) -> None:
        if self.fail:
            raise MailDispatchError("provider unavailable")
        self.sent.append(email)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "calendar.json"


@pytest.fixture
def test_settings(data_file) -> Settings:
    return Settings(
        DATA_FILE=str(data_file),
        SMTP_HOST="smtp.example.com",
        SMTP_USER="calendar@example.com",
        NOTIFY_RECIPIENT="operator@example.com",
        SCHEDULER_ENABLED=False,
    )


@pytest.fixture
def store(data_file) -> CalendarStore:
    calendar_store = CalendarStore(data_file)
    calendar_store.load()
    return calendar_store


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def failing_mailer() -> RecordingMailer:
    return RecordingMailer(fail=True)


@pytest.fixture
def client(test_settings, store, mailer):
    """TestClient around an app wired to the isolated store and recording mailer."""
    application = create_app(settings=test_settings, store=store, mailer=mailer)
    with TestClient(application) as test_client:
        yield test_client
