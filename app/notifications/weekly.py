"""Weekly digest emails: Saturday proposal and Sunday final plan.

Both actions read a snapshot of the store for the upcoming Monday's week and
mail it to the operator. They never modify the schedule, and a failed send
is logged and dropped (no retry within the same trigger).
"""

from dataclasses import dataclass
from datetime import date

from loguru import logger

from app.calendar.grid import is_empty
from app.calendar.store import CalendarStore
from app.calendar.week_keys import format_long, key_for_date, next_monday
from app.notifications.digest import build_digest
from app.notifications.mailer import MailDispatchError, Mailer, OutgoingEmail

_FOOTER = '<p style="color: #666; margin-top: 20px;"><em>This is an automated email from Eva\'s Calendar.</em></p>'


@dataclass(frozen=True)
class DigestKind:
    """Wording for one scheduled digest variant."""

    name: str
    subject_label: str
    intro: str


PROPOSAL = DigestKind(
    name="proposal",
    subject_label="Proposed Plan",
    intro="Here's the proposed schedule for next week. Please review and make any necessary changes.",
)

FINAL_PLAN = DigestKind(
    name="final",
    subject_label="Final Plan",
    intro="Here's the final schedule for next week.",
)


def compose_weekly_email(store: CalendarStore, kind: DigestKind, recipient: str, today: date | None = None) -> OutgoingEmail:
    """Build the digest email for the week starting on the upcoming Monday."""
    monday = next_monday(today or date.today())
    week_key = key_for_date(monday)
    grid = store.snapshot().week(week_key)
    if is_empty(grid):
        logger.info(f"[DIGEST] Nobody scheduled for {week_key}, sending empty grid")

    digest = build_digest(grid, monday)
    week_label = format_long(monday)
    return OutgoingEmail(
        to=recipient,
        subject=f"📅 Eva's Calendar: {kind.subject_label} for Week of {week_label}",
        html=f"<p>Hi,</p><p>{kind.intro}</p>{digest.html}{_FOOTER}",
        text=f"Hi,\n\n{kind.intro}\n\n{digest.text}\nThis is an automated email from Eva's Calendar.\n",
    )


def _send_weekly(store: CalendarStore, mailer: Mailer, recipient: str, kind: DigestKind, today: date | None) -> bool:
    email = compose_weekly_email(store, kind, recipient, today)
    try:
        mailer.send(email)
    except MailDispatchError as e:
        logger.error(f"[DIGEST] Weekly {kind.name} email failed: {e}")
        return False
    logger.info(f"[DIGEST] Weekly {kind.name} email sent to {recipient}")
    return True


def send_weekly_proposal(store: CalendarStore, mailer: Mailer, recipient: str, today: date | None = None) -> bool:
    """Send the Saturday 'proposed plan' digest. Returns whether it was sent."""
    return _send_weekly(store, mailer, recipient, PROPOSAL, today)


def send_final_plan(store: CalendarStore, mailer: Mailer, recipient: str, today: date | None = None) -> bool:
    """Send the Sunday 'final plan' digest. Returns whether it was sent."""
    return _send_weekly(store, mailer, recipient, FINAL_PLAN, today)
