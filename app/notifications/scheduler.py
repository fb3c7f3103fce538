"""Cron triggers for the weekly digests.

The scheduler only decides *when*; the digest actions in
app.notifications.weekly decide *what* and are testable without a clock.
`BackgroundScheduler.shutdown()` cancels pending runs.
"""

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from loguru import logger

from app.calendar.store import CalendarStore
from app.config.settings import Settings
from app.notifications.mailer import Mailer
from app.notifications.weekly import send_final_plan, send_weekly_proposal

PROPOSAL_JOB_ID = "weekly_proposal"
FINAL_PLAN_JOB_ID = "weekly_final_plan"


def run_weekly_proposal(store: CalendarStore, mailer: Mailer, recipient: str) -> None:
    logger.info("[SCHEDULER] Running Saturday morning proposal email")
    try:
        send_weekly_proposal(store, mailer, recipient)
    except Exception as e:
        logger.exception(f"[SCHEDULER] Proposal job failed: {e}")


def run_final_plan(store: CalendarStore, mailer: Mailer, recipient: str) -> None:
    logger.info("[SCHEDULER] Running Sunday midday final-plan email")
    try:
        send_final_plan(store, mailer, recipient)
    except Exception as e:
        logger.exception(f"[SCHEDULER] Final-plan job failed: {e}")


def build_scheduler(store: CalendarStore, mailer: Mailer, settings: Settings) -> BackgroundScheduler:
    """Create (but do not start) the digest scheduler.

    Jobs:
    - Saturday 09:00: proposed plan for next week
    - Sunday 12:00: final plan for next week
    """
    scheduler = BackgroundScheduler(timezone=settings.scheduler_timezone)
    recipient = settings.recipient
    scheduler.add_job(
        run_weekly_proposal,
        trigger=CronTrigger(day_of_week="sat", hour=9, minute=0, timezone=settings.scheduler_timezone),
        args=[store, mailer, recipient],
        id=PROPOSAL_JOB_ID,
        name="Weekly proposal email",
        replace_existing=True,
    )
    scheduler.add_job(
        run_final_plan,
        trigger=CronTrigger(day_of_week="sun", hour=12, minute=0, timezone=settings.scheduler_timezone),
        args=[store, mailer, recipient],
        id=FINAL_PLAN_JOB_ID,
        name="Weekly final-plan email",
        replace_existing=True,
    )
    return scheduler
