"""Tests for the scheduled proposal / final-plan digests."""

from datetime import date

from app.calendar.state import ScheduleState
from app.notifications.weekly import FINAL_PLAN, PROPOSAL, compose_weekly_email, send_final_plan, send_weekly_proposal

SATURDAY = date(2025, 1, 25)


def _seed(store):
    store.replace(ScheduleState.model_validate({"weeks": {"week_2025-01-27": {"Wed": {"afternoon": ["Lisa"]}}}}))


class TestComposeWeeklyEmail:
    def test_uses_next_mondays_week(self, store):
        _seed(store)
        email = compose_weekly_email(store, PROPOSAL, "operator@example.com", today=SATURDAY)
        assert email.to == "operator@example.com"
        assert email.subject == "📅 Eva's Calendar: Proposed Plan for Week of 27 January 2025"
        assert "  1-5pm: Lisa" in email.text
        assert "proposed schedule" in email.html

    def test_absent_week_renders_empty(self, store):
        email = compose_weekly_email(store, FINAL_PLAN, "operator@example.com", today=date(2025, 3, 1))
        assert "Final Plan for Week of 3 March 2025" in email.subject
        assert email.text.count(": -") == 28


class TestSendWeekly:
    def test_proposal_sent(self, store, mailer):
        _seed(store)
        assert send_weekly_proposal(store, mailer, "operator@example.com", today=SATURDAY) is True
        assert len(mailer.sent) == 1
        assert "Proposed Plan" in mailer.sent[0].subject

    def test_final_plan_sent(self, store, mailer):
        assert send_final_plan(store, mailer, "operator@example.com", today=date(2025, 1, 26)) is True
        assert "Final Plan for Week of 27 January 2025" in mailer.sent[0].subject
        assert "final schedule" in mailer.sent[0].html

    def test_dispatch_failure_is_logged_not_raised(self, store, failing_mailer):
        assert send_weekly_proposal(store, failing_mailer, "operator@example.com", today=SATURDAY) is False

    def test_actions_do_not_mutate_store(self, store, mailer):
        _seed(store)
        before = store.snapshot()
        send_weekly_proposal(store, mailer, "operator@example.com", today=SATURDAY)
        send_final_plan(store, mailer, "operator@example.com", today=SATURDAY)
        assert store.snapshot() == before
