"""Tests for the digest cron scheduler wiring."""

from unittest.mock import MagicMock, patch

from apscheduler.triggers.cron import CronTrigger

from app.notifications.scheduler import (
    FINAL_PLAN_JOB_ID,
    PROPOSAL_JOB_ID,
    build_scheduler,
    run_final_plan,
    run_weekly_proposal,
)


class TestBuildScheduler:
    def test_registers_both_jobs(self, store, mailer, test_settings):
        scheduler = build_scheduler(store, mailer, test_settings)
        jobs = {job.id: job for job in scheduler.get_jobs()}
        assert set(jobs) == {PROPOSAL_JOB_ID, FINAL_PLAN_JOB_ID}
        assert all(isinstance(job.trigger, CronTrigger) for job in jobs.values())
        assert jobs[PROPOSAL_JOB_ID].args == (store, mailer, "operator@example.com")

    def test_trigger_times(self, store, mailer, test_settings):
        scheduler = build_scheduler(store, mailer, test_settings)
        proposal = str(scheduler.get_job(PROPOSAL_JOB_ID).trigger)
        final = str(scheduler.get_job(FINAL_PLAN_JOB_ID).trigger)
        assert "day_of_week='sat'" in proposal and "hour='9'" in proposal
        assert "day_of_week='sun'" in final and "hour='12'" in final

    def test_not_started(self, store, mailer, test_settings):
        assert build_scheduler(store, mailer, test_settings).running is False


class TestJobWrappers:
    def test_proposal_job_sends(self, store, mailer):
        run_weekly_proposal(store, mailer, "operator@example.com")
        assert len(mailer.sent) == 1

    def test_final_job_sends(self, store, mailer):
        run_final_plan(store, mailer, "operator@example.com")
        assert "Final Plan" in mailer.sent[0].subject

    @patch("app.notifications.scheduler.send_weekly_proposal", side_effect=RuntimeError("unexpected"))
    def test_job_swallows_and_logs_errors(self, mock_send: MagicMock, store, mailer):
        run_weekly_proposal(store, mailer, "operator@example.com")
        mock_send.assert_called_once()
