"""End-to-end tests for the calendar sync endpoints."""

from unittest.mock import patch

from app.calendar.constants import BAND_IDS, DAYS
from app.calendar.grid import get_slot
from app.calendar.store import CalendarStore
from app.calendar.week_keys import key_for

EMPTY = {"currentWeekIndex": 0, "weeks": {}, "customPeople": []}


def _lisa_state() -> dict:
    return {"currentWeekIndex": 2, "weeks": {key_for(2): {"Wed": {"afternoon": ["Lisa"]}}}, "customPeople": []}


class TestGetCalendar:
    def test_first_run_returns_empty_state(self, client):
        response = client.get("/api/calendar")
        assert response.status_code == 200
        assert response.json() == EMPTY


class TestSaveCalendar:
    def test_put_then_get_single_assignment(self, client):
        response = client.post("/api/calendar", json=_lisa_state())
        assert response.status_code == 200
        assert response.json() == {"success": True}

        state = client.get("/api/calendar").json()
        week = state["weeks"][key_for(2)]
        assert week["Wed"]["afternoon"] == ["Lisa"]
        for day in DAYS:
            for band in BAND_IDS:
                if (day, band) != ("Wed", "afternoon"):
                    assert get_slot(week, day, band) == []

    def test_put_alias(self, client):
        assert client.put("/api/calendar", json=_lisa_state()).json() == {"success": True}
        assert client.get("/api/calendar").json() == _lisa_state()

    def test_persisted_to_disk(self, client, data_file):
        client.post("/api/calendar", json=_lisa_state())
        assert CalendarStore(data_file).load().to_payload() == _lisa_state()

    def test_last_writer_wins(self, client):
        client.post("/api/calendar", json=_lisa_state())
        other = {"currentWeekIndex": 0, "weeks": {key_for(0): {"Mon": {"morning": ["Mum"]}}}, "customPeople": ["Jo"]}
        client.post("/api/calendar", json=other)
        assert client.get("/api/calendar").json() == other

    def test_malformed_body_leaves_state_unchanged(self, client):
        client.post("/api/calendar", json=_lisa_state())
        response = client.post("/api/calendar", content=b"this is not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert client.get("/api/calendar").json() == _lisa_state()

    def test_schema_violation_rejected(self, client):
        client.post("/api/calendar", json=_lisa_state())
        bad = {"weeks": {key_for(0): {"Mon": {"brunch": ["Mum"]}}}}
        response = client.post("/api/calendar", json=bad)
        assert response.status_code == 400
        assert response.json()["details"]
        assert client.get("/api/calendar").json() == _lisa_state()

    def test_huge_week_index_rejected(self, client):
        client.post("/api/calendar", json=_lisa_state())
        response = client.post("/api/calendar", json={"currentWeekIndex": 10**12})
        assert response.status_code == 400
        assert client.get("/api/calendar").json() == _lisa_state()

    def test_week_key_off_the_board_rejected(self, client):
        client.post("/api/calendar", json=_lisa_state())
        response = client.post("/api/calendar", json={"weeks": {"week_2025-01-14": {"Tue": {"morning": ["Mum"]}}}})
        assert response.status_code == 400
        assert "week_2025-01-14" in response.json()["details"][0]
        assert client.get("/api/calendar").json() == _lisa_state()

    def test_deeply_nested_body_rejected(self, client):
        response = client.post("/api/calendar", content="[" * 100000 + "]" * 100000, headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_failed_write_reports_success_false(self, client):
        with patch.object(CalendarStore, "_write", return_value=False):
            response = client.post("/api/calendar", json=_lisa_state())
        assert response.status_code == 200
        assert response.json() == {"success": False}


class TestHealth:
    def test_health(self, client):
        body = client.get("/api/health").json()
        assert body["status"] == "ok"
        assert "T" in body["timestamp"]

    def test_root_lists_endpoints(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "/api/calendar" in response.text
