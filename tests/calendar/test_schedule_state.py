"""Tests for ScheduleState parsing and schema validation."""

import pytest
from pydantic import ValidationError

from app.calendar.constants import MAX_WEEK_INDEX
from app.calendar.state import ScheduleState, validate_week_key


class TestScheduleStateDefaults:
    def test_empty_payload(self):
        assert ScheduleState.empty().to_payload() == {"currentWeekIndex": 0, "weeks": {}, "customPeople": []}

    def test_missing_fields_default(self):
        state = ScheduleState.model_validate({"weeks": {}})
        assert state.current_week_index == 0
        assert state.custom_people == []

    def test_unknown_top_level_fields_ignored(self):
        state = ScheduleState.model_validate({"currentWeekIndex": 3, "theme": "dark"})
        assert state.to_payload() == {"currentWeekIndex": 3, "weeks": {}, "customPeople": []}

    def test_accepts_field_names(self):
        state = ScheduleState(current_week_index=2, custom_people=["Ann"])
        assert state.to_payload()["customPeople"] == ["Ann"]


class TestScheduleStateValidation:
    def test_valid_sparse_week(self):
        state = ScheduleState.model_validate({"weeks": {"week_2025-01-27": {"Wed": {"afternoon": ["Lisa"]}}}})
        assert state.week("week_2025-01-27") == {"Wed": {"afternoon": ["Lisa"]}}

    @pytest.mark.parametrize(
        "weeks",
        [
            {"2025-01-27": {}},
            {"week_2025-13-01": {}},
            {"week_2025-01-14": {}},
            {"week_2025-01-06": {}},
            {"week_2025-01-27": {"Funday": {"morning": []}}},
            {"week_2025-01-27": {"Mon": {"brunch": []}}},
            {"week_2025-01-27": {"Mon": {"morning": [42]}}},
            {"week_2025-01-27": {"Mon": {"morning": "Mum"}}},
        ],
    )
    def test_rejects_bad_weeks(self, weeks):
        with pytest.raises(ValidationError):
            ScheduleState.model_validate({"weeks": weeks})

    @pytest.mark.parametrize("index", [-1, "2", 1.5, True, 10**12, MAX_WEEK_INDEX + 1])
    def test_rejects_bad_week_index(self, index):
        with pytest.raises(ValidationError):
            ScheduleState.model_validate({"currentWeekIndex": index})

    def test_accepts_last_representable_week_index(self):
        assert ScheduleState.model_validate({"currentWeekIndex": MAX_WEEK_INDEX}).current_week_index == MAX_WEEK_INDEX

    def test_rejects_non_string_custom_people(self):
        with pytest.raises(ValidationError):
            ScheduleState.model_validate({"customPeople": [1, 2]})


class TestValidateWeekKey:
    def test_epoch_monday(self):
        assert validate_week_key("week_2025-01-13") == "week_2025-01-13"

    def test_tuesday_rejected(self):
        with pytest.raises(ValueError, match="Monday"):
            validate_week_key("week_2025-01-14")

    def test_monday_before_epoch_rejected(self):
        with pytest.raises(ValueError, match="epoch"):
            validate_week_key("week_2024-12-30")
