"""Tests for the shared loguru configuration."""

import json

import pytest
from loguru import logger

from app.config.settings import Settings
from app.core.logger import configure_logging


@pytest.fixture(autouse=True)
def reset_sinks():
    yield
    logger.remove()


class TestConfigureLogging:
    def test_console_only_without_log_file(self, test_settings):
        assert len(configure_logging(test_settings)) == 1

    def test_file_sink_writes_json_lines(self, tmp_path, data_file):
        log_file = tmp_path / "logs" / "calendar.log"
        settings = Settings(DATA_FILE=str(data_file), LOG_FILE=str(log_file), LOG_LEVEL="info")

        configure_logging(settings, console_level="WARNING")
        logger.info("[SYNC] Schedule replaced")
        logger.remove()

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert record["record"]["message"] == "[SYNC] Schedule replaced"
        assert record["record"]["level"]["name"] == "INFO"

    def test_file_sink_respects_log_level(self, tmp_path, data_file):
        log_file = tmp_path / "calendar.log"
        settings = Settings(DATA_FILE=str(data_file), LOG_FILE=str(log_file), LOG_LEVEL="WARNING")

        configure_logging(settings)
        logger.info("routine")
        logger.warning("attention")
        logger.remove()

        messages = [json.loads(line)["record"]["message"] for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert messages == ["attention"]
