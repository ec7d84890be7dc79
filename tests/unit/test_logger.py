"""Tests for faasctl.lib.logger module."""

import json
import logging
import threading

import pytest

from faasctl.lib import logger


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    test_logger = logging.getLogger("faasctl-test")
    test_logger.handlers.clear()


@pytest.mark.unit
class TestSetupLogger:
    """Tests for setup_logger() function."""

    def test_text_mode(self, monkeypatch, capsys):
        """Text mode writes a readable line to stderr."""
        monkeypatch.delenv("FAASCTL_LOG_FORMAT", raising=False)

        test_logger = logger.setup_logger("faasctl-test", level="INFO")
        test_logger.info("Loaded stack file")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "faasctl-test" in captured.err
        assert "INFO" in captured.err
        assert "[MainThread]" in captured.err
        assert "Loaded stack file" in captured.err

    def test_json_mode(self, monkeypatch, capsys):
        """JSON mode renames levelname to severity."""
        monkeypatch.setenv("FAASCTL_LOG_FORMAT", "json")

        test_logger = logger.setup_logger("faasctl-test", level="INFO")
        test_logger.info("Building", extra={"function": "url-ping"})

        log_data = json.loads(capsys.readouterr().err.strip())
        assert log_data["severity"] == "INFO"
        assert log_data["message"] == "Building"
        assert log_data["function"] == "url-ping"
        assert "levelname" not in log_data

    def test_json_mode_records_worker_thread(self, capsys):
        test_logger = logger.setup_logger("faasctl-test", level="INFO", log_format="json")

        worker = threading.Thread(target=test_logger.info, args=("from worker",), name="worker-2")
        worker.start()
        worker.join()

        log_data = json.loads(capsys.readouterr().err.strip())
        assert log_data["thread"] == "worker-2"

    def test_level_from_environment(self, monkeypatch, capsys):
        """FAASCTL_LOG_LEVEL is used when no level is given."""
        monkeypatch.setenv("FAASCTL_LOG_LEVEL", "ERROR")
        monkeypatch.delenv("FAASCTL_LOG_FORMAT", raising=False)

        test_logger = logger.setup_logger("faasctl-test")
        test_logger.warning("hidden")
        test_logger.error("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_default_level_is_warning(self, monkeypatch):
        monkeypatch.delenv("FAASCTL_LOG_LEVEL", raising=False)

        test_logger = logger.setup_logger("faasctl-test")

        assert test_logger.level == logging.WARNING

    def test_no_duplicate_handlers(self):
        logger.setup_logger("faasctl-test")
        test_logger = logger.setup_logger("faasctl-test")

        assert len(test_logger.handlers) == 1
        assert test_logger.propagate is False
