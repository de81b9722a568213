"""Tests for logging configuration."""

import json
import logging

from diagnostic.logging_config import JSONFormatter, get_session_logger, setup_logging


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_formats_record_as_json(self):
        record = logging.LogRecord("diagnostic.test", logging.INFO, __file__, 10, "hello %s", ("world",), None)

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["logger"] == "diagnostic.test"

    def test_includes_session_id(self):
        record = logging.LogRecord("diagnostic.test", logging.INFO, __file__, 10, "msg", (), None)
        record.session_id = "s1"

        data = json.loads(JSONFormatter().format(record))

        assert data["session_id"] == "s1"

    def test_keeps_non_ascii(self):
        record = logging.LogRecord("diagnostic.test", logging.INFO, __file__, 10, "发烧", (), None)

        assert "发烧" in JSONFormatter().format(record)


class TestSessionLogger:
    """Tests for get_session_logger()."""

    def test_adds_session_id(self, caplog):
        logger = get_session_logger("diagnostic.test", "s42")

        with caplog.at_level(logging.INFO, logger="diagnostic.test"):
            logger.info("turn")

        assert caplog.records[-1].session_id == "s42"


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_writes_json_to_file(self, tmp_path):
        log_file = tmp_path / "logs" / "app.log"
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level

        try:
            setup_logging(log_level="debug", log_file=str(log_file), console_format="text")
            logging.getLogger("diagnostic.test").info("started")
            for handler in root.handlers:
                handler.flush()

            lines = log_file.read_text(encoding="utf-8").strip().splitlines()
            assert json.loads(lines[-1])["message"] == "started"
            assert root.level == logging.DEBUG
        finally:
            for handler in root.handlers[:]:
                if handler not in saved_handlers:
                    root.removeHandler(handler)
                    handler.close()
            for handler in saved_handlers:
                if handler not in root.handlers:
                    root.addHandler(handler)
            root.setLevel(saved_level)
