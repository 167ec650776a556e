"""Tests for logging configuration."""

import json
import logging

from url_shortener.core.logging import RequestIdFilter, request_id_var, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_environment_levels(self):
        assert setup_logging("local").level == logging.DEBUG
        assert setup_logging("dev").level == logging.DEBUG
        assert setup_logging("prod").level == logging.INFO

    def test_unknown_environment_uses_production_level(self):
        assert setup_logging("staging").level == logging.INFO

    def test_level_override(self):
        assert setup_logging("local", "warning").level == logging.WARNING

    def test_single_handler(self):
        setup_logging("local")
        logger = setup_logging("prod")
        assert len(logger.handlers) == 1


class TestRequestIdFilter:
    """Tests for request id stamping."""

    def _record(self):
        return logging.LogRecord("url_shortener", logging.INFO, __file__, 1, "msg", None, None)

    def test_default_request_id(self):
        record = self._record()
        RequestIdFilter().filter(record)
        assert record.request_id == "-"

    def test_current_request_id(self):
        token = request_id_var.set("req-42")
        try:
            record = self._record()
            RequestIdFilter().filter(record)
            assert record.request_id == "req-42"
        finally:
            request_id_var.reset(token)


class TestJsonFormat:
    """Tests for the dev/prod JSON log lines."""

    def _lines(self, capsys):
        return [json.loads(line) for line in capsys.readouterr().out.splitlines()]

    def test_each_line_is_json(self, capsys):
        setup_logging("prod")
        logger = logging.getLogger("url_shortener.services.lookup")
        logger.info('cache miss: alias=a"b')
        logger.info("got url from storage: alias=abc")

        entries = self._lines(capsys)
        assert [entry["msg"] for entry in entries] == [
            'cache miss: alias=a"b',
            "got url from storage: alias=abc",
        ]

    def test_alias_cannot_override_fields(self, capsys):
        setup_logging("prod")
        logging.getLogger("url_shortener.services.lookup").info(
            'url not found: alias=x", "level": "ERROR'
        )

        (entry,) = self._lines(capsys)
        assert entry["level"] == "INFO"
        assert entry["msg"] == 'url not found: alias=x", "level": "ERROR'

    def test_request_id_and_traceback_stay_on_one_line(self, capsys):
        setup_logging("dev")
        token = request_id_var.set("req-7")
        try:
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                logging.getLogger("url_shortener.main").exception("unhandled")
        finally:
            request_id_var.reset(token)

        (entry,) = self._lines(capsys)
        assert entry["request_id"] == "req-7"
        assert entry["level"] == "ERROR"
        assert "RuntimeError: boom" in entry["exc"]
