"""Tests for structured logging setup."""

import logging

from stringcalc_pkg.logging_config import StructuredFormatter, get_logger, setup_logging


def make_record(message, **context):
    record = logging.LogRecord(
        "stringcalc.cli", logging.ERROR, __file__, 1, message, (), None
    )
    for key, value in context.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_plain_record(self):
        text = StructuredFormatter().format(make_record("done"))
        assert text.endswith("[ERROR] stringcalc.cli: done")

    def test_context_fields_appended(self):
        record = make_record("failed", expression="1/0", error_code="ARITHMETIC_FAULT")
        text = StructuredFormatter().format(record)
        assert text.endswith(
            "stringcalc.cli: failed (error_code='ARITHMETIC_FAULT', expression='1/0')"
        )

    def test_missing_context_skipped(self):
        text = StructuredFormatter().format(make_record("failed", error_code=None))
        assert "error_code" not in text


class TestSetupLogging:
    def teardown_method(self):
        logger = logging.getLogger("stringcalc")
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    def test_reconfigure_does_not_stack_handlers(self):
        setup_logging("DEBUG")
        logger = setup_logging("WARNING")
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_log_file_receives_child_records(self, tmp_path):
        log_file = tmp_path / "calc.log"
        setup_logging("INFO", str(log_file))
        get_logger("cli").error("bad line", extra={"expression": "1+"})
        for handler in logging.getLogger("stringcalc").handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "stringcalc.cli: bad line (expression='1+')" in content

    def test_get_logger_namespace(self):
        assert get_logger("expander").name == "stringcalc.expander"
