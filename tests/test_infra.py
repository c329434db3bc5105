"""
Tests for configuration and structured logging.
"""

import json
import logging

import pytest

from spamscore.config import DEFAULT_CONFIG, ScoringConfig, Settings


class TestScoringConfig:
    """Threshold and multiplier validation."""

    def test_defaults(self):
        assert DEFAULT_CONFIG.flag_threshold == 0.5
        assert DEFAULT_CONFIG.warning_threshold == 3.0
        assert DEFAULT_CONFIG.critical_threshold == 6.0
        assert DEFAULT_CONFIG.subject_multiplier == 1.5

    def test_negative_threshold_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            ScoringConfig(flag_threshold=-1.0)

    def test_unordered_thresholds_rejected(self):
        with pytest.raises(ValueError, match="flag <= warning <= critical"):
            ScoringConfig(warning_threshold=7.0, critical_threshold=6.0)

    def test_flag_above_warning_rejected(self):
        with pytest.raises(ValueError):
            ScoringConfig(flag_threshold=4.0)

    def test_equal_thresholds_allowed(self):
        config = ScoringConfig(flag_threshold=3.0, warning_threshold=3.0, critical_threshold=3.0)
        assert config.critical_threshold == 3.0

    @pytest.mark.parametrize("multiplier", [1.0, 0.5, 0.0])
    def test_multiplier_must_exceed_one(self, multiplier):
        with pytest.raises(ValueError, match="subject_multiplier"):
            ScoringConfig(subject_multiplier=multiplier)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.warning_threshold = 1.0

    def test_to_dict(self):
        assert DEFAULT_CONFIG.to_dict() == {
            "flag_threshold": 0.5,
            "warning_threshold": 3.0,
            "critical_threshold": 6.0,
            "subject_multiplier": 1.5,
        }


class TestSettings:

    def test_scoring_config_from_settings(self):
        settings = Settings(WARNING_THRESHOLD=4.0, CRITICAL_THRESHOLD=8.0)
        config = settings.scoring_config()
        assert config.warning_threshold == 4.0
        assert config.critical_threshold == 8.0

    def test_invalid_settings_fail_on_build(self):
        settings = Settings(SUBJECT_MULTIPLIER=0.5)
        with pytest.raises(ValueError):
            settings.scoring_config()

    def test_text_cap_positive(self):
        assert Settings().MAX_TEXT_LENGTH > 0


class TestLogging:
    """Structured logging output."""

    def _record(self, **extra):
        record = logging.LogRecord(
            name="spamscore.test", level=logging.INFO, pathname=__file__, lineno=1,
            msg="Email analyzed", args=(), exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_json_formatter_fields(self):
        from spamscore.logging import JSONFormatter

        entry = json.loads(JSONFormatter().format(self._record(combined_score=12.5, tier="critical")))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "spamscore.test"
        assert entry["message"] == "Email analyzed"
        assert entry["combined_score"] == 12.5
        assert entry["tier"] == "critical"
        assert "timestamp" in entry

    def test_json_formatter_drops_unknown_extras(self):
        from spamscore.logging import JSONFormatter

        entry = json.loads(JSONFormatter().format(self._record(subject="secret text")))
        assert "subject" not in entry

    def test_json_formatter_exception(self):
        from spamscore.logging import JSONFormatter

        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys
            record = self._record()
            record.exc_info = sys.exc_info()
        entry = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in entry["exception"]

    def test_get_logger_namespace(self):
        from spamscore.logging import get_logger
        assert get_logger("analyzer").name == "spamscore.analyzer"

    def test_setup_logging_single_handler(self):
        from spamscore.logging import setup_logging

        root = setup_logging()
        setup_logging()
        assert root.name == "spamscore"
        assert len(root.handlers) == 1

    def test_json_timestamp_from_record(self):
        from spamscore.logging import JSONFormatter

        record = self._record()
        record.created = 0.0
        entry = json.loads(JSONFormatter().format(record))
        assert entry["timestamp"] == "1970-01-01T00:00:00+00:00"

    def test_text_formatter_appends_fields(self):
        from spamscore.logging import TextFormatter

        line = TextFormatter().format(self._record(combined_score=4.5, tier="warning", body="hi"))
        assert line.endswith("Email analyzed combined_score=4.5 tier=warning")
        assert "body" not in line

    def test_setup_logging_stream_and_overrides(self):
        import io
        from spamscore.logging import get_logger, setup_logging

        stream = io.StringIO()
        root = setup_logging(level="debug", fmt="text", stream=stream)
        try:
            get_logger("test").debug("Scored", extra={"items": 2})
            assert root.level == logging.DEBUG
            assert "Scored items=2" in stream.getvalue()
        finally:
            root.handlers.clear()
            root.setLevel(logging.NOTSET)

    def test_setup_logging_reads_env(self, monkeypatch):
        import io
        from spamscore.logging import get_logger, setup_logging

        monkeypatch.setenv("SPAMSCORE_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("SPAMSCORE_LOG_FORMAT", "json")
        stream = io.StringIO()
        root = setup_logging(stream=stream)
        try:
            get_logger("test").info("hidden")
            get_logger("test").warning("shown")
            lines = stream.getvalue().splitlines()
            assert [json.loads(line)["message"] for line in lines] == ["shown"]
        finally:
            root.handlers.clear()
            root.setLevel(logging.NOTSET)
