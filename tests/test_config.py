import pytest

from trace_filter.config import (
    LoggerConfig,
    RunConfig,
    get_default_config,
    set_default_config,
)
from trace_filter.events import DisplayColumn
from trace_filter.exceptions import ConfigurationError


def test_logger_config_defaults():
    config = LoggerConfig()
    assert config.log_level == "WARNING"
    assert config.include_timestamp is True
    assert config.formatter_type == "plain"


def test_logger_config_from_env(monkeypatch):
    monkeypatch.setenv("TRACE_FILTER_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("TRACE_FILTER_LOG_TIMESTAMP", "false")
    monkeypatch.setenv("TRACE_FILTER_LOG_FORMATTER", "json")

    config = LoggerConfig.from_env()
    assert config.log_level == "DEBUG"
    assert config.include_timestamp is False
    assert config.formatter_type == "json"


def test_unknown_formatter_falls_back_to_plain(monkeypatch):
    monkeypatch.setenv("TRACE_FILTER_LOG_FORMATTER", "xml")
    assert LoggerConfig.from_env().formatter_type == "plain"


def test_set_default_config():
    previous = get_default_config()
    try:
        set_default_config(LoggerConfig(log_level="ERROR"))
        assert get_default_config().log_level == "ERROR"
    finally:
        set_default_config(previous)


class TestRunConfigValidation:
    def test_capture_run_is_valid(self):
        RunConfig(capture_file="run.jsonl", process_id=1).validate()

    def test_live_run_is_valid(self):
        RunConfig(live_file="trace.jsonl", providers=["Runtime"]).validate()

    def test_raw_and_field_filters_rejected(self):
        config = RunConfig(
            capture_file="run.jsonl", raw_filter="x", field_filters=["Event=x"]
        )
        with pytest.raises(ConfigurationError, match="raw filter"):
            config.validate()

    def test_providers_with_capture_file_rejected(self):
        config = RunConfig(capture_file="run.jsonl", providers=["Runtime"])
        with pytest.raises(ConfigurationError, match="not supported"):
            config.validate()

    def test_keywords_with_capture_file_rejected(self):
        config = RunConfig(capture_file="run.jsonl", keywords=["GC"])
        with pytest.raises(ConfigurationError):
            config.validate()

    def test_live_run_without_providers_rejected(self):
        with pytest.raises(ConfigurationError, match="No events to collect"):
            RunConfig(live_file="trace.jsonl").validate()

    def test_both_sources_rejected(self):
        config = RunConfig(capture_file="a.jsonl", live_file="b.jsonl", providers=["x"])
        with pytest.raises(ConfigurationError):
            config.validate()

    def test_invalid_regex_rejected(self):
        config = RunConfig(capture_file="run.jsonl", field_filters=["Event=("])
        with pytest.raises(ConfigurationError, match="Invalid filter"):
            config.validate()

    def test_malformed_field_filter_rejected(self):
        config = RunConfig(capture_file="run.jsonl", field_filters=["Event"])
        with pytest.raises(ConfigurationError):
            config.validate()

    def test_negative_duration_rejected(self):
        config = RunConfig(capture_file="run.jsonl", duration_seconds=-1)
        with pytest.raises(ConfigurationError):
            config.validate()


class TestRunConfigBuilders:
    def test_filter_spec(self):
        spec = RunConfig(
            process_id=5,
            thread_id=6,
            events=["A", "B"],
            field_filters=["Event=^A$", "PID=5"],
        ).filter_spec()

        assert spec.process_id == 5
        assert spec.thread_id == 6
        assert spec.event_names == frozenset({"A", "B"})
        assert [f.field_name for f in spec.field_filters] == ["Event", "PID"]
        assert spec.raw_filter is None

    def test_no_event_list_means_no_name_filter(self):
        assert RunConfig().filter_spec().event_names is None

    def test_raw_filter_compiled(self):
        spec = RunConfig(raw_filter="PID=1\\d").filter_spec()
        assert spec.raw_filter.search("PID=12")

    def test_display_columns(self):
        columns = RunConfig(display_fields=["Event", "FileName[50]"]).display_columns()
        assert columns == [DisplayColumn("Event", 20), DisplayColumn("FileName", 50)]
