import io
import os
import sys
from unittest.mock import patch

import pytest
from loguru import logger

from baseline_mcp.utility import (
    DEFAULT_LOG_FORMAT,
    configure_logging,
    dget,
    dotexists,
    dotexpand,
    dotget,
    dotset,
    env2dict,
    replace_env_vars,
)


class TestDotPaths:
    """Tests for the dot-path helpers."""

    def test_dotexpand(self):
        assert dotexpand("a.b") == ["a.b"]
        assert dotexpand("a:b") == ["a.b", "a_b"]
        assert dotexpand("a:b, c") == ["a.b", "a_b", "c"]
        assert dotexpand(["x", "y:z"]) == ["x", "y.z", "y_z"]
        assert dotexpand("") == []

    def test_dotexpand_rejects_other_types(self):
        with pytest.raises(ValueError):
            dotexpand(42)  # type: ignore[arg-type]

    def test_dotget(self):
        data = {"options": {"api_base_url": "https://x.test"}, "logging_level": "DEBUG"}
        assert dotget(data, "options.api_base_url") == "https://x.test"
        assert dotget(data, "options:api_base_url") == "https://x.test"
        assert dotget(data, "logging:level") == "DEBUG"
        assert dotget(data, "options:missing", default="d") == "d"
        assert dotget(data, "options.api_base_url.deeper") is None

    def test_dget_returns_first_resolved_path(self):
        data = {"a": {"b": None, "c": 0}}
        assert dget(data, "a:b", "a:c") == 0
        assert dget(data, "x", "y", default="z") == "z"
        assert dget({}, "a", default=1) == 1

    def test_dotexists(self):
        data = {"a": {"b": False}}
        assert dotexists(data, "a:b")
        assert dotexists(data, "x", "a")
        assert not dotexists(data, "a:c")

    def test_dotset_creates_intermediate_dicts(self):
        data: dict = {"a": {"keep": 1}}
        result = dotset(data, "a:b:c", 2)
        assert result is data
        assert data == {"a": {"keep": 1, "b": {"c": 2}}}

        dotset(data, "x.y", 3)
        assert data["x"] == {"y": 3}


class TestEnv2Dict:
    """Tests for env2dict function."""

    def test_prefixed_variables_are_nested(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MYAPP_OPTIONS__API_BASE_URL", "https://env.test")
        monkeypatch.setenv("MYAPP_DEBUG", "1")
        monkeypatch.setenv("MYAPPLICATION_OTHER", "ignored")

        result = env2dict("MYAPP")

        assert result == {"options": {"api_base_url": "https://env.test"}, "debug": "1"}

    def test_updates_existing_data(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MYAPP_OPTIONS__USER_AGENT", "agent/2")

        data = {"options": {"api_base_url": "https://x.test", "user_agent": "agent/1"}}
        result = env2dict("MYAPP", data)

        assert result is data
        assert data["options"] == {"api_base_url": "https://x.test", "user_agent": "agent/2"}

    def test_empty_prefix(self):
        assert env2dict("", {"a": 1}) == {"a": 1}
        assert env2dict(None) == {}  # type: ignore[arg-type]


class TestReplaceEnvVars:
    """Tests for replace_env_vars function."""

    def test_nested_replacement(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TEST_BASE", "https://mirror.test")
        monkeypatch.delenv("TEST_UNSET", raising=False)

        data = {"a": "${TEST_BASE}", "b": ["${TEST_BASE}", "plain", 3], "c": {"d": "${TEST_UNSET}"}, "e": "pre ${TEST_BASE}"}

        assert replace_env_vars(data) == {
            "a": "https://mirror.test",
            "b": ["https://mirror.test", "plain", 3],
            "c": {"d": ""},
            "e": "pre ${TEST_BASE}",
        }


class TestConfigureLogging:
    """Tests for configure_logging function."""

    @patch("baseline_mcp.utility.logger")
    def test_no_opts_logs_to_stdout(self, mock_logger):
        configure_logging(None)
        mock_logger.remove.assert_called_once()
        mock_logger.add.assert_called_once_with(sys.stdout, level="INFO", format=DEFAULT_LOG_FORMAT)
        mock_logger.configure.assert_not_called()

    @patch("baseline_mcp.utility.logger")
    def test_explicit_sink_and_level(self, mock_logger):
        configure_logging({"level": "DEBUG"}, sink=sys.stderr)
        mock_logger.add.assert_called_once_with(sys.stderr, level="DEBUG", format=DEFAULT_LOG_FORMAT)

    @patch("baseline_mcp.utility.logger")
    def test_standard_stream_sinks_are_substituted(self, mock_logger):
        configure_logging({"handlers": [{"sink": "sys.stderr", "level": "WARNING"}, {"level": "INFO"}]})

        handlers = mock_logger.configure.call_args[1]["handlers"]
        assert len(handlers) == 1
        assert handlers[0]["sink"] is sys.stderr
        assert handlers[0]["level"] == "WARNING"

    @patch("baseline_mcp.utility.logger")
    def test_reserve_stdout_keeps_all_handlers_off_stdout(self, mock_logger):
        configure_logging({"handlers": [{"sink": "sys.stdout", "level": "INFO"}, {"sink": "sys.stderr"}]}, reserve_stdout=True)

        mock_logger.add.assert_called_once_with(sys.stderr, level="INFO", format=DEFAULT_LOG_FORMAT)
        handlers = mock_logger.configure.call_args[1]["handlers"]
        assert [h["sink"] for h in handlers] == [sys.stderr, sys.stderr]

    @patch("baseline_mcp.utility.logger")
    def test_stdout_sink_name_resolves_to_stdout_by_default(self, mock_logger):
        configure_logging({"handlers": [{"sink": "sys.stdout"}]})

        assert mock_logger.configure.call_args[1]["handlers"][0]["sink"] is sys.stdout

    @patch("baseline_mcp.utility.logger")
    @patch("baseline_mcp.utility.datetime")
    def test_log_file_sink_is_dated_and_placed_in_folder(self, mock_datetime, mock_logger):
        mock_datetime.now.return_value.strftime.return_value = "20260101"

        opts = {"folder": "test_logs", "handlers": [{"sink": "baseline.log", "level": "ERROR"}]}
        configure_logging(opts)

        handlers = mock_logger.configure.call_args[1]["handlers"]
        assert handlers[0]["sink"] == os.path.join("test_logs", "20260101_baseline.log")
        assert opts["handlers"][0]["sink"] == "baseline.log"

    def test_messages_reach_the_sink(self):
        stream = io.StringIO()
        try:
            configure_logging({"level": "INFO"}, sink=stream)
            logger.debug("hidden")
            logger.info("visible")
        finally:
            configure_logging(None)

        output = stream.getvalue()
        assert "| INFO | visible" in output
        assert "hidden" not in output
