from __future__ import annotations

import logging

import pytest

from tommbi.app import apply_args, build_arg_parser
from tommbi.logging_conf import LOG_FORMAT, QUIET_LOGGERS, configure_logging, resolve_level
from tommbi.settings import DEFAULT_CHAT_MODEL, Settings, load_settings


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("TOMM_PORT", "9000")
    monkeypatch.setenv("TOMM_LANGUAGE", "en")
    monkeypatch.setenv("TOMM_SEED", "12")
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("TOMM_CHAT_TIMEOUT", "oops")

    s = load_settings(dotenv=False)
    assert s.port == 9000
    assert s.language == "en"
    assert s.seed == 12
    assert s.chat_api_key == "abc"
    assert s.chat_model == DEFAULT_CHAT_MODEL
    assert s.chat_timeout_seconds == 30.0


def test_load_settings_defaults(monkeypatch):
    for name in ("TOMM_PORT", "TOMM_SEED", "GEMINI_API_KEY", "TOMM_CHAT_API_KEY", "TOMM_HISTORY_DAYS"):
        monkeypatch.delenv(name, raising=False)
    s = load_settings(dotenv=False)
    assert s.port == 8080
    assert s.seed is None
    assert s.history_days == 365
    assert s.chat_api_key == ""


def test_cli_flags_override_settings():
    args = build_arg_parser().parse_args(["--port", "8123", "--language", "en", "--seed", "7"])
    s = apply_args(Settings(port=8080, language="fa"), args)
    assert s.port == 8123
    assert s.language == "en"
    assert s.seed == 7
    # untouched fields keep their value
    assert s.host == "0.0.0.0"


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    saved = (root.level, list(root.handlers), {n: logging.getLogger(n).level for n in QUIET_LOGGERS})
    yield
    root.handlers[:] = saved[1]
    root.setLevel(saved[0])
    for name, level in saved[2].items():
        logging.getLogger(name).setLevel(level)


def test_configure_logging_uses_settings_level(restore_logging):
    handler = configure_logging(Settings(log_level="debug"))
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger().handlers == [handler]
    assert handler.formatter._fmt == LOG_FORMAT
    # the chat request URL carries the API key
    assert logging.getLogger("httpx").level == logging.WARNING

    # configuring again replaces the handler instead of stacking a second one
    again = configure_logging(Settings(log_level="debug"))
    assert logging.getLogger().handlers == [again]


def test_configure_logging_falls_back_to_info(restore_logging):
    configure_logging(Settings(log_level="bogus"))
    assert logging.getLogger().level == logging.INFO


def test_resolve_level():
    assert resolve_level(" warning ") == logging.WARNING
    assert resolve_level("bogus") is None
    assert resolve_level(None) is None
