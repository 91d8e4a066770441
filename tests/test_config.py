"""Tests for environment-driven settings."""

import pytest

from bookserver.config import ConfigError, Settings, load_settings


def test_defaults() -> None:
    s = load_settings({})

    assert (s.host, s.port, s.variant) == ("127.0.0.1", 3000, "books")
    assert s.url == "http://127.0.0.1:3000"


def test_environment_overrides() -> None:
    s = load_settings(
        {
            "BOOKSERVER_HOST": "0.0.0.0",
            "BOOKSERVER_PORT": "8080",
            "BOOKSERVER_ROUTES": "HELLO",
            "LOG_LEVEL": "debug",
        }
    )

    assert (s.host, s.port, s.variant, s.log_level) == ("0.0.0.0", 8080, "hello", "DEBUG")


def test_bad_port_is_config_error() -> None:
    with pytest.raises(ConfigError, match="must be an integer"):
        load_settings({"BOOKSERVER_PORT": "eighty"})


def test_port_out_of_range() -> None:
    with pytest.raises(ConfigError, match="port must be"):
        Settings(port=70000)


def test_unknown_variant() -> None:
    with pytest.raises(ConfigError, match="unknown route variant"):
        Settings(variant="movies")


def test_override_skips_none() -> None:
    s = Settings().override(host=None, port=4000)

    assert s.host == "127.0.0.1"
    assert s.port == 4000


def test_unknown_log_level() -> None:
    with pytest.raises(ConfigError, match="unknown log level"):
        Settings(log_level="VERBOSE")


def test_unknown_log_level_from_environment() -> None:
    with pytest.raises(ConfigError, match="unknown log level"):
        load_settings({"LOG_LEVEL": "verbose"})


def test_trace_log_level_is_accepted() -> None:
    assert load_settings({"LOG_LEVEL": "trace"}).log_level == "TRACE"
