from datetime import timedelta

import pytest

from daylog.action.config import ActionConfig, ConfigError, load


def test_defaults_when_environment_is_empty():
    cfg = load({})
    assert cfg == ActionConfig(
        port="8081",
        db_path=".data/action.db",
        cache_ttl=timedelta(seconds=60),
        log_level="info",
    )


def test_values_are_taken_from_environment():
    env = {
        "ACTION_PORT": "9000",
        "ACTION_DB_PATH": "/tmp/actions.db",
        "CACHE_TTL_SEC": "15",
        "LOG_LEVEL": "debug",
    }
    cfg = load(env)
    assert cfg.port == env["ACTION_PORT"]
    assert cfg.db_path == env["ACTION_DB_PATH"]
    assert cfg.cache_ttl == timedelta(seconds=15)
    assert cfg.log_level == env["LOG_LEVEL"]


def test_empty_values_fall_back_to_defaults():
    cfg = load({"ACTION_PORT": "", "ACTION_DB_PATH": "", "CACHE_TTL_SEC": ""})
    assert cfg.port == "8081"
    assert cfg.db_path == ".data/action.db"
    assert cfg.cache_ttl == timedelta(seconds=60)


@pytest.mark.parametrize("text, seconds", [("+7", 7), ("-5", -5), ("0", 0)])
def test_signed_integers_are_accepted(text, seconds):
    assert load({"CACHE_TTL_SEC": text}).cache_ttl == timedelta(seconds=seconds)


@pytest.mark.parametrize("text", ["abc", "1.5", " 5", "5s", "1_000", "99999999999999999999"])
def test_bad_ttl_is_rejected(text):
    with pytest.raises(ConfigError) as info:
        load({"CACHE_TTL_SEC": text})
    assert str(info.value) == f'CACHE_TTL_SEC must be integer, got "{text}"'