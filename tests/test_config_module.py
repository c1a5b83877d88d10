"""Tests for :mod:`cascadegraph.config`."""

from __future__ import annotations

import logging

import pytest

from cascadegraph import config


@pytest.fixture
def env_file(tmp_path, monkeypatch):
    path = tmp_path / ".env"
    monkeypatch.setattr(config, "ENV_FILE", path)
    config._load_environment.cache_clear()
    yield path
    config._load_environment.cache_clear()


def test_get_env_reads_from_dotenv(env_file, monkeypatch):
    monkeypatch.delenv("CASCADEGRAPH_TEST_VALUE", raising=False)
    env_file.write_text("CASCADEGRAPH_TEST_VALUE=from-file\n")

    assert config.get_env("CASCADEGRAPH_TEST_VALUE") == "from-file"
    monkeypatch.delenv("CASCADEGRAPH_TEST_VALUE", raising=False)


def test_get_env_prefers_process_environment(env_file, monkeypatch):
    env_file.write_text("CASCADEGRAPH_TEST_VALUE=from-file\n")
    monkeypatch.setenv("CASCADEGRAPH_TEST_VALUE", "in-memory")

    assert config.get_env("CASCADEGRAPH_TEST_VALUE") == "in-memory"


def test_get_env_returns_default_when_missing(env_file, monkeypatch):
    monkeypatch.delenv("CASCADEGRAPH_DOES_NOT_EXIST", raising=False)

    assert config.get_env("CASCADEGRAPH_DOES_NOT_EXIST", default="fallback") == "fallback"


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("True", True), (" on ", True), ("0", False), ("no", False), ("", True)],
)
def test_get_bool_parses_flags(env_file, monkeypatch, raw, expected):
    monkeypatch.setenv("CASCADEGRAPH_FLAG", raw)
    assert config.get_bool("CASCADEGRAPH_FLAG", True) is expected


def test_get_bool_rejects_garbage(env_file, monkeypatch):
    monkeypatch.setenv("CASCADEGRAPH_FLAG", "maybe")
    with pytest.raises(ValueError):
        config.get_bool("CASCADEGRAPH_FLAG", False)


def test_configure_logging_uses_environment_level(env_file, monkeypatch):
    logger = logging.getLogger("cascadegraph")
    original = logger.level
    monkeypatch.setenv("CASCADEGRAPH_LOG_LEVEL", "debug")
    try:
        config.configure_logging()
        assert logger.level == logging.DEBUG
        config.configure_logging(logging.ERROR)
        assert logger.level == logging.ERROR
    finally:
        logger.setLevel(original)
