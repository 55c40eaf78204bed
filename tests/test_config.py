# tests/test_config.py
import pytest

from skiloovate.config import load_config, validate_config
from skiloovate.db import DEFAULT_DB_PATH


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in ("SKILOOVATE_CONFIG", "SKILOOVATE_DB_PATH", "SKILOOVATE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("skiloovate.config.USER_CONFIG_PATH", tmp_path / "absent.yml")


def test_defaults():
    cfg = load_config()
    assert cfg["db_path"] == DEFAULT_DB_PATH
    assert cfg["rushed_seconds_per_question"] == 30
    assert cfg["chat_delay_seconds"] == 1.0
    assert cfg["log_level"] == "WARNING"
    assert cfg["catalog"] is None


def test_user_file_overrides_defaults(tmp_path):
    f = tmp_path / "config.yml"
    f.write_text("rushed_seconds_per_question: 45\nlog_level: debug\n")
    cfg = load_config(str(f))
    assert cfg["rushed_seconds_per_question"] == 45
    assert cfg["log_level"] == "DEBUG"
    assert cfg["chat_delay_seconds"] == 1.0


def test_env_overrides(monkeypatch, tmp_path):
    f = tmp_path / "config.yml"
    f.write_text("chat_delay_seconds: 0\n")
    monkeypatch.setenv("SKILOOVATE_CONFIG", str(f))
    monkeypatch.setenv("SKILOOVATE_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("SKILOOVATE_LOG_LEVEL", "info")
    cfg = load_config()
    assert cfg["chat_delay_seconds"] == 0.0
    assert cfg["db_path"] == str(tmp_path / "x.db")
    assert cfg["log_level"] == "INFO"


def test_validate_rejects_negative_threshold():
    with pytest.raises(ValueError):
        validate_config({"rushed_seconds_per_question": -5})


def test_validate_rejects_negative_delay():
    with pytest.raises(ValueError):
        validate_config({"chat_delay_seconds": -1})


def test_validate_rejects_unknown_log_level():
    with pytest.raises(ValueError):
        validate_config({"log_level": "LOUD"})


def test_validate_fills_missing_keys():
    cfg = validate_config({})
    assert cfg["db_path"] == DEFAULT_DB_PATH
    assert cfg["rushed_seconds_per_question"] == 30
