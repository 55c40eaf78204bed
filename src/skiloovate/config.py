"""Configuration loading and validation.

Values come from the packaged ``defaults.yml``, overlaid by an optional user
YAML file and finally by environment variables.
"""
import os
from pathlib import Path

import yaml

from skiloovate.db import DEFAULT_DB_PATH

DEFAULTS_PATH = Path(__file__).with_name("defaults.yml")
USER_CONFIG_PATH = Path.home() / ".skiloovate" / "config.yml"

ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _load_yaml(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: str | None = None) -> dict:
    """Merge defaults, the user config file and environment overrides.

    Args:
        path: Explicit config file. Falls back to ``SKILOOVATE_CONFIG`` and
            then ``~/.skiloovate/config.yml`` when present.
    """
    cfg = _load_yaml(DEFAULTS_PATH)
    user_path = path or os.environ.get("SKILOOVATE_CONFIG")
    if user_path:
        cfg.update(_load_yaml(Path(user_path)))
    elif USER_CONFIG_PATH.exists():
        cfg.update(_load_yaml(USER_CONFIG_PATH))
    if os.environ.get("SKILOOVATE_DB_PATH"):
        cfg["db_path"] = os.environ["SKILOOVATE_DB_PATH"]
    if os.environ.get("SKILOOVATE_LOG_LEVEL"):
        cfg["log_level"] = os.environ["SKILOOVATE_LOG_LEVEL"]
    return validate_config(cfg)


def validate_config(cfg: dict) -> dict:
    cfg.setdefault("db_path", None)
    cfg.setdefault("rushed_seconds_per_question", 30)
    cfg.setdefault("chat_delay_seconds", 1.0)
    cfg.setdefault("log_level", "WARNING")
    cfg.setdefault("catalog", None)

    if not cfg["db_path"]:
        cfg["db_path"] = DEFAULT_DB_PATH
    cfg["db_path"] = str(Path(cfg["db_path"]).expanduser())

    rushed = int(cfg["rushed_seconds_per_question"])
    if rushed < 0:
        raise ValueError(f"rushed_seconds_per_question must be >= 0, got {rushed}")
    cfg["rushed_seconds_per_question"] = rushed

    delay = float(cfg["chat_delay_seconds"])
    if delay < 0:
        raise ValueError(f"chat_delay_seconds must be >= 0, got {delay}")
    cfg["chat_delay_seconds"] = delay

    level = str(cfg["log_level"]).upper()
    if level not in ALLOWED_LOG_LEVELS:
        raise ValueError(f"Unknown log_level: {cfg['log_level']}")
    cfg["log_level"] = level

    if cfg["catalog"]:
        cfg["catalog"] = str(Path(cfg["catalog"]).expanduser())
    return cfg
