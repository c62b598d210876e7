# Area: Shared
"""
contest_results._config — Backfill Configuration
================================================

Loads configuration from a .env file and the environment, and
validates it before a run.
"""

import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .errors import ConfigError


DEFAULTS: Dict[str, Any] = {
    "db_path": "contest_results.db",
    "workers": 1,
    "log_file": "contest_results.log",
    "log_level": "INFO",
}

# Environment variable -> config key
ENV_MAPPINGS = {
    "CONTEST_RESULTS_DB": "db_path",
    "CONTEST_RESULTS_WORKERS": "workers",
    "CONTEST_RESULTS_LOG_FILE": "log_file",
    "CONTEST_RESULTS_LOG_LEVEL": "log_level",
}

REQUIRED_CONFIG_KEYS = ["db_path", "workers"]

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_config(env_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Build config from defaults, then .env, then the process environment.

    Args:
        env_file: Optional path to a .env file (default: search upward)

    Returns:
        Config dict with keys from DEFAULTS
    """
    load_dotenv(env_file)
    config = dict(DEFAULTS)
    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            config[config_key] = os.environ[env_key]
    return config


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate and normalize configuration values.

    Args:
        config: Configuration dict

    Returns:
        The config with workers as int and log_level upper-cased

    Raises:
        ConfigError: If required keys are missing or values are invalid
    """
    missing = [k for k in REQUIRED_CONFIG_KEYS if not config.get(k)]
    if missing:
        raise ConfigError(missing[0], f"missing required config keys: {missing}")

    try:
        workers = int(config["workers"])
    except (TypeError, ValueError):
        raise ConfigError("workers", f"not an integer: {config['workers']!r}")
    if workers < 1:
        raise ConfigError("workers", f"must be >= 1, got {workers}")

    level = str(config.get("log_level", "INFO")).upper()
    if level not in LOG_LEVELS:
        raise ConfigError("log_level", f"unknown level {level!r}")

    validated = dict(config)
    validated["workers"] = workers
    validated["log_level"] = level
    return validated
