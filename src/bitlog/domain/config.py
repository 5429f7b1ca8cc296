from __future__ import annotations

"""
Logger Configuration Domain.

Defines the immutable configuration snapshot shared by every log call and
the layered loading of raw settings (defaults, optional JSON file and
environment variables). Coercion of raw values into a LoggerConfig is the
responsibility of the validator.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

from bitlog.domain.levels import LogLevel

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_FILEPATH = ""
DEFAULT_LEVEL = int(LogLevel.ALL)
DEFAULT_MAX_SIZE = 10 * 1024 * 1024  # 10 MiB

ENV_FILEPATH = "BITLOG_FILE"
ENV_LEVEL = "BITLOG_LEVEL"
ENV_MAX_SIZE = "BITLOG_MAX_SIZE"
ENV_CONFIG_FILE = "BITLOG_CONFIG"

# Raw keys understood by the loader and the validator
CONFIG_KEYS = ("filepath", "level", "max_size")


@dataclass(frozen=True)
class LoggerConfig:
    """
    Immutable snapshot of the logger configuration.

    Attributes:
        destination_path: Target file; an empty string routes to stdout.
        enabled_mask: Bitwise OR of the enabled severities.
        max_file_size: Size in bytes above which the file is truncated.
    """
    destination_path: str = DEFAULT_FILEPATH
    enabled_mask: int = DEFAULT_LEVEL
    max_file_size: int = DEFAULT_MAX_SIZE

    @property
    def is_stdout(self) -> bool:
        return not self.destination_path

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_default_config() -> LoggerConfig:
    """Return the process-start configuration: stdout, ALL, 10 MiB."""
    return LoggerConfig()


def get_default_raw_config() -> Dict[str, Any]:
    """
    Return the defaults in raw (loader) form.

    Returns:
        Dict[str, Any]: Mapping with 'filepath', 'level' and 'max_size'.
    """
    return {
        "filepath": DEFAULT_FILEPATH,
        "level": DEFAULT_LEVEL,
        "max_size": DEFAULT_MAX_SIZE,
    }


# -----------------------------------------------------------------------------
# Loading
# -----------------------------------------------------------------------------
def load_config(
        path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Resolve the raw configuration hierarchy.

    Order of precedence (lowest first): defaults, JSON file, environment.
    The JSON file is taken from ``path`` or from the BITLOG_CONFIG variable.
    A missing or malformed file is logged and ignored.

    Args:
        path: Optional JSON configuration file.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        Dict[str, Any]: Raw, unvalidated configuration values.
    """
    env = os.environ if environ is None else environ
    raw = get_default_raw_config()

    config_file = path or env.get(ENV_CONFIG_FILE)
    if config_file:
        raw.update(_load_json_file(config_file))

    if ENV_FILEPATH in env:
        raw["filepath"] = env[ENV_FILEPATH]
    if ENV_LEVEL in env:
        raw["level"] = env[ENV_LEVEL]
    if ENV_MAX_SIZE in env:
        raw["max_size"] = env[ENV_MAX_SIZE]

    return raw


def _load_json_file(path: str) -> Dict[str, Any]:
    """
    Read known configuration keys from a JSON document.

    Args:
        path: Location of the JSON file.

    Returns:
        Dict[str, Any]: Subset of recognised keys, empty on any failure.
    """
    if not os.path.exists(path):
        logger.warning(f"Config file not found at {path}. Using defaults.")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to read config file {path}: {e}. Using defaults.")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Config file {path} does not contain a JSON object. Ignoring.")
        return {}

    return {k: data[k] for k in CONFIG_KEYS if k in data}
