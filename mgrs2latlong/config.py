from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .detect import DEFAULT_SAMPLE_ROWS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    sample_rows: int = DEFAULT_SAMPLE_ROWS
    decimals: Optional[int] = None
    log_level: str = "INFO"
    json_logs: bool = False


def _int_env(env: Mapping[str, str], key: str, default: Optional[int], minimum: int) -> Optional[int]:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: not an integer", key, raw)
        return default
    if value < minimum:
        logger.warning("ignoring %s=%r: must be >= %d", key, raw, minimum)
        return default
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from the environment (MGRS_SAMPLE_ROWS, MGRS_DECIMALS, LOG_LEVEL, ENABLE_JSON_LOGS)."""
    env = os.environ if environ is None else environ
    return Settings(
        sample_rows=_int_env(env, "MGRS_SAMPLE_ROWS", DEFAULT_SAMPLE_ROWS, 1),
        decimals=_int_env(env, "MGRS_DECIMALS", None, 0),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        json_logs=env.get("ENABLE_JSON_LOGS", "0") == "1",
    )


__all__ = ["Settings", "load_settings"]
