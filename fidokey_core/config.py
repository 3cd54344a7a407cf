# fidokey_core/config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import logging
import os

from .constants import EC_SIGNATURE_ENCODINGS


@dataclass(frozen=True)
class Settings:
    log_level: int = logging.INFO
    log_file: Optional[str] = None
    ec_signature_encoding: str = "raw"  # raw (r || s) | der


def _parse_level(value) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value}")
    return level


def load_log_settings(config: dict | None = None) -> Tuple[int, Optional[str]]:
    """(level, file) for loggers; leaves the verification settings alone."""
    config = config or {}
    level = config.get("log_level") or os.getenv("FIDOKEY_LOG_LEVEL", "INFO")
    log_file = config.get("log_file") or os.getenv("FIDOKEY_LOG_FILE") or None
    return _parse_level(level), log_file


def load_settings(config: dict | None = None) -> Settings:
    """
    Resolve runtime settings.

    Precedence: explicit `config` keys, then FIDOKEY_* environment variables,
    then defaults. Verification only uses these when they are passed to it.
    """
    config = config or {}

    log_level, log_file = load_log_settings(config)
    encoding = (
        config.get("ec_signature_encoding")
        or os.getenv("FIDOKEY_EC_SIGNATURE_ENCODING", "raw")
    ).lower()

    if encoding not in EC_SIGNATURE_ENCODINGS:
        raise ValueError(f"Unknown EC signature encoding: {encoding}")

    return Settings(
        log_level=log_level,
        log_file=log_file,
        ec_signature_encoding=encoding,
    )
