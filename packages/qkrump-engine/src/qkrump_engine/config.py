# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Configuration management for qkrump-engine.

Configuration is read from environment variables once and cached.
Use :func:`set_config` to inject an explicit configuration (tests,
embedding applications) and :func:`reset_config` to force a reload.

Environment Variables
---------------------
QKRUMP_ASSET_TIMEOUT
    Timeout in seconds for each branding asset fetch. Default 10.
QKRUMP_ASSET_RETRIES
    Retry attempts for transient asset fetch failures. Default 3.
QKRUMP_ASSET_BACKOFF
    Base retry backoff in seconds. Default 0.5.
QKRUMP_EMBED_ASSETS
    Embed branding images into reports. Default true.
QKRUMP_LOGO_LEFT, QKRUMP_LOGO_RIGHT, QKRUMP_LOGO_FOOTER
    URL or file path of each branding image slot.
QKRUMP_RAW_DATA_MAX_LINES
    Maximum raw JSON lines shown verbatim in a report. Default 50.
QKRUMP_ROUTINE_SIZE
    Number of moves in the suggested routine. Default 5.
QUANTUM_SERVICE_URL
    Base URL of the external execution service. Unset means mock results.
QKRUMP_SERVICE_TIMEOUT
    Timeout in seconds for execution service requests. Default 30.

Examples
--------
>>> from qkrump_engine.config import Config, set_config
>>> set_config(Config(embed_assets=False, raw_data_max_lines=20))
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field


logger = logging.getLogger(__name__)

ASSET_SLOTS = ("logo_left", "logo_right", "logo_footer")

_TRUTHY = {"1", "true", "yes", "on"}


def _parse_bool(value: str | None, default: bool = True) -> bool:
    """Parse a boolean environment value; empty or unset returns ``default``."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def _parse_float(value: str | None, default: float) -> float:
    """Parse a float environment value, falling back on bad input."""
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring invalid float setting %r, using %s", value, default)
        return default


def _parse_int(value: str | None, default: int) -> int:
    """Parse an int environment value, falling back on bad input."""
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring invalid int setting %r, using %s", value, default)
        return default


@dataclass
class Config:
    """
    Runtime configuration.

    Attributes
    ----------
    asset_timeout : float
        Per-asset fetch timeout in seconds.
    asset_retry_attempts : int
        Retry attempts for transient HTTP failures.
    asset_retry_backoff : float
        Base backoff between retries in seconds.
    embed_assets : bool
        Whether reports embed branding images at all.
    brand_assets : dict
        Mapping of asset slot name to URL or file path.
    raw_data_max_lines : int
        Cap on raw JSON lines emitted into a report.
    routine_size : int
        Length of the suggested routine.
    quantum_service_url : str or None
        Execution service base URL; ``None`` selects mock results.
    service_timeout : float
        Execution service request timeout in seconds.
    """

    asset_timeout: float = 10.0
    asset_retry_attempts: int = 3
    asset_retry_backoff: float = 0.5
    embed_assets: bool = True
    brand_assets: dict[str, str] = field(default_factory=dict)
    raw_data_max_lines: int = 50
    routine_size: int = 5
    quantum_service_url: str | None = None
    service_timeout: float = 30.0

    def __post_init__(self) -> None:
        if self.raw_data_max_lines < 1:
            raise ValueError("raw_data_max_lines must be at least 1")
        if self.asset_timeout <= 0:
            raise ValueError("asset_timeout must be positive")
        unknown = set(self.brand_assets) - set(ASSET_SLOTS)
        if unknown:
            raise ValueError(f"Unknown asset slots: {sorted(unknown)}")


def load_config() -> Config:
    """
    Build a :class:`Config` from environment variables.

    Returns
    -------
    Config
        Fresh configuration instance.
    """
    brand_assets = {}
    for slot in ASSET_SLOTS:
        value = os.environ.get(f"QKRUMP_{slot.upper()}", "").strip()
        if value:
            brand_assets[slot] = value

    return Config(
        asset_timeout=_parse_float(os.environ.get("QKRUMP_ASSET_TIMEOUT"), 10.0),
        asset_retry_attempts=_parse_int(os.environ.get("QKRUMP_ASSET_RETRIES"), 3),
        asset_retry_backoff=_parse_float(os.environ.get("QKRUMP_ASSET_BACKOFF"), 0.5),
        embed_assets=_parse_bool(os.environ.get("QKRUMP_EMBED_ASSETS"), default=True),
        brand_assets=brand_assets,
        raw_data_max_lines=_parse_int(
            os.environ.get("QKRUMP_RAW_DATA_MAX_LINES"), 50
        ),
        routine_size=_parse_int(os.environ.get("QKRUMP_ROUTINE_SIZE"), 5),
        quantum_service_url=os.environ.get("QUANTUM_SERVICE_URL") or None,
        service_timeout=_parse_float(os.environ.get("QKRUMP_SERVICE_TIMEOUT"), 30.0),
    )


_config: Config | None = None
_config_lock = threading.Lock()


def get_config() -> Config:
    """Return the cached configuration, loading it on first use."""
    global _config
    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def set_config(config: Config) -> None:
    """Replace the cached configuration."""
    global _config
    with _config_lock:
        _config = config


def reset_config() -> None:
    """Drop the cached configuration; the next :func:`get_config` reloads."""
    global _config
    with _config_lock:
        _config = None
