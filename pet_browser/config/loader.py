from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from pet_browser.config.model import CatalogConfig, GlobalConfig
from pet_browser.core.exceptions import ConfigError
from pet_browser.core.status import STATUSES

logger = logging.getLogger(__name__)

CATALOG_URL_ENV = "PET_BROWSER_CATALOG_URL"


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a JSON object in {path}, got {type(raw).__name__}")
    return raw


def _int_setting(raw: Dict[str, Any], key: str, default: int, minimum: int) -> int:
    value = raw.get(key, default)
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}") from None
    if value < minimum:
        raise ConfigError(f"'{key}' must be >= {minimum}, got {value}")
    return value


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a config directory.

    Expected structure:

        root/
            global.json

    global.json keys (all optional):

    - ui_title, subtitle: navbar text
    - max_active_filters: 1..number of statuses, defaults to 3
    - poll_interval_ms: results refresh interval while loading, defaults to 500
    - max_sessions: defaults to 256
    - catalog: {"base_url", "timeout_seconds", "user_agent"}

    The PET_BROWSER_CATALOG_URL environment variable overrides catalog.base_url.
    A missing global.json means "use defaults".

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises ConfigError: if global.json is malformed or holds out-of-range values.
    """
    root = Path(root)
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = root / "global.json"
    if global_path.is_file():
        raw_global = _read_json(global_path)
    else:
        logger.warning(
            "global.json not found; using defaults",
            extra={"config_path": str(global_path)},
        )
        raw_global = {}

    max_active = _int_setting(raw_global, "max_active_filters", 3, minimum=1)
    if max_active > len(STATUSES):
        raise ConfigError(
            f"'max_active_filters' must be <= {len(STATUSES)}, got {max_active}"
        )

    raw_catalog = raw_global.get("catalog", {}) or {}
    if not isinstance(raw_catalog, dict):
        raise ConfigError("'catalog' must be a JSON object")
    raw_catalog = dict(raw_catalog)

    env_url = os.getenv(CATALOG_URL_ENV)
    if env_url:
        raw_catalog["base_url"] = env_url

    try:
        catalog = CatalogConfig.from_raw(raw_catalog)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid catalog settings: {e}") from e
    if catalog.timeout_seconds <= 0:
        raise ConfigError("'catalog.timeout_seconds' must be positive")

    return GlobalConfig(
        ui_title=raw_global.get("ui_title", "Pet Browser"),
        subtitle=raw_global.get("subtitle", "Browse the pet catalog by status"),
        max_active_filters=max_active,
        poll_interval_ms=_int_setting(raw_global, "poll_interval_ms", 500, minimum=50),
        max_sessions=_int_setting(raw_global, "max_sessions", 256, minimum=1),
        catalog=catalog,
    )
