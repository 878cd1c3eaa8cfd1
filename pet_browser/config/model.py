from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from pet_browser.core.status import MAX_ACTIVE_FILTERS

DEFAULT_CATALOG_URL = "https://petstore.swagger.io/v2"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Connection settings for the remote pet catalog.
    """
    base_url: str = DEFAULT_CATALOG_URL
    timeout_seconds: float = 10.0
    user_agent: str = "pet-browser/0.1"

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> CatalogConfig:
        return cls(
            base_url=str(raw.get("base_url", DEFAULT_CATALOG_URL)).rstrip("/"),
            timeout_seconds=float(raw.get("timeout_seconds", 10.0)),
            user_agent=str(raw.get("user_agent", "pet-browser/0.1")),
        )


@dataclass(frozen=True)
class GlobalConfig:
    """
    Parsed global.json.

    Fields:

    - ui_title / subtitle: navbar text
    - max_active_filters: how many statuses can be selected at once
    - poll_interval_ms: how often the results panel refreshes while loading
    - max_sessions: open browser tabs kept server-side before the oldest is dropped
    - catalog: remote catalog settings
    """
    ui_title: str = "Pet Browser"
    subtitle: str = "Browse the pet catalog by status"
    max_active_filters: int = MAX_ACTIVE_FILTERS
    poll_interval_ms: int = 500
    max_sessions: int = 256
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
