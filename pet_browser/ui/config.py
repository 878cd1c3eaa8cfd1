from dataclasses import dataclass
from pathlib import Path

from pet_browser.config.model import GlobalConfig
from pet_browser.services.catalog_client import CatalogClient
from pet_browser.services.session_service import SessionRegistry


@dataclass
class AppConfig:
    config_root: Path
    global_config: GlobalConfig
    catalog_client: CatalogClient
    sessions: SessionRegistry

    def validate(self) -> None:
        """Ensure settings the callbacks rely on are usable before the app starts."""
        if self.global_config.max_active_filters < 1:
            raise RuntimeError("AppConfig.global_config.max_active_filters must be >= 1.")
        if self.global_config.poll_interval_ms < 1:
            raise RuntimeError("AppConfig.global_config.poll_interval_ms must be >= 1.")
