"""
Config package for pet_browser.

Responsible for:
- config models (GlobalConfig, CatalogConfig)
- config I/O helpers (load_global_config)
"""

from .model import CatalogConfig, GlobalConfig
from .loader import load_global_config
