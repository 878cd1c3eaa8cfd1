"""
Top-level package for the pet browser.

This package exposes the core architecture (domain, services, UI adapters).
Most code should import from submodules such as:
    pet_browser.core
    pet_browser.services
    pet_browser.ui
"""

__version__ = "0.1.0"

__all__: list[str] = []
