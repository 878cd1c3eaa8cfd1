from __future__ import annotations

from typing import Optional


class PetBrowserError(Exception):
    """Base exception for all pet_browser errors"""
    pass

class ConfigError(PetBrowserError):
    """Invalid or inconsistent global.json"""
    pass

class CatalogError(PetBrowserError):
    """
    Transport failure or non-success response from the catalog service.

    user_message is the human-readable message taken from the error payload,
    or None when the service didn't send one (network errors, HTML error pages).
    """

    def __init__(
            self,
            user_message: Optional[str] = None,
            *,
            status_code: Optional[int] = None,
            detail: str = "",
    ):
        self.user_message = user_message
        self.status_code = status_code
        super().__init__(detail or user_message or "catalog request failed")

class RequestCancelled(PetBrowserError):
    """A superseded catalog request was aborted. Never shown to the user."""
    pass
