from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union

from pet_browser.core.records import Record
from pet_browser.core.status import StatusValue

GENERIC_ERROR_MESSAGE = "Oops! Something went wrong."


@dataclass(frozen=True)
class Idle:
    """No filters active; nothing has been requested."""


@dataclass(frozen=True)
class Loading:
    """A catalog request for `filters` is in flight."""
    filters: Tuple[StatusValue, ...] = ()


@dataclass(frozen=True)
class Success:
    records: Tuple[Record, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.records


@dataclass(frozen=True)
class Failure:
    message: str = GENERIC_ERROR_MESSAGE


ResultState = Union[Idle, Loading, Success, Failure]

IDLE = Idle()
