from __future__ import annotations

from enum import Enum
from typing import Tuple


class StatusValue(str, Enum):
    """Pet statuses the catalog can be filtered by."""
    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"


# Checklist order in the UI
STATUSES: Tuple[StatusValue, ...] = tuple(StatusValue)

# Hard ceiling on simultaneously active filters
MAX_ACTIVE_FILTERS = 3


def parse_status(value: str | StatusValue) -> StatusValue:
    """
    Convert a raw status string (e.g. a checklist value) into a StatusValue.

    :raises ValueError: if the value isn't one of the known statuses.
    """
    if isinstance(value, StatusValue):
        return value
    try:
        return StatusValue(str(value).strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown status {value!r}; expected one of {[s.value for s in STATUSES]}"
        ) from None
