"""
Core domain layer: status values, filter selection, record normalisation,
result states and the fetch coordinator that keeps them in sync.
"""

from .cancellation import CancelToken
from .fetch_coordinator import FetchCoordinator
from .filter_state import FilterSelector
from .records import Record, normalise_records
from .result_state import Failure, Idle, Loading, ResultState, Success
from .status import MAX_ACTIVE_FILTERS, STATUSES, StatusValue

__all__ = [
    "CancelToken",
    "FetchCoordinator",
    "FilterSelector",
    "Record",
    "normalise_records",
    "Failure",
    "Idle",
    "Loading",
    "ResultState",
    "Success",
    "MAX_ACTIVE_FILTERS",
    "STATUSES",
    "StatusValue",
]
