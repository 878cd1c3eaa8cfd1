from __future__ import annotations

import logging
import threading
from typing import Callable, List, Tuple

from pet_browser.core.status import MAX_ACTIVE_FILTERS, StatusValue, parse_status

logger = logging.getLogger(__name__)

FilterSet = Tuple[StatusValue, ...]
FilterListener = Callable[[FilterSet], None]


class FilterSelector:
    """
    Owns the user's active status filters.

    Invariants:

    - filters are unique and kept in the order they were selected
    - at most `max_active` filters are active at once; selecting another
      status at the cap is ignored (older selections are never evicted)
    - deselecting is always allowed

    Subscribers receive a snapshot of the filters after every change that
    actually altered membership. No-op calls don't notify.

    A mutation and its notification happen under one lock, so concurrent
    callers are serialised and listeners see snapshots in mutation order.
    """

    def __init__(self, max_active: int = MAX_ACTIVE_FILTERS):
        if max_active < 1:
            raise ValueError(f"max_active must be at least 1, got {max_active}")
        self._max_active = max_active
        self._filters: List[StatusValue] = []
        self._listeners: List[FilterListener] = []
        self._lock = threading.RLock()

    @property
    def max_active(self) -> int:
        return self._max_active

    @property
    def filters(self) -> FilterSet:
        with self._lock:
            return tuple(self._filters)

    @property
    def at_capacity(self) -> bool:
        with self._lock:
            return len(self._filters) >= self._max_active

    def is_selected(self, status: str | StatusValue) -> bool:
        value = parse_status(status)
        with self._lock:
            return value in self._filters

    def can_select(self, status: str | StatusValue) -> bool:
        """False when the cap is reached and `status` isn't already selected."""
        with self._lock:
            return self.is_selected(status) or not self.at_capacity

    def toggle(self, status: str | StatusValue) -> bool:
        """
        Select `status` if absent, deselect it if present.

        Returns True if the filters changed.
        """
        value = parse_status(status)
        with self._lock:
            if value in self._filters:
                self._filters.remove(value)
            elif len(self._filters) < self._max_active:
                self._filters.append(value)
            else:
                logger.debug(
                    "Filter cap reached; ignoring toggle",
                    extra={"status": value.value, "max_active": self._max_active},
                )
                return False

            self._notify()
            return True

    def reset(self) -> bool:
        """Clear all filters. Returns True if anything was selected."""
        with self._lock:
            if not self._filters:
                return False
            self._filters.clear()
            self._notify()
            return True

    def subscribe(self, listener: FilterListener) -> Callable[[], None]:
        """
        Register `listener` and call it straight away with the current filters.

        Returns a function that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)
            listener(self.filters)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        # Caller holds the lock
        snapshot = self.filters
        logger.info(
            "filters_changed",
            extra={"filters": [s.value for s in snapshot]},
        )
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Filter listener failed")
