from __future__ import annotations

import logging
import threading
from typing import Callable, List

from pet_browser.core.exceptions import RequestCancelled

logger = logging.getLogger(__name__)


class CancelToken:
    """
    Abort handle shared between the fetch coordinator and the catalog client.

    cancel() flips the flag and runs registered callbacks (e.g. closing the
    open HTTP response), so a blocked read returns early instead of running
    to completion.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []

        for cb in callbacks:
            try:
                cb()
            except Exception:
                logger.exception("Cancel callback failed")

    def add_callback(self, cb: Callable[[], None]) -> Callable[[], None]:
        """
        Register cb to run on cancel. Runs immediately if already cancelled.

        Returns a function that unregisters the callback.
        """
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(cb)
                return lambda: self._discard(cb)
        cb()
        return lambda: None

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelled("request was superseded")

    def _discard(self, cb: Callable[[], None]) -> None:
        with self._lock:
            try:
                self._callbacks.remove(cb)
            except ValueError:
                pass
