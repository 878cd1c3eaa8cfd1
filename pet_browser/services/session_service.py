from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from concurrent.futures import Executor
from typing import Callable, Iterator, Mapping, Optional

from pet_browser.core.fetch_coordinator import CatalogCollaborator, FetchCoordinator
from pet_browser.core.filter_state import FilterSelector
from pet_browser.core.result_state import ResultState
from pet_browser.core.status import MAX_ACTIVE_FILTERS

logger = logging.getLogger(__name__)


class BrowserSession:
    """
    One open browser tab: its filter selector wired to its own fetch coordinator.

    The coordinator subscribes to the selector on construction, so it sees the
    initial (empty) filters straight away and starts out Idle.
    """

    def __init__(
            self,
            session_id: str,
            client: CatalogCollaborator,
            *,
            max_active_filters: int = MAX_ACTIVE_FILTERS,
            executor: Optional[Executor] = None,
    ):
        self.session_id = session_id
        self.selector = FilterSelector(max_active=max_active_filters)
        self.coordinator = FetchCoordinator(client, executor=executor)
        self._unsubscribe = self.selector.subscribe(self.coordinator.on_filters_changed)

    @property
    def state(self) -> ResultState:
        return self.coordinator.state

    def close(self) -> None:
        self._unsubscribe()
        self.coordinator.close()


class SessionRegistry(Mapping[str, BrowserSession]):
    """
    Server-side store of BrowserSessions keyed by the id kept in the page.

    Holds at most `max_sessions`; when full, the least recently used session
    is closed (cancelling any request it still has in flight) and dropped.
    """

    def __init__(
            self,
            session_factory: Callable[[str], BrowserSession],
            max_sessions: int = 256,
    ):
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be at least 1, got {max_sessions}")
        self._factory = session_factory
        self._max_sessions = max_sessions
        self._sessions: "OrderedDict[str, BrowserSession]" = OrderedDict()
        self._lock = threading.Lock()

    def __getitem__(self, session_id: str) -> BrowserSession:
        with self._lock:
            session = self._sessions[session_id]
            self._sessions.move_to_end(session_id)
            return session

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._sessions))

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def get_or_create(self, session_id: str) -> BrowserSession:
        evicted = []
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
                return session

            session = self._factory(session_id)
            self._sessions[session_id] = session
            while len(self._sessions) > self._max_sessions:
                _, old = self._sessions.popitem(last=False)
                evicted.append(old)

        logger.info(
            "Browser session created",
            extra={"session_id": session_id, "n_sessions": len(self)},
        )
        for old in evicted:
            logger.info("Evicting browser session", extra={"session_id": old.session_id})
            old.close()
        return session

    def discard(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is not None:
            session.close()

    def close(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.close()
