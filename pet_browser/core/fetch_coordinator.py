from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Protocol

from pet_browser.core.cancellation import CancelToken
from pet_browser.core.exceptions import CatalogError, RequestCancelled
from pet_browser.core.filter_state import FilterSet
from pet_browser.core.records import normalise_records
from pet_browser.core.result_state import (
    GENERIC_ERROR_MESSAGE,
    IDLE,
    Failure,
    Loading,
    ResultState,
    Success,
)

logger = logging.getLogger(__name__)

ResultListener = Callable[[ResultState], None]


class CatalogCollaborator(Protocol):
    def find_by_status(self, statuses: str, cancel_token: CancelToken) -> Any:
        ...


def build_status_query(filters: FilterSet) -> str:
    """Comma-join the filters in selection order, e.g. 'available,pending'."""
    return ",".join(s.value for s in filters)


class FetchCoordinator:
    """
    Keeps the displayed ResultState in sync with the active filters.

    Every filter change starts a new epoch. Before a new request is issued the
    previous one is cancelled through its CancelToken, and a result is only
    applied while its epoch is still current, so at most one request's outcome
    is ever visible and results land in filter-change order.

    Requests run on a worker pool; on_filters_changed() returns the Future so
    callers can wait for settlement.
    """

    def __init__(
            self,
            client: CatalogCollaborator,
            executor: Optional[Executor] = None,
    ):
        self._client = client
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="catalog-fetch"
        )

        self._lock = threading.RLock()
        self._state: ResultState = IDLE
        self._epoch = 0
        self._token: Optional[CancelToken] = None
        self._listeners: List[ResultListener] = []
        self._closed = False

    # ---------------------------------------------------------
    # Public API
    # ---------------------------------------------------------
    @property
    def state(self) -> ResultState:
        with self._lock:
            return self._state

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._token is not None

    def subscribe(self, listener: ResultListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def on_filters_changed(self, filters: FilterSet) -> Optional[Future]:
        """Filter-set listener. Returns the request Future, or None when idle."""
        with self._lock:
            if self._closed:
                logger.debug("Ignoring filter change on closed coordinator")
                return None

            self._cancel_in_flight()
            self._epoch += 1

            if not filters:
                self._set_state(IDLE)
                return None

            epoch = self._epoch
            token = CancelToken()
            self._token = token
            self._set_state(Loading(tuple(filters)))

            query = build_status_query(filters)
            logger.info(
                "catalog_request_start",
                extra={"epoch": epoch, "status_query": query},
            )
            return self._executor.submit(self._run, epoch, token, query)

    def close(self) -> None:
        """Cancel in-flight work and release the worker pool if we own it."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._cancel_in_flight()
            self._epoch += 1
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    # ---------------------------------------------------------
    # Internals
    # ---------------------------------------------------------
    def _run(self, epoch: int, token: CancelToken, query: str) -> None:
        try:
            payload = self._client.find_by_status(query, token)
        except RequestCancelled:
            logger.debug("catalog_request_cancelled", extra={"epoch": epoch})
            return
        except CatalogError as e:
            new_state: ResultState = Failure(e.user_message or GENERIC_ERROR_MESSAGE)
            if not token.cancelled:
                logger.warning(
                    "catalog_request_failed",
                    extra={
                        "epoch": epoch,
                        "status_code": e.status_code,
                        "error": str(e),
                    },
                )
        except Exception:
            if not token.cancelled:
                logger.exception(
                    "Unexpected error during catalog request",
                    extra={"epoch": epoch, "status_query": query},
                )
            new_state = Failure(GENERIC_ERROR_MESSAGE)
        else:
            new_state = Success(tuple(normalise_records(payload)))

        self._apply(epoch, token, new_state)

    def _apply(self, epoch: int, token: CancelToken, new_state: ResultState) -> bool:
        with self._lock:
            if token.cancelled or epoch != self._epoch:
                logger.debug(
                    "Discarding superseded catalog result",
                    extra={"epoch": epoch, "current_epoch": self._epoch},
                )
                return False

            self._token = None
            self._set_state(new_state)

        if isinstance(new_state, Success):
            logger.info(
                "catalog_request_done",
                extra={"epoch": epoch, "n_records": len(new_state.records)},
            )
        return True

    def _cancel_in_flight(self) -> None:
        token, self._token = self._token, None
        if token is not None:
            logger.debug("Cancelling in-flight catalog request", extra={"epoch": self._epoch})
            token.cancel()

    def _set_state(self, state: ResultState) -> None:
        # Caller holds the lock; listeners see states in the order they're applied.
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Result listener failed")
