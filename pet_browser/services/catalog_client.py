from __future__ import annotations

import json
import logging
import socket
from typing import Any, Dict, Optional

import requests

from pet_browser.config.model import CatalogConfig
from pet_browser.core.cancellation import CancelToken
from pet_browser.core.exceptions import CatalogError, RequestCancelled

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 16 * 1024


def extract_error_message(body: bytes) -> Optional[str]:
    """Pull the human-readable 'message' out of an error payload, if there is one."""
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    message = payload.get("message")
    if isinstance(message, str) and message.strip():
        return message
    return None


def _response_socket(response: requests.Response) -> Optional[socket.socket]:
    """The socket behind a streamed response, if it still has one."""
    raw = getattr(response, "raw", None)
    sock = getattr(getattr(raw, "_connection", None), "sock", None)
    if sock is None:
        # http.client response -> BufferedReader -> SocketIO
        fp = getattr(getattr(raw, "_fp", None), "fp", None)
        sock = getattr(getattr(fp, "raw", None), "_sock", None)
    return sock if isinstance(sock, socket.socket) else None


def _abort_response(response: requests.Response) -> None:
    """Cancel callback: shut the socket down so a blocked recv() returns, then close."""
    sock = _response_socket(response)
    if sock is not None:
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            logger.debug("Socket already closed on cancel", extra={"error": str(e)})
    response.close()


class CatalogClient:
    """
    HTTP client for the pet catalog's findByStatus endpoint.

    The body is streamed in chunks so a CancelToken can abort a slow download:
    cancelling shuts down the connection's socket and closes the response,
    and the read loop checks the token between chunks.
    """

    def __init__(self, config: CatalogConfig, session: Optional[requests.Session] = None):
        self.config = config
        self._session = session or requests.Session()

    @property
    def find_by_status_url(self) -> str:
        return f"{self.config.base_url}/pet/findByStatus"

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }

    def find_by_status(self, statuses: str, cancel_token: Optional[CancelToken] = None) -> Any:
        """
        Fetch pets whose status is in the comma-joined `statuses`.

        Returns the decoded JSON payload, or None if a successful response body
        isn't valid JSON.

        :raises RequestCancelled: the token was cancelled before or during the request
        :raises CatalogError: network failure or non-2xx response
        """
        token = cancel_token or CancelToken()
        token.raise_if_cancelled()

        try:
            # Passed as a raw string so the comma separator isn't percent-encoded
            response = self._session.get(
                self.find_by_status_url,
                params=f"status={statuses}",
                headers=self._get_headers(),
                timeout=self.config.timeout_seconds,
                stream=True,
            )
        except requests.RequestException as e:
            if token.cancelled:
                raise RequestCancelled("request was superseded") from e
            raise CatalogError(detail=f"Failed to reach catalog at {self.find_by_status_url}: {e}") from e

        with response:
            unregister = token.add_callback(lambda: _abort_response(response))
            try:
                body = self._read_body(response, token)
            except RequestCancelled:
                raise
            except (requests.RequestException, OSError, AttributeError, ValueError) as e:
                # A response closed from another thread surfaces as one of these
                if token.cancelled:
                    raise RequestCancelled("request was superseded") from e
                raise CatalogError(
                    status_code=response.status_code,
                    detail=f"Failed to read catalog response: {e}",
                ) from e
            finally:
                unregister()

        if not response.ok:
            message = extract_error_message(body)
            raise CatalogError(
                message,
                status_code=response.status_code,
                detail=f"Catalog returned HTTP {response.status_code}",
            )

        try:
            return json.loads(body.decode(response.encoding or "utf-8"))
        except (UnicodeDecodeError, LookupError, ValueError):
            logger.warning(
                "Catalog returned a non-JSON body",
                extra={"status_code": response.status_code, "n_bytes": len(body)},
            )
            return None

    @staticmethod
    def _read_body(response: requests.Response, token: CancelToken) -> bytes:
        chunks = []
        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
            token.raise_if_cancelled()
            if chunk:
                chunks.append(chunk)
        token.raise_if_cancelled()
        return b"".join(chunks)

    def close(self) -> None:
        self._session.close()
