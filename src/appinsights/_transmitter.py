"""HTTP transmitter: POSTs envelope batches to the track endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from appinsights._types import Envelope

logger = logging.getLogger("appinsights.transmitter")

_PARTIAL_SUCCESS = 206


class Transmitter:
    """Sends batches over HTTP. Used as the processor's batch handler.

    Failures are logged but never raised. ``send`` reports whether the
    endpoint took the batch so callers can count losses.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        timeout_s: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout_s)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def send(self, envelopes: list[Envelope]) -> bool:
        if not envelopes:
            return True
        payload = [e.to_dict() for e in envelopes]
        try:
            response = self._client.post(
                self._endpoint,
                json=payload,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError:
            logger.debug(
                "Failed to send %d envelopes to %s", len(envelopes), self._endpoint,
                exc_info=True,
            )
            return False

        if response.status_code == _PARTIAL_SUCCESS:
            self._log_partial(response, len(envelopes))
            return True
        if response.is_success:
            return True
        logger.warning(
            "Endpoint %s rejected %d envelopes with HTTP %d",
            self._endpoint,
            len(envelopes),
            response.status_code,
        )
        return False

    def _log_partial(self, response: httpx.Response, sent: int) -> None:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        logger.warning(
            "Endpoint accepted %s of %s envelopes",
            body.get("itemsAccepted", "?"),
            body.get("itemsReceived", sent),
        )

    def close(self) -> None:
        """Close the HTTP client if this transmitter created it."""
        if self._owns_client:
            self._client.close()
