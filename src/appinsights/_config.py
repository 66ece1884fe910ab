"""Client configuration and its two-stage builder.

``Config.builder()`` returns a :class:`DefaultBuilder`, whose only job is to
seed a :class:`Builder` with the default endpoint and interval. Overrides are
applied on the builder, and ``build()`` finalizes it into an immutable
:class:`Config`::

    config = (
        Config.builder()
        .with_ikey("my-key")
        .with_endpoint("https://example.com/v2/track")
        .with_interval(timedelta(seconds=5))
        .build()
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from appinsights._errors import BuilderConsumedError

logger = logging.getLogger("appinsights.config")

DEFAULT_ENDPOINT = "https://dc.services.visualstudio.com/v2/track"
DEFAULT_INTERVAL = timedelta(seconds=2)


@dataclass(frozen=True)
class Config:
    """Immutable configuration used to initialize a telemetry client."""

    ikey: str
    endpoint: str
    interval: timedelta

    @classmethod
    def new(cls, ikey: str) -> Config:
        """Create a config with the given instrumentation key and defaults."""
        return cls.builder().with_ikey(ikey).build()

    @staticmethod
    def builder() -> DefaultBuilder:
        """Start a builder chain seeded with default parameters."""
        return DefaultBuilder()


class DefaultBuilder:
    """Stateless first stage of the builder chain."""

    def with_ikey(self, ikey: str) -> Builder:
        return Builder(ikey, DEFAULT_ENDPOINT, DEFAULT_INTERVAL)


class Builder:
    """Mutable staging area for a :class:`Config`.

    Every ``with_*`` call replaces one field and returns the builder itself,
    so calls chain in any order. A builder is single-use: once ``build()`` has
    run, any further call raises :class:`BuilderConsumedError`.
    """

    __slots__ = ("_consumed", "_endpoint", "_ikey", "_interval")

    def __init__(self, ikey: str, endpoint: str, interval: timedelta) -> None:
        self._ikey = ikey
        self._endpoint = endpoint
        self._interval = interval
        self._consumed = False

    def _check_live(self) -> None:
        if self._consumed:
            raise BuilderConsumedError("builder was already finalized by build()")

    def with_ikey(self, ikey: str) -> Builder:
        self._check_live()
        self._ikey = ikey
        return self

    def with_endpoint(self, endpoint: str) -> Builder:
        self._check_live()
        self._endpoint = endpoint
        return self

    def with_interval(self, interval: timedelta) -> Builder:
        self._check_live()
        self._interval = interval
        return self

    @property
    def ikey(self) -> str:
        """Instrumentation key currently staged."""
        self._check_live()
        return self._ikey

    @property
    def endpoint(self) -> str:
        """Endpoint URL currently staged."""
        self._check_live()
        return self._endpoint

    @property
    def interval(self) -> timedelta:
        """Flush interval currently staged."""
        self._check_live()
        return self._interval

    def build(self) -> Config:
        """Finalize into a :class:`Config`. The builder is unusable afterwards."""
        self._check_live()
        self._consumed = True
        config = Config(
            ikey=self._ikey,
            endpoint=self._endpoint,
            interval=self._interval,
        )
        logger.debug("Built config for endpoint %s", config.endpoint)
        return config

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "live"
        return (
            f"Builder(ikey={self._ikey!r}, endpoint={self._endpoint!r}, "
            f"interval={self._interval!r}, {state})"
        )
