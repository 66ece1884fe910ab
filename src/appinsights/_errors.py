"""Exception types raised by the SDK."""

from __future__ import annotations


class AppInsightsError(Exception):
    """Base class for all SDK errors."""


class BuilderConsumedError(AppInsightsError, RuntimeError):
    """A config builder was used after ``build()`` already finalized it."""
