"""Common utilities and exception classes."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sumoparse.models import Division


class SumoparseError(Exception):
    """Base exception for sumoparse."""


class FetchError(SumoparseError):
    """HTTP fetch failure after retries."""


class ParseError(SumoparseError):
    """HTML parse failure."""


class RosterNotFoundError(SumoparseError):
    """Roster JSON for a division is missing or unreadable."""

    def __init__(self, division: Division, path: Path, reason: str = "") -> None:
        self.division = division
        self.path = path
        message = (
            f"Failed to load rikishi data for division {division.value} "
            f"({division.label}) from {path}"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
