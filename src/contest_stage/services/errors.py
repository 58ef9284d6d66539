"""Domain exceptions raised by the contest services.

Route handlers translate these into HTTP responses; services never raise
``HTTPException`` themselves.
"""

from __future__ import annotations


class ContestError(RuntimeError):
    """Base exception for contest service failures."""


class InvalidScope(ContestError):
    """Raised when leaderboard filter parameters are malformed.

    A well-formed scope that simply matches nothing is not an error.
    """


class DuplicateSignal(ContestError):
    """Raised when an identity tries to record a second vote or judge score."""


class UnavailableError(ContestError):
    """Raised when the data store could not be read or written."""


class NotFoundError(ContestError):
    """Raised when a referenced video, phase or category does not exist."""


class IneligibleVideo(ContestError):
    """Raised when a signal targets a video that is not approved."""
