"""Error taxonomy shared by the grid model, search and reservation layers."""

from __future__ import annotations


class SeatlyError(Exception):
    """Base failure for seat allocation."""


class ConfigError(SeatlyError):
    """Raised when grid dimensions or runtime settings are invalid. Fatal to a run."""


class ParseError(SeatlyError):
    """Raised when a seat token does not follow the ``R<row>C<column>`` pattern."""


class ValidationError(SeatlyError):
    """Raised when a seat token is negative, fractional, zero or outside the grid."""


class BoundsError(SeatlyError):
    """Raised when a zero-based location lies outside the grid."""


class AlreadyReservedError(SeatlyError):
    """Raised when reserving a seat that is already occupied."""


class InvalidRangeError(SeatlyError):
    """Raised when a seat range crosses rows or runs right to left."""


class NoCandidateError(SeatlyError):
    """Raised when no free block of the requested size exists."""


class InvalidRequestError(SeatlyError):
    """Raised when a request line is not a positive integer seat count."""
