"""Exceptions raised by the toroidal Game of Life core."""


class LifeError(Exception):
    """Base class for all toruslife errors."""


class InvalidDimensionError(LifeError, ValueError):
    """Raised when a grid is constructed with a non-positive dimension."""


class InvalidArgumentError(LifeError, ValueError):
    """Raised when a required argument is missing or unusable.

    Covers an absent randomness source, a malformed state matrix, an
    out-of-range probability and values that are not valid cell states.
    """
