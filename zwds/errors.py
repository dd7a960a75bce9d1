"""
Exception types raised by the chart engine.

Every error is also a ValueError, so callers that only guard against
bad input with `except ValueError` keep working.
"""


class ZwdsError(Exception):
    """Base class for all chart engine errors."""


class OutOfRangeError(ZwdsError, ValueError):
    """Date falls outside the range covered by the lunar calendar table."""


class InvalidDateError(ZwdsError, ValueError):
    """Solar or lunar date that does not exist (e.g. Feb 30, lunar day 30 of a short month)."""


class InvalidPositionError(ZwdsError, ValueError):
    """Stem, branch or hour label outside the canonical sets."""


class UnknownStemError(ZwdsError, ValueError):
    """Four Transformations lookup for a stem that is not one of the ten."""


class InvalidBirthInputError(ZwdsError, ValueError):
    """Birth input field that cannot be normalised (gender, year type, ...)."""
