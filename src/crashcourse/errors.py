"""
Errors - Exception types raised by the simulation core.

Only setup-time problems raise. Everything inside the tick loop is
clamped instead, so a running session never stalls on an exception.
"""


class CrashCourseError(Exception):
    """Base class for all CrashCourse errors."""


class InvalidConfiguration(CrashCourseError, ValueError):
    """Malformed generation or setup parameters.

    Raised when a road curve or obstacle field cannot be built from the
    given parameters, e.g. too few segments for the straight start and
    finish zones.
    """
