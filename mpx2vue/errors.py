"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from Mpx2VueUserError.

Malformed template markup is NOT an exception: the parser reports it
through ParseResult.errors.
"""

from __future__ import annotations


class Mpx2VueUserError(Exception):
    """
    Base class for all user-facing errors in mpx2vue.

    These errors indicate problems that the user can fix:
    configuration issues, unreadable input files, etc.
    """
    pass


__all__ = ["Mpx2VueUserError"]
