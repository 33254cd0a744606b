"""Exceptions raised by prscribe_core.

Generation failures are not exceptions here: providers log them and return
None, and the summarizers substitute a placeholder so one bad diff never
aborts the batch. What remains are the conditions that make the whole run
meaningless.
"""

from __future__ import annotations


class PrscribeError(Exception):
    """Base class for all prscribe errors."""


class MissingPlatformDataError(PrscribeError):
    """The hosting platform returned an object without data the run depends on."""


class EventError(PrscribeError):
    """The CI event could not be mapped to a pull request or release."""
