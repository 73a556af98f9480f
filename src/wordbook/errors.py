"""Error taxonomy shared by the stores and the command surface.

Every failure a command can report is a WordbookError with a human-readable
message. None of them are fatal: a failed command leaves the stores usable.
"""

from __future__ import annotations


class WordbookError(Exception):
    """Base class for errors reported back to the caller of a command."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class LockFailure(WordbookError):
    """A store lock could not be acquired."""


class IOFailure(WordbookError):
    """Creating the data directory or reading/writing a file failed."""


class ParseFailure(WordbookError):
    """A stored JSON document is malformed or has the wrong shape."""


class NotFound(WordbookError, LookupError):
    """An id or key was required but is absent."""


class InvalidArgument(WordbookError, ValueError):
    """Unrecognized mode, unknown command or missing argument."""
