from __future__ import annotations


class VectorClockError(Exception):
    """Base class for every error raised by vclock."""


class DecodeError(VectorClockError, ValueError):
    """Bytes could not be decoded into a vector clock.

    No partial clock is ever produced. Callers decide whether to fall back
    to an empty clock or escalate.
    """


class EncodeError(VectorClockError):
    """A clock could not be encoded.

    Only reachable when the internal mapping was modified behind the API,
    so this is a programming error and is not meant to be caught.
    """


class InvalidEntryError(VectorClockError, ValueError):
    """A process id or counter is outside the clock's data model."""
