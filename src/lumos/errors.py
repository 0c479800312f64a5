from __future__ import annotations


class LumosError(RuntimeError):
    pass


class NotSupportedError(LumosError):
    """The night light store is missing or unreadable for this account."""


class InvalidDataError(LumosError, ValueError):
    """A blob does not match the known layout. Never repaired."""


class InvalidLengthError(InvalidDataError):
    pass


class InconsistentFlagError(InvalidDataError):
    pass
