"""Exceptions raised while decoding a dungeon file."""

from __future__ import annotations


class DungeonError(Exception):
    """Base exception for dungeon decoding.

    ``context`` holds breadcrumbs added as the error unwinds, outermost
    first, e.g. ``["parsing floor 2", "parsing name"]``.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.context: list[str] = []

    def __str__(self) -> str:
        return ": ".join([*self.context, self.message])


class TruncatedDataError(DungeonError):
    """Raised when fewer bytes remain than a decode step needs."""


class InvalidPointerTargetError(TruncatedDataError):
    """Raised when a resolved pointer lands outside the buffer."""

    def __init__(self, pointer: int, size: int) -> None:
        super().__init__(
            f"pointer 0x{pointer:X} is outside the {size}-byte buffer")
        self.pointer = pointer
        self.size = size


class IllegalCharacterCodeError(DungeonError):
    """Raised when a character code has no glyph."""

    def __init__(self, code: int) -> None:
        super().__init__(f"illegal character code 0x{code:02X}")
        self.code = code
