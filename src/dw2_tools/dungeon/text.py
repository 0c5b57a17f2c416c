"""Decoding of 0xFF-terminated Digimon World 2 strings."""

from __future__ import annotations

from dw2_tools.dungeon.errors import TruncatedDataError
from dw2_tools.dungeon.glyphs import (
    DEFAULT_GLYPHS,
    EXTENDED_PREFIX,
    TERMINATOR,
    GlyphTable,
    extended_code,
)


def parse_string_with_end(raw: bytes, offset: int,
                          glyphs: GlyphTable = DEFAULT_GLYPHS,
                          ) -> tuple[str, int]:
    """Decode the string starting at ``offset``.

    Returns the decoded text and the offset just past the terminator.
    Every string needs at least the 0xFF terminator, so running out of
    bytes at any point (including before the first byte) is an error.
    """
    pos = offset
    pieces: list[str] = []

    while True:
        if pos < 0 or pos >= len(raw):
            raise TruncatedDataError("truncated character")
        b = raw[pos]
        pos += 1

        if b == TERMINATOR:
            return "".join(pieces), pos

        if b == EXTENDED_PREFIX:
            if pos >= len(raw):
                raise TruncatedDataError("truncated character")
            code = extended_code(raw[pos])
            pos += 1
        else:
            code = b

        pieces.append(glyphs.lookup(code))


def parse_string(raw: bytes, offset: int = 0,
                 glyphs: GlyphTable = DEFAULT_GLYPHS) -> str:
    """Decode the string starting at ``offset``."""
    text, _ = parse_string_with_end(raw, offset, glyphs)
    return text
