"""Character code table for Digimon World 2 text.

Single-byte codes cover digits, letters, punctuation and box control
tokens.  Codes prefixed with 0xF0 address a dictionary of whole words,
so the second byte selects a word rather than a letter.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

from dw2_tools.dungeon.errors import IllegalCharacterCodeError


TERMINATOR = 0xFF
EXTENDED_PREFIX = 0xF0

# Control tokens
NEW_BOX = 0xFC
SPACE = 0xFD
ENTER = 0xFE


_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

_PUNCTUATION: dict[int, str] = {
    0x41: "<SQUARE>",
    0x44: "?",
    0x45: "!",
    0x46: "/",
    0x49: "-",
    0x54: ",",
    0x55: ".",
    0x56: "",
    0x5B: "PLUS SIGN",
    0xFB: "<X>",
    NEW_BOX: "<NEW BOX>",
    SPACE: " ",
    ENTER: "<ENTER>",
}

# 0xF0xx word dictionary.  Gaps (0x01-0x05, 0x17, 0x25, 0x36, 0x43) are
# unknown and decode as illegal codes.
_WORDS: dict[int, str] = {
    0x00: "Akira",
    0x06: "Digimon", 0x07: "you", 0x08: "the", 0x09: "Digi-Beetle",
    0x0A: "Domain", 0x0B: "Guard", 0x0C: "Tamer", 0x0D: "here",
    0x0E: "have", 0x0F: "Knights",
    0x10: "and", 0x11: "thing", 0x12: "Security", 0x13: "that",
    0x14: "Bertran", 0x15: "Tournament", 0x16: "Crimson",
    0x18: "something", 0x19: "Item", 0x1A: "Falcon", 0x1B: "for",
    0x1C: "That's", 0x1D: "Commander", 0x1E: "Blood", 0x1F: "Leader",
    0x20: "Attendant", 0x21: "Cecilia", 0x22: "all", 0x23: "mission",
    0x24: "this",
    0x26: "Archive", 0x27: "Black", 0x28: "I'll", 0x29: "are",
    0x2A: "Sword", 0x2B: "right", 0x2C: "Digivolve", 0x2D: "enter",
    0x2E: "What", 0x2F: "will",
    0x30: "come", 0x31: "You", 0x32: "Coliseum", 0x33: "about",
    0x34: "don't", 0x35: "anything",
    0x37: "Parts", 0x38: "where", 0x39: "The", 0x3A: "know",
    0x3B: "Leomon", 0x3C: "want", 0x3D: "Oldman", 0x3E: "like",
    0x3F: "need",
    0x40: "Chief", 0x41: "with", 0x42: "Thank",
    0x44: "Island", 0x45: "can", 0x46: "really", 0x47: "Blue",
    0x48: "time",
}


def extended_code(second: int) -> int:
    """Combine the 0xF0 prefix with its second byte."""
    return (EXTENDED_PREFIX << 8) | second


class GlyphTable:
    """Read-only mapping from character code to display token."""

    def __init__(self, glyphs: Mapping[int, str]) -> None:
        self._glyphs = MappingProxyType(dict(glyphs))

    def lookup(self, code: int) -> str:
        try:
            return self._glyphs[code]
        except KeyError:
            raise IllegalCharacterCodeError(code) from None

    def __contains__(self, code: object) -> bool:
        return code in self._glyphs

    def __len__(self) -> int:
        return len(self._glyphs)

    def __iter__(self) -> Iterator[int]:
        return iter(self._glyphs)

    def __repr__(self) -> str:
        return f"GlyphTable({len(self._glyphs)} codes)"


def _build_default_glyphs() -> GlyphTable:
    glyphs: dict[int, str] = {code: ch for code, ch in enumerate(_ALPHABET)}
    glyphs.update(_PUNCTUATION)
    glyphs.update({extended_code(b): word for b, word in _WORDS.items()})
    return GlyphTable(glyphs)


DEFAULT_GLYPHS = _build_default_glyphs()
