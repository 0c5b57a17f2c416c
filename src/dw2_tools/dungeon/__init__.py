"""Digimon World 2 dungeon file package."""

from dw2_tools.dungeon.data import (
    Dungeon,
    Floor,
    FloorPlan,
    Layout,
)
from dw2_tools.dungeon.errors import (
    DungeonError,
    IllegalCharacterCodeError,
    InvalidPointerTargetError,
    TruncatedDataError,
)
from dw2_tools.dungeon.glyphs import DEFAULT_GLYPHS, GlyphTable
from dw2_tools.dungeon.parser import decode_dungeon, load_dungeon
from dw2_tools.dungeon.text import parse_string

__all__ = [
    "Dungeon",
    "Floor",
    "FloorPlan",
    "Layout",
    "DungeonError",
    "IllegalCharacterCodeError",
    "InvalidPointerTargetError",
    "TruncatedDataError",
    "DEFAULT_GLYPHS",
    "GlyphTable",
    "decode_dungeon",
    "load_dungeon",
    "parse_string",
]
