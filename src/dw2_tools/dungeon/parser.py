"""Dungeon file parsing for Digimon World 2.

Every structure is located by an absolute 4-byte little-endian pointer
into the one file buffer.  Each parser takes the whole buffer plus an
offset and returns owned copies, so the buffer can be dropped afterwards.
"""

from __future__ import annotations

import logging
import struct
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from dw2_tools.dungeon.data import (
    FLOOR_LAYOUT_PTR_OFFSET,
    FLOOR_PLAN_SIZE,
    FLOOR_TABLE_SIZE,
    LAYOUT_SLOTS,
    LAYOUT_TABLE_SIZE,
    POINTER_SIZE,
    Dungeon,
    Floor,
    FloorPlan,
    Layout,
)
from dw2_tools.dungeon.errors import (
    DungeonError,
    InvalidPointerTargetError,
    TruncatedDataError,
)
from dw2_tools.dungeon.glyphs import DEFAULT_GLYPHS, GlyphTable
from dw2_tools.dungeon.text import parse_string

logger = logging.getLogger(__name__)


@contextmanager
def decode_context(label: str) -> Iterator[None]:
    """Prefix ``label`` to the breadcrumbs of any DungeonError raised inside."""
    try:
        yield
    except DungeonError as exc:
        exc.context.insert(0, label)
        raise


def _check_target(raw: bytes, ptr: int) -> None:
    """Reject pointers that land past the end of the buffer."""
    if ptr >= len(raw):
        raise InvalidPointerTargetError(ptr, len(raw))


# ─── Parsing Functions ────────────────────────────────────────────────────────

def parse_ptr(raw: bytes, offset: int = 0) -> int:
    """Read a little-endian u32 file offset."""
    if offset < 0 or offset + POINTER_SIZE > len(raw):
        raise TruncatedDataError("truncated pointer")
    return struct.unpack_from("<I", raw, offset)[0]


def parse_floor_plan(raw: bytes, offset: int) -> FloorPlan:
    """Copy the 48×32 tile grid starting at ``offset``."""
    if offset < 0 or offset + FLOOR_PLAN_SIZE > len(raw):
        raise TruncatedDataError("truncated floor plan")
    return FloorPlan(bytes(raw[offset:offset + FLOOR_PLAN_SIZE]))


def parse_layout(raw: bytes, table_ptr: int) -> Layout:
    """Parse a 20-byte layout pointer table and its floor plan."""
    if table_ptr < 0 or table_ptr + LAYOUT_TABLE_SIZE > len(raw):
        raise TruncatedDataError("truncated layout pointer table")

    with decode_context("parsing floor plan pointer"):
        floor_plan_ptr = parse_ptr(raw, table_ptr)
    with decode_context("parsing floor plan"):
        _check_target(raw, floor_plan_ptr)
        floor_plan = parse_floor_plan(raw, floor_plan_ptr)
    logger.debug("Floor plan is at 0x%X", floor_plan_ptr)

    with decode_context("parsing warps pointer"):
        warps_ptr = parse_ptr(raw, table_ptr + 4)
    with decode_context("parsing chests pointer"):
        chests_ptr = parse_ptr(raw, table_ptr + 8)
    with decode_context("parsing traps pointer"):
        traps_ptr = parse_ptr(raw, table_ptr + 12)
    with decode_context("parsing spawns pointer"):
        spawns_ptr = parse_ptr(raw, table_ptr + 16)

    return Layout(
        table_ptr=table_ptr,
        floor_plan_ptr=floor_plan_ptr,
        floor_plan=floor_plan,
        warps_ptr=warps_ptr,
        chests_ptr=chests_ptr,
        traps_ptr=traps_ptr,
        spawns_ptr=spawns_ptr,
    )


def parse_floor(raw: bytes, table_ptr: int,
                glyphs: GlyphTable = DEFAULT_GLYPHS) -> Floor:
    """Parse a floor table: name pointer, reserved word, 8 layout pointers."""
    if table_ptr < 0 or table_ptr + FLOOR_TABLE_SIZE > len(raw):
        raise TruncatedDataError("truncated floor table")

    with decode_context("parsing name pointer"):
        name_ptr = parse_ptr(raw, table_ptr)
    with decode_context("parsing name"):
        _check_target(raw, name_ptr)
        title = parse_string(raw, name_ptr, glyphs)
    logger.debug('Floor: "%s"', title)

    floor = Floor(table_ptr=table_ptr, title=title)
    # Seen pointers are scoped to this floor's slot table only.
    for i in range(LAYOUT_SLOTS):
        with decode_context("parsing layout pointer"):
            layout_ptr = parse_ptr(
                raw, table_ptr + FLOOR_LAYOUT_PTR_OFFSET + i * POINTER_SIZE)
        floor.slot_pointers.append(layout_ptr)

        if layout_ptr in floor.layouts:
            logger.debug("Layout slot %d reuses layout at 0x%X", i + 1, layout_ptr)
            continue

        with decode_context(f"parsing layout {i + 1}"):
            _check_target(raw, layout_ptr)
            floor.layouts[layout_ptr] = parse_layout(raw, layout_ptr)

    return floor


def decode_dungeon(raw: bytes, glyphs: GlyphTable = DEFAULT_GLYPHS) -> Dungeon:
    """Decode a whole dungeon file from memory.

    The file starts with a list of floor table pointers ended by a zero
    pointer.  Any failure aborts the decode; no partial Dungeon is
    returned.
    """
    raw = bytes(raw)
    logger.debug("Dungeon raw file is %d bytes", len(raw))

    floors: list[Floor] = []
    pos = 0
    while True:
        with decode_context("parsing next floor pointer"):
            floor_ptr = parse_ptr(raw, pos)
        pos += POINTER_SIZE
        if floor_ptr == 0:
            break

        with decode_context(f"parsing floor {len(floors) + 1}"):
            _check_target(raw, floor_ptr)
            floors.append(parse_floor(raw, floor_ptr, glyphs))

    return Dungeon(floors=floors)


def load_dungeon(path: Union[str, Path], verbose: bool = False) -> Dungeon:
    """Read a dungeon file from disk and decode it.

    Raises OSError if the file cannot be read and DungeonError if its
    contents are malformed.
    """
    dungeon_path = Path(path)
    raw = dungeon_path.read_bytes()
    if verbose:
        print(f"Dungeon raw file is {len(raw)} bytes.")

    with decode_context(f'parsing dungeon file "{dungeon_path}"'):
        dungeon = decode_dungeon(raw)

    if verbose:
        layout_count = sum(len(f.layouts) for f in dungeon.floors)
        print(f"Parsed {len(dungeon.floors)} floors ({layout_count} layouts).")
    return dungeon
