"""Dungeon data models: floors, layouts and floor plans."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


# ─── Constants ───────────────────────────────────────────────────────────────

DEFAULT_DUNGEON_FILE = "DUNG4000.BIN"

POINTER_SIZE = 4

# Floor plans: 48 rows × 32 columns of tile bytes, row-major
FLOOR_PLAN_ROWS = 48
FLOOR_PLAN_COLS = 32
FLOOR_PLAN_SIZE = FLOOR_PLAN_ROWS * FLOOR_PLAN_COLS

# Layout table: floor plan, warps, chests, traps, spawn pointers
LAYOUT_TABLE_SIZE = 5 * POINTER_SIZE

# Floor table: name pointer, 4 reserved bytes, 8 layout pointers
LAYOUT_SLOTS = 8
FLOOR_LAYOUT_PTR_OFFSET = 8
FLOOR_TABLE_SIZE = FLOOR_LAYOUT_PTR_OFFSET + LAYOUT_SLOTS * POINTER_SIZE


# ─── Models ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FloorPlan:
    """48×32 grid of raw tile bytes."""
    tiles: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if len(self.tiles) != FLOOR_PLAN_SIZE:
            raise ValueError(
                f"floor plan needs {FLOOR_PLAN_SIZE} tiles, got {len(self.tiles)}")

    def tile(self, x: int, y: int) -> int:
        if not (0 <= x < FLOOR_PLAN_COLS and 0 <= y < FLOOR_PLAN_ROWS):
            raise IndexError(f"tile ({x}, {y}) is outside the floor plan")
        return self.tiles[y * FLOOR_PLAN_COLS + x]

    def rows(self) -> list[bytes]:
        return [self.tiles[y * FLOOR_PLAN_COLS:(y + 1) * FLOOR_PLAN_COLS]
                for y in range(FLOOR_PLAN_ROWS)]

    def to_hex(self) -> str:
        """Hex dump, one line per row."""
        return "\n".join(" ".join(f"{t:02X}" for t in row)
                         for row in self.rows())


@dataclass(frozen=True)
class Layout:
    """One arrangement of a floor.

    Only the floor plan is decoded.  The warp, chest, trap and spawn
    tables are kept as file offsets.
    """
    table_ptr: int
    floor_plan_ptr: int
    floor_plan: FloorPlan
    warps_ptr: int
    chests_ptr: int
    traps_ptr: int
    spawns_ptr: int

    def to_full(self, include_plan: bool = False) -> str:
        lines = [
            f"Layout table at 0x{self.table_ptr:X}",
            f"  Floor plan at 0x{self.floor_plan_ptr:X}",
            f"  Warps at 0x{self.warps_ptr:X}",
            f"  Chests at 0x{self.chests_ptr:X}",
            f"  Traps at 0x{self.traps_ptr:X}",
            f"  Spawns at 0x{self.spawns_ptr:X}",
        ]
        if include_plan:
            lines.append(self.floor_plan.to_hex())
        return "\n".join(lines)


@dataclass
class Floor:
    """A dungeon floor and its eight layout slots.

    ``layouts`` holds each distinct layout once, keyed by its table
    pointer in first-seen order.  Slots that repeat a pointer share the
    same Layout object.
    """
    table_ptr: int
    title: str
    slot_pointers: list[int] = field(default_factory=list)
    layouts: dict[int, Layout] = field(default_factory=dict)

    @property
    def slots(self) -> list[Layout]:
        return [self.layouts[ptr] for ptr in self.slot_pointers]

    def slot(self, index: int) -> Layout:
        """Layout for a 1-indexed slot."""
        if not 1 <= index <= len(self.slot_pointers):
            raise IndexError(f"layout slot {index} out of range")
        return self.layouts[self.slot_pointers[index - 1]]

    def to_brief(self) -> str:
        return (f'Floor "{self.title}" at 0x{self.table_ptr:X}: '
                f"{len(self.layouts)} layout(s) in {len(self.slot_pointers)} slots")

    def to_full(self, include_plans: bool = False) -> str:
        lines = [self.to_brief()]
        seen: dict[int, int] = {}
        for i, ptr in enumerate(self.slot_pointers, start=1):
            if ptr in seen:
                lines.append(f"Slot {i}: same as slot {seen[ptr]}")
                continue
            seen[ptr] = i
            lines.append(f"Slot {i}:")
            lines.append(self.layouts[ptr].to_full(include_plan=include_plans))
        return "\n".join(lines)


@dataclass
class Dungeon:
    """All floors in file order."""
    floors: list[Floor] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.floors)

    def __iter__(self) -> Iterator[Floor]:
        return iter(self.floors)

    def get_floor(self, number: int) -> Floor:
        """Floor by 1-indexed position in the file."""
        if not 1 <= number <= len(self.floors):
            raise IndexError(f"floor {number} out of range")
        return self.floors[number - 1]

    def to_brief(self) -> str:
        lines = [f"{len(self.floors)} floor(s)"]
        for i, floor in enumerate(self.floors, start=1):
            lines.append(f"{i:3d}. {floor.to_brief()}")
        return "\n".join(lines)
