import pytest

from dw2_tools.dungeon.data import FLOOR_PLAN_COLS, FLOOR_PLAN_ROWS, FloorPlan
from dw2_tools.dungeon.errors import TruncatedDataError
from dw2_tools.dungeon.parser import parse_floor_plan


def _ramp(size: int) -> bytes:
    return bytes(i % 256 for i in range(size))


def test_parse_floor_plan_exact_size() -> None:
    raw = _ramp(1536)
    plan = parse_floor_plan(raw, 0)
    assert plan.tiles == raw
    rows = plan.rows()
    assert len(rows) == FLOOR_PLAN_ROWS
    assert all(len(row) == FLOOR_PLAN_COLS for row in rows)
    assert rows[1][0] == 32
    assert plan.tile(x=3, y=2) == 2 * 32 + 3


def test_parse_floor_plan_at_offset() -> None:
    raw = b"\xEE" * 10 + _ramp(1536)
    plan = parse_floor_plan(raw, 10)
    assert plan.tile(0, 0) == 0
    assert plan.tile(31, 47) == (1535 % 256)


def test_parse_floor_plan_truncated() -> None:
    with pytest.raises(TruncatedDataError, match="truncated floor plan"):
        parse_floor_plan(_ramp(1535), 0)


def test_parse_floor_plan_truncated_at_offset() -> None:
    with pytest.raises(TruncatedDataError):
        parse_floor_plan(_ramp(1536), 1)


def test_floor_plan_is_owned_copy() -> None:
    raw = bytearray(1536)
    plan = parse_floor_plan(raw, 0)
    raw[0] = 0x7F
    assert plan.tile(0, 0) == 0


def test_floor_plan_rejects_wrong_size() -> None:
    with pytest.raises(ValueError):
        FloorPlan(b"\x00" * 10)


def test_floor_plan_tile_out_of_range() -> None:
    plan = FloorPlan(bytes(1536))
    with pytest.raises(IndexError):
        plan.tile(32, 0)


def test_floor_plan_to_hex() -> None:
    plan = FloorPlan(_ramp(1536))
    lines = plan.to_hex().splitlines()
    assert len(lines) == 48
    assert lines[0].startswith("00 01 02 03")
    assert lines[0].endswith("1E 1F")
    assert len(lines[0].split(" ")) == 32
