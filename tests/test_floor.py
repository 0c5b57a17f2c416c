import pytest

from dw2_tools.dungeon.errors import (
    IllegalCharacterCodeError,
    TruncatedDataError,
)
from dw2_tools.dungeon.parser import parse_floor

from tests.helpers.builders import DungeonBuilder


def _floor_with_layouts(slot_layout_index: list[int], count: int):
    b = DungeonBuilder()
    name = b.string(b"\x0A\x24")
    tables = []
    for i in range(count):
        plan = b.floor_plan(fill=i)
        tables.append(b.layout(plan))
    floor = b.floor(name, [tables[i] for i in slot_layout_index])
    return b.build(), floor, tables


def test_parse_floor_title_and_slots() -> None:
    raw, table, layouts = _floor_with_layouts(list(range(8)), 8)
    floor = parse_floor(raw, table)
    assert floor.title == "Aa"
    assert floor.table_ptr == table
    assert floor.slot_pointers == layouts
    assert list(floor.layouts) == layouts
    assert [layout.floor_plan.tile(0, 0) for layout in floor.slots] == list(range(8))


def test_repeated_pointers_decode_once() -> None:
    raw, table, layouts = _floor_with_layouts([0, 0, 1, 0, 1, 1, 1, 0], 2)
    floor = parse_floor(raw, table)
    assert len(floor.layouts) == 2
    assert floor.slot(1) is floor.slot(2)
    assert floor.slot(1) is floor.slot(8)
    assert floor.slot(3) is floor.slot(7)
    assert floor.slot(1) is not floor.slot(3)


def test_repeated_pointer_decoded_once(monkeypatch) -> None:
    from dw2_tools.dungeon import parser

    calls = []
    original = parser.parse_layout

    def counting(raw, table_ptr):
        calls.append(table_ptr)
        return original(raw, table_ptr)

    monkeypatch.setattr(parser, "parse_layout", counting)
    raw, table, layouts = _floor_with_layouts([0] * 8, 1)
    parse_floor(raw, table)
    assert calls == [layouts[0]]


def test_identical_contents_at_distinct_pointers_stay_separate() -> None:
    b = DungeonBuilder()
    name = b.string(b"")
    plan = b.floor_plan()
    first = b.layout(plan)
    second = b.layout(plan)
    table = b.floor(name, [first, second] * 4)
    floor = parse_floor(b.build(), table)
    assert len(floor.layouts) == 2
    assert floor.slot(1) is not floor.slot(2)
    assert floor.slot(1).floor_plan == floor.slot(2).floor_plan


def test_truncated_floor_table() -> None:
    b = DungeonBuilder()
    name = b.string(b"")
    table = b.append(bytes([name, 0, 0, 0]) + bytes(16))
    with pytest.raises(TruncatedDataError, match="truncated floor table"):
        parse_floor(b.build(), table)


def test_bad_title_has_context() -> None:
    b = DungeonBuilder()
    name = b.string(b"\x42")
    plan = b.floor_plan()
    layout = b.layout(plan)
    table = b.floor(name, [layout] * 8)
    with pytest.raises(IllegalCharacterCodeError) as excinfo:
        parse_floor(b.build(), table)
    assert excinfo.value.context == ["parsing name"]


def test_failing_slot_is_named() -> None:
    b = DungeonBuilder()
    name = b.string(b"")
    plan = b.floor_plan()
    good = b.layout(plan)
    bad = b.layout(0x00FFFFFF)
    table = b.floor(name, [good, good, bad, good, good, good, good, good])
    with pytest.raises(TruncatedDataError) as excinfo:
        parse_floor(b.build(), table)
    assert excinfo.value.context == ["parsing layout 3", "parsing floor plan"]
