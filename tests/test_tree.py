from datetime import datetime, timedelta, timezone

import pytest

from lexpos.models import PositionedItem, PositionMove
from lexpos.tree import build_tree, calculate_move, sort_by_position


def _ids(items):
    return [item.id for item in items]


def test_sort_by_position():
    items = [PositionedItem("c", "a2"), PositionedItem("a", "a0"), PositionedItem("b", "a0V")]
    assert _ids(sort_by_position(items)) == ["a", "b", "c"]


def test_sort_by_position_tie_breaks():
    now = datetime.now(timezone.utc)
    items = [
        PositionedItem("late", "a0", created_at=now),
        PositionedItem("early", "a0", created_at=now - timedelta(minutes=1)),
        PositionedItem("unplaced", None, created_at=now),
        PositionedItem("b", "a1"),
        PositionedItem("a", "a1"),
    ]
    assert _ids(sort_by_position(items)) == ["unplaced", "early", "late", "a", "b"]


def test_build_tree():
    items = [
        PositionedItem("r1", "a1"),
        PositionedItem("r2", "a0"),
        PositionedItem("c1", "a1", parent_id="r1"),
        PositionedItem("c2", "a0", parent_id="r1"),
        PositionedItem("g1", "a0", parent_id="c1"),
        PositionedItem("orphan", "Zz", parent_id="missing"),
    ]
    roots = build_tree(items)
    assert _ids(roots) == ["orphan", "r2", "r1"]
    r1 = roots[2]
    assert _ids(r1.children) == ["c2", "c1"]
    assert _ids(r1.children[1].children) == ["g1"]
    assert all(item.children == [] for item in items)


def test_build_tree_empty():
    assert build_tree([]) == []


@pytest.fixture
def column():
    return [
        PositionedItem("x", "a0"),
        PositionedItem("y", "a1"),
        PositionedItem("z", "a2"),
    ]


def test_calculate_move_up(column):
    assert calculate_move(column, 2, "up") == PositionMove(prevId="x", nextId="y", newPosition="a0V")
    assert calculate_move(column, 1, "up") == PositionMove(prevId=None, nextId="x", newPosition="Zz")


def test_calculate_move_down(column):
    assert calculate_move(column, 0, "down") == PositionMove(prevId="y", nextId="z", newPosition="a1V")
    assert calculate_move(column, 1, "down") == PositionMove(prevId="z", nextId=None, newPosition="a3")


def test_calculate_move_at_edges(column):
    assert calculate_move(column, 0, "up") is None
    assert calculate_move(column, 2, "down") is None


def test_calculate_move_result_sorts_into_place(column):
    move = calculate_move(column, 0, "down")
    column[0].position = move.newPosition
    assert _ids(sort_by_position(column)) == ["y", "x", "z"]


def test_calculate_move_rejects_bad_input(column):
    with pytest.raises(ValueError):
        calculate_move(column, 0, "sideways")
    with pytest.raises(IndexError):
        calculate_move(column, 3, "up")


def test_sort_by_position_mixes_naive_and_missing_timestamps():
    items = [
        PositionedItem("naive", "a0", created_at=datetime(2024, 1, 1)),
        PositionedItem("aware", "a0", created_at=datetime(2023, 1, 1, tzinfo=timezone.utc)),
        PositionedItem("missing", "a0"),
    ]
    assert _ids(sort_by_position(items)) == ["missing", "aware", "naive"]
