"""Ordering helpers for sibling lists and parent/child trees of items."""

from __future__ import annotations

from dataclasses import replace
from datetime import timezone
from typing import Dict, Iterable, List, Optional

from .models import EPOCH, Direction, PositionedItem, PositionMove
from .positions import generate_position_between


def _sort_key(item: PositionedItem) -> tuple:
    created = item.created_at or EPOCH
    if created.tzinfo is None:
        # naive timestamps are taken as UTC
        created = created.replace(tzinfo=timezone.utc)
    return (item.position or "", created, item.id)


def sort_by_position(items: Iterable[PositionedItem]) -> List[PositionedItem]:
    """Return ``items`` ordered by position, then creation time, then id.

    Items without a position sort first.
    """
    return sorted(items, key=_sort_key)


def build_tree(items: Iterable[PositionedItem]) -> List[PositionedItem]:
    """Nest items under their parents and return the ordered roots.

    Items whose parent is not among ``items`` become roots. The input items
    are not modified.
    """
    nodes: Dict[str, PositionedItem] = {}
    order: List[PositionedItem] = []
    for item in items:
        node = replace(item, children=[])
        nodes[node.id] = node
        order.append(node)

    roots: List[PositionedItem] = []
    for node in order:
        parent = nodes.get(node.parent_id) if node.parent_id else None
        if parent is not None and parent is not node:
            parent.children.append(node)
        else:
            roots.append(node)

    def _sort(level: List[PositionedItem]) -> List[PositionedItem]:
        level.sort(key=_sort_key)
        for node in level:
            if node.children:
                _sort(node.children)
        return level

    return _sort(roots)


def calculate_move(
    items: List[PositionedItem], index: int, direction: Direction
) -> Optional[PositionMove]:
    """Work out the new position for moving ``items[index]`` one slot.

    ``items`` must already be in display order. Returns ``None`` when the item
    is already at the edge it is moving towards.
    """
    if direction not in ("up", "down"):
        raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")
    if not 0 <= index < len(items):
        raise IndexError(f"index {index} out of range for {len(items)} items")

    if direction == "up":
        if index == 0:
            return None
        next_item = items[index - 1]
        prev_item = items[index - 2] if index > 1 else None
    else:
        if index == len(items) - 1:
            return None
        prev_item = items[index + 1]
        next_item = items[index + 2] if index < len(items) - 2 else None

    before = prev_item.position if prev_item else None
    after = next_item.position if next_item else None
    return PositionMove(
        prevId=prev_item.id if prev_item else None,
        nextId=next_item.id if next_item else None,
        newPosition=generate_position_between(before, after),
    )
