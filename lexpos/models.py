from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

Direction = Literal["up", "down"]


# === Items ordered by position key ===


@dataclass
class PositionedItem:
    id: str
    position: Optional[str]
    parent_id: Optional[str] = None
    created_at: Optional[datetime] = None
    children: List[PositionedItem] = field(default_factory=list)


# === Results handed back to callers ===


class PositionMove(BaseModel):
    prevId: Optional[str] = None
    nextId: Optional[str] = None
    newPosition: str
