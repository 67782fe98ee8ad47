from datetime import datetime
from typing import Any, Dict, List, Optional

import attrs

from src.service.seating.domain.enum.seat_type import SeatType
from src.service.seating.domain.enum.space_kind import SpaceKind
from src.service.seating.domain.value_object.position import Position


@attrs.define
class PositionedUnitEntity:
    floor_number: int
    position_x: int
    position_y: int
    space_kind: SpaceKind
    seat_number: Optional[str] = None
    seat_type: Optional[SeatType] = None
    amenities: List[str] = attrs.field(factory=list)
    meta: Dict[str, Any] = attrs.field(factory=dict)
    active: bool = True
    layout_id: Optional[int] = None
    id: Optional[int] = None  # Only None before persistence
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def position(self) -> Position:
        return Position(floor_number=self.floor_number, x=self.position_x, y=self.position_y)

    @property
    def is_seat(self) -> bool:
        return self.space_kind.is_seat

    def content(self) -> tuple:
        """Fields a reconciliation pass overwrites; any difference counts as an update."""
        return (
            self.space_kind,
            self.seat_number,
            self.seat_type,
            tuple(self.amenities),
            tuple(sorted(self.meta.items())),
        )

    def overwrite(
        self,
        *,
        space_kind: SpaceKind,
        seat_number: Optional[str],
        seat_type: Optional[SeatType],
        amenities: List[str],
        meta: Dict[str, Any],
    ) -> bool:
        """Overwrite content in place; returns whether anything changed."""
        before = self.content()
        self.space_kind = space_kind
        self.seat_number = seat_number
        self.seat_type = seat_type
        self.amenities = list(amenities)
        self.meta = dict(meta)
        return self.content() != before

    def deactivate(self) -> None:
        self.active = False

    def copy_for(self, *, layout_id: Optional[int]) -> 'PositionedUnitEntity':
        """Fresh, unsaved copy bound to another layout."""
        return PositionedUnitEntity(
            floor_number=self.floor_number,
            position_x=self.position_x,
            position_y=self.position_y,
            space_kind=self.space_kind,
            seat_number=self.seat_number,
            seat_type=self.seat_type,
            amenities=list(self.amenities),
            meta=dict(self.meta),
            active=self.active,
            layout_id=layout_id,
        )
