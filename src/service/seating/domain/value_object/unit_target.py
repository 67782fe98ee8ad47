from typing import Any, Dict, List, Optional

import attrs

from src.service.seating.domain.enum.seat_type import SeatType
from src.service.seating.domain.enum.space_kind import SpaceKind
from src.service.seating.domain.value_object.position import Position


SEAT_NUMBER_MAX_LENGTH = 20


@attrs.frozen
class UnitTarget:
    """
    Desired state of one slot in a reconciliation pass.

    `meta` of None means "derive from the floor grid"; an explicit dict is
    written as given (after seat keys are added or dropped to match the kind).
    """

    floor_number: int
    x: int
    y: int
    space_kind: SpaceKind = SpaceKind.SEAT
    seat_number: Optional[str] = None
    seat_type: Optional[SeatType] = None
    amenities: List[str] = attrs.field(factory=list)
    meta: Optional[Dict[str, Any]] = None

    @property
    def position(self) -> Position:
        return Position(floor_number=self.floor_number, x=self.x, y=self.y)

    @property
    def normalized_seat_number(self) -> Optional[str]:
        if not self.space_kind.is_seat or self.seat_number is None:
            return None
        return self.seat_number.strip() or None
