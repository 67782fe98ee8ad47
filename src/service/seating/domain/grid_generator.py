"""
Initial grid generation for a new template.

Per floor, per row (top to bottom): `seats_left` seats, one aisle, then
`seats_right` seats. Seat numbers run "1".."N" in generation order across
all floors; aisle units carry no seat number.
"""

from typing import Any, Dict, List, Optional, Sequence

from src.service.seating.domain.entity.positioned_unit_entity import PositionedUnitEntity
from src.service.seating.domain.enum.seat_type import SeatType
from src.service.seating.domain.enum.space_kind import SpaceKind
from src.service.seating.domain.layout_validator import validate_floor_specs
from src.service.seating.domain.value_object.floor_spec import FloorSpec


SEAT_META_KEYS = ('is_window', 'is_legroom')


def build_unit_meta(
    *,
    spec: FloorSpec,
    x: int,
    y: int,
    space_kind: SpaceKind,
    meta: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Grid metadata for a slot; explicit keys in `meta` win."""
    result: Dict[str, Any] = dict(meta or {})
    result.setdefault('row_index', y - 1)
    result.setdefault('col_index', x)
    if space_kind.is_seat:
        result.setdefault('is_window', x == 0 or x == spec.max_x)
        result.setdefault('is_legroom', y == 1)
    else:
        for key in SEAT_META_KEYS:
            result.pop(key, None)
    return result


def generate_grid(floor_specs: Sequence[FloorSpec]) -> List[PositionedUnitEntity]:
    validate_floor_specs(floor_specs)

    units: List[PositionedUnitEntity] = []
    seat_counter = 0

    for spec in sorted(floor_specs, key=lambda s: s.floor_number):
        for y in range(1, spec.num_rows + 1):
            for x in range(spec.max_x + 1):
                if x == spec.aisle_x:
                    units.append(
                        PositionedUnitEntity(
                            floor_number=spec.floor_number,
                            position_x=x,
                            position_y=y,
                            space_kind=SpaceKind.HALLWAY,
                            meta=build_unit_meta(
                                spec=spec, x=x, y=y, space_kind=SpaceKind.HALLWAY
                            ),
                        )
                    )
                    continue

                seat_counter += 1
                units.append(
                    PositionedUnitEntity(
                        floor_number=spec.floor_number,
                        position_x=x,
                        position_y=y,
                        space_kind=SpaceKind.SEAT,
                        seat_number=str(seat_counter),
                        seat_type=SeatType.REGULAR,
                        meta=build_unit_meta(spec=spec, x=x, y=y, space_kind=SpaceKind.SEAT),
                    )
                )

    return units


def count_active_seats(units: Sequence[PositionedUnitEntity]) -> int:
    return sum(1 for unit in units if unit.active and unit.is_seat)
