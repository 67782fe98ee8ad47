"""
Position-keyed reconciliation planning.

Current active units are indexed once by (floor, x, y). Each target either
matches a slot (overwrite in place, keeping the unit id) or creates a new
unit; unmatched current units are deactivated. Seat numbers never take part
in matching, which is what lets a pass renumber or swap labels between slots.
"""

from typing import Dict, List, Sequence, Set

import attrs

from src.service.seating.domain.entity.positioned_unit_entity import PositionedUnitEntity
from src.service.seating.domain.enum.seat_type import SeatType
from src.service.seating.domain.grid_generator import build_unit_meta
from src.service.seating.domain.value_object.floor_spec import FloorSpec
from src.service.seating.domain.value_object.position import Position
from src.service.seating.domain.value_object.unit_target import UnitTarget


@attrs.define
class ReconciliationPlan:
    creates: List[PositionedUnitEntity] = attrs.field(factory=list)
    updates: List[PositionedUnitEntity] = attrs.field(factory=list)
    deactivations: List[PositionedUnitEntity] = attrs.field(factory=list)
    # Ids of updated units whose seat number changes; released before the final write
    renumbered_ids: Set[int] = attrs.field(factory=set)
    unchanged: int = 0
    total_active_seats: int = 0

    @property
    def is_noop(self) -> bool:
        return not (self.creates or self.updates or self.deactivations)

    @classmethod
    def build(
        cls,
        *,
        layout_id: int,
        current_units: Sequence[PositionedUnitEntity],
        targets: Sequence[UnitTarget],
        floor_specs: Sequence[FloorSpec],
    ) -> 'ReconciliationPlan':
        """Targets must already be validated (unique, in bounds)."""
        specs_by_floor: Dict[int, FloorSpec] = {spec.floor_number: spec for spec in floor_specs}
        slot_index: Dict[Position, PositionedUnitEntity] = {
            unit.position: unit for unit in current_units if unit.active
        }
        visited: Set[Position] = set()
        plan = cls()

        for target in targets:
            spec = specs_by_floor[target.floor_number]
            is_seat = target.space_kind.is_seat
            seat_number = target.normalized_seat_number
            seat_type = (target.seat_type or SeatType.REGULAR) if is_seat else None
            amenities = list(target.amenities) if is_seat else []
            meta = build_unit_meta(
                spec=spec, x=target.x, y=target.y, space_kind=target.space_kind, meta=target.meta
            )
            if is_seat:
                plan.total_active_seats += 1

            existing = slot_index.get(target.position)
            if existing is None:
                plan.creates.append(
                    PositionedUnitEntity(
                        floor_number=target.floor_number,
                        position_x=target.x,
                        position_y=target.y,
                        space_kind=target.space_kind,
                        seat_number=seat_number,
                        seat_type=seat_type,
                        amenities=amenities,
                        meta=meta,
                        layout_id=layout_id,
                    )
                )
                continue

            visited.add(target.position)
            previous_seat_number = existing.seat_number
            changed = existing.overwrite(
                space_kind=target.space_kind,
                seat_number=seat_number,
                seat_type=seat_type,
                amenities=amenities,
                meta=meta,
            )
            if not changed:
                plan.unchanged += 1
                continue

            plan.updates.append(existing)
            if previous_seat_number != seat_number and existing.id is not None:
                plan.renumbered_ids.add(existing.id)

        for position, unit in slot_index.items():
            if position not in visited:
                unit.deactivate()
                plan.deactivations.append(unit)

        return plan
