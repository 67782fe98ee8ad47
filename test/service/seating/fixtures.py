"""Builders and fakes shared by seating unit tests."""

from typing import Dict, List, Optional, Sequence
from unittest.mock import AsyncMock

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.seating.domain.entity.layout_entity import LayoutEntity
from src.service.seating.domain.entity.positioned_unit_entity import PositionedUnitEntity
from src.service.seating.domain.grid_generator import count_active_seats, generate_grid
from src.service.seating.domain.value_object.floor_spec import FloorSpec
from src.service.seating.domain.value_object.unit_target import UnitTarget


# 1 floor, 4 rows, 2 left / 2 right: 16 seats + 4 aisle slots
COACH_16 = [FloorSpec(floor_number=1, num_rows=4, seats_left=2, seats_right=2)]


def persisted_grid(
    floor_specs: Sequence[FloorSpec], *, layout_id: int = 1, first_id: int = 1
) -> List[PositionedUnitEntity]:
    """Generated grid with ids assigned, as the unit store would return it."""
    units = generate_grid(floor_specs)
    for offset, unit in enumerate(units):
        unit.id = first_id + offset
        unit.layout_id = layout_id
    return units


def targets_from(units: Sequence[PositionedUnitEntity]) -> List[UnitTarget]:
    return [
        UnitTarget(
            floor_number=unit.floor_number,
            x=unit.position_x,
            y=unit.position_y,
            space_kind=unit.space_kind,
            seat_number=unit.seat_number,
            seat_type=unit.seat_type,
            amenities=list(unit.amenities),
        )
        for unit in units
    ]


def make_template(
    *, template_id: int = 1, floor_specs: Optional[List[FloorSpec]] = None, version: int = 0
) -> LayoutEntity:
    specs = floor_specs or COACH_16
    template = LayoutEntity.create_template(
        name='Coach 16',
        floor_specs=specs,
        total_seats=count_active_seats(generate_grid(specs)),
    )
    template.id = template_id
    template.version = version
    return template


def make_instance(
    template: LayoutEntity, *, instance_id: int, is_customized: bool = False
) -> LayoutEntity:
    instance = LayoutEntity.create_instance(
        template=template, name=f'Bus {instance_id:03d}'
    )
    instance.id = instance_id
    instance.is_customized = is_customized
    return instance


class FakeUnitOfWork(AbstractUnitOfWork):
    """In-memory unit of work; repositories are AsyncMocks keyed on `layouts`."""

    def __init__(self, layouts: Optional[Dict[int, LayoutEntity]] = None) -> None:
        self.layouts = layouts if layouts is not None else {}
        self.layout_repo = AsyncMock()
        self.layout_repo.get_by_id.side_effect = lambda *, layout_id: self.layouts.get(layout_id)
        self.layout_repo.update.side_effect = lambda *, layout: layout
        self.unit_repo = AsyncMock()
        self.zone_repo = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def _commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        if not self.committed:
            self.rolled_back = True
