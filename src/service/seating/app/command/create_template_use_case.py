"""
Create Template Use Case

Template header and its generated grid are written in one unit of work:
if unit generation or insertion fails, the template row is rolled back too.
"""

from typing import Callable, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.layout_entity import LayoutEntity
from src.service.seating.domain.grid_generator import count_active_seats, generate_grid
from src.service.seating.domain.value_object.floor_spec import FloorSpec


class CreateTemplateUseCase:
    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def create_template(
        self,
        *,
        name: str,
        floor_specs: List[FloorSpec],
        description: Optional[str] = None,
    ) -> LayoutEntity:
        # Validates the floor specs before anything is persisted
        units = generate_grid(floor_specs)

        template = LayoutEntity.create_template(
            name=name,
            floor_specs=floor_specs,
            description=description,
            total_seats=count_active_seats(units),
        )

        async with self.uow_factory() as uow:
            saved = await uow.layout_repo.create(layout=template)
            await uow.unit_repo.create_many(layout_id=saved.id, units=units)
            await uow.commit()

        Logger.base.info(
            f'✅ [CREATE_TEMPLATE] template={saved.id} floors={saved.num_floors} '
            f'units={len(units)} seats={saved.total_seats}'
        )
        return saved
