from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_layout_repo import ILayoutRepo
from src.service.seating.app.interface.i_unit_repo import IUnitRepo
from src.service.seating.domain.entity.positioned_unit_entity import PositionedUnitEntity


class ListLayoutUnitsUseCase:
    """Active units only, ordered by floor, row, column."""

    def __init__(self, *, layout_repo: ILayoutRepo, unit_repo: IUnitRepo) -> None:
        self.layout_repo = layout_repo
        self.unit_repo = unit_repo

    @classmethod
    @inject
    def depends(
        cls,
        layout_repo: ILayoutRepo = Depends(Provide[Container.layout_repo]),
        unit_repo: IUnitRepo = Depends(Provide[Container.unit_repo]),
    ) -> Self:
        return cls(layout_repo=layout_repo, unit_repo=unit_repo)

    @Logger.io(truncate_content=True)
    async def list_units(self, *, layout_id: int) -> List[PositionedUnitEntity]:
        if await self.layout_repo.get_by_id(layout_id=layout_id) is None:
            raise NotFoundError(f'Layout not found: {layout_id}')

        return await self.unit_repo.list_active_by_layout(layout_id=layout_id)
