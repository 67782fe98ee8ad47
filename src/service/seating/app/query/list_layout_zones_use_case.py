from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_layout_repo import ILayoutRepo
from src.service.seating.app.interface.i_zone_repo import IZoneRepo
from src.service.seating.domain.entity.zone_entity import ZoneEntity


class ListLayoutZonesUseCase:
    def __init__(self, *, layout_repo: ILayoutRepo, zone_repo: IZoneRepo) -> None:
        self.layout_repo = layout_repo
        self.zone_repo = zone_repo

    @classmethod
    @inject
    def depends(
        cls,
        layout_repo: ILayoutRepo = Depends(Provide[Container.layout_repo]),
        zone_repo: IZoneRepo = Depends(Provide[Container.zone_repo]),
    ) -> Self:
        return cls(layout_repo=layout_repo, zone_repo=zone_repo)

    @Logger.io
    async def list_zones(self, *, layout_id: int) -> List[ZoneEntity]:
        if await self.layout_repo.get_by_id(layout_id=layout_id) is None:
            raise NotFoundError(f'Layout not found: {layout_id}')

        return await self.zone_repo.list_by_layout(layout_id=layout_id)
