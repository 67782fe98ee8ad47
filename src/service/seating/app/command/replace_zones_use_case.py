from typing import Callable, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.zone_entity import ZoneEntity
from src.service.seating.domain.layout_validator import validate_zones


class ReplaceZonesUseCase:
    """
    Replace every zone of a layout (delete, then insert) in one transaction,
    so readers never observe an empty zone set. Editing an instance's zones
    marks it customized.
    """

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
    async def replace_zones(
        self,
        *,
        layout_id: int,
        zones: List[ZoneEntity],
        expected_version: Optional[int] = None,
    ) -> None:
        validate_zones(zones)

        async with self.uow_factory() as uow:
            layout = await uow.layout_repo.get_by_id(layout_id=layout_id)
            if layout is None:
                raise NotFoundError(f'Layout not found: {layout_id}')
            if expected_version is not None and expected_version != layout.version:
                raise ConflictError(
                    f'Layout {layout_id} is at version {layout.version}, '
                    f'expected {expected_version}'
                )

            await uow.zone_repo.replace_all(layout_id=layout_id, zones=zones)

            layout.mark_customized()
            await uow.layout_repo.update(layout=layout)
            await uow.commit()

        Logger.base.info(f'🏷️  [ZONES] layout={layout_id} replaced with {len(zones)} zones')
