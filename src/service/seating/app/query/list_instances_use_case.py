from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_layout_repo import ILayoutRepo
from src.service.seating.domain.entity.layout_entity import LayoutEntity


class ListInstancesUseCase:
    def __init__(self, *, layout_repo: ILayoutRepo) -> None:
        self.layout_repo = layout_repo

    @classmethod
    @inject
    def depends(
        cls, layout_repo: ILayoutRepo = Depends(Provide[Container.layout_repo])
    ) -> Self:
        return cls(layout_repo=layout_repo)

    @Logger.io
    async def list_instances(self, *, template_id: int) -> List[LayoutEntity]:
        template = await self.layout_repo.get_by_id(layout_id=template_id)
        if template is None or not template.is_template:
            raise NotFoundError(f'Template not found: {template_id}')

        return await self.layout_repo.list_instances(template_id=template_id)
