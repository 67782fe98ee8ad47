from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_layout_repo import ILayoutRepo
from src.service.seating.domain.entity.layout_entity import LayoutEntity
from src.service.seating.domain.enum.layout_kind import LayoutKind


class GetLayoutUseCase:
    def __init__(self, *, layout_repo: ILayoutRepo) -> None:
        self.layout_repo = layout_repo

    @classmethod
    @inject
    def depends(
        cls, layout_repo: ILayoutRepo = Depends(Provide[Container.layout_repo])
    ) -> Self:
        return cls(layout_repo=layout_repo)

    @Logger.io
    async def get_layout(self, *, layout_id: int, kind: LayoutKind | None = None) -> LayoutEntity:
        """`kind` narrows the lookup; a layout of the other kind reads as missing."""
        layout = await self.layout_repo.get_by_id(layout_id=layout_id)
        if layout is None or (kind is not None and layout.kind is not kind):
            label = kind.value.capitalize() if kind else 'Layout'
            raise NotFoundError(f'{label} not found: {layout_id}')
        return layout
