from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger


class DeleteLayoutUseCase:
    """
    Physically delete a layout with its units and zones.

    Deleting a template does not cascade to its instances: they keep their
    content and lose their template reference.
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
    async def delete_layout(self, *, layout_id: int) -> None:
        async with self.uow_factory() as uow:
            deleted = await uow.layout_repo.delete(layout_id=layout_id)
            if not deleted:
                raise NotFoundError(f'Layout not found: {layout_id}')
            await uow.commit()

        Logger.base.info(f'🗑️  [DELETE_LAYOUT] layout={layout_id}')
