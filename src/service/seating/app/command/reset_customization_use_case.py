from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.layout_entity import LayoutEntity


class ResetCustomizationUseCase:
    """
    Clear an instance's customization flag.

    The only way the flag is ever cleared. Content is not resynchronized here;
    the next propagation of its template picks the instance up again.
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
    async def reset_customization(self, *, instance_id: int) -> LayoutEntity:
        async with self.uow_factory() as uow:
            instance = await uow.layout_repo.get_by_id(layout_id=instance_id)
            if instance is None or not instance.is_instance:
                raise NotFoundError(f'Instance not found: {instance_id}')

            instance.reset_customization()
            instance = await uow.layout_repo.update(layout=instance)
            await uow.commit()

        Logger.base.info(f'♻️  [RESET_CUSTOMIZATION] instance={instance_id}')
        return instance
