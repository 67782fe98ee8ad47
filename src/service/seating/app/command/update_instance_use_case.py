from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.layout_entity import LayoutEntity


class UpdateInstanceUseCase:
    """Editing an instance's properties is a direct edit: it marks the instance customized."""

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
    async def update_instance(
        self,
        *,
        instance_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> LayoutEntity:
        async with self.uow_factory() as uow:
            instance = await uow.layout_repo.get_by_id(layout_id=instance_id)
            if instance is None or not instance.is_instance:
                raise NotFoundError(f'Instance not found: {instance_id}')

            if name is not None:
                instance.name = name
            if description is not None:
                instance.description = description
            instance.mark_customized()

            instance = await uow.layout_repo.update(layout=instance)
            await uow.commit()

        return instance
