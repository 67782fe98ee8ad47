from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.layout_entity import LayoutEntity


class CreateInstanceUseCase:
    """
    Create an operational instance from a template.

    The template's current active units and all of its zones are copied
    verbatim in one transaction; the new instance starts uncustomized.
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
    async def create_instance(
        self,
        *,
        template_id: int,
        name: str,
        description: Optional[str] = None,
    ) -> LayoutEntity:
        async with self.uow_factory() as uow:
            template = await uow.layout_repo.get_by_id(layout_id=template_id)
            if template is None or not template.is_template:
                raise NotFoundError(f'Template not found: {template_id}')

            template_units = await uow.unit_repo.list_active_by_layout(layout_id=template_id)
            template_zones = await uow.zone_repo.list_by_layout(layout_id=template_id)

            instance = await uow.layout_repo.create(
                layout=LayoutEntity.create_instance(
                    template=template, name=name, description=description
                )
            )
            instance_id = instance.id
            if instance_id is None:
                raise ValueError('Instance id missing after insert')

            await uow.unit_repo.create_many(
                layout_id=instance_id,
                units=[unit.copy_for(layout_id=instance_id) for unit in template_units],
            )
            await uow.zone_repo.replace_all(
                layout_id=instance_id,
                zones=[zone.copy_for(layout_id=instance_id) for zone in template_zones],
            )
            await uow.commit()

        Logger.base.info(
            f'✅ [CREATE_INSTANCE] instance={instance_id} template={template_id} '
            f'units={len(template_units)} zones={len(template_zones)}'
        )
        return instance
