from typing import Callable, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.layout_reconciler import LayoutReconciler
from src.service.seating.app.dto.reconciliation_result import ReconciliationResult
from src.service.seating.app.dto.template_update_result import TemplateUpdateResult
from src.service.seating.domain.grid_generator import generate_grid
from src.service.seating.domain.layout_validator import validate_floor_specs
from src.service.seating.domain.value_object.floor_spec import FloorSpec
from src.service.seating.domain.value_object.unit_target import UnitTarget


class UpdateTemplateUseCase:
    """
    Update template properties; optionally bring its units to a fresh grid.

    Regeneration never rewrites units directly: the freshly generated grid is
    handed to the reconciler as the target, so slots that survive keep their
    ids. Changing floor specs always regenerates, since existing units may no
    longer fit the new bounds. Instances are not touched; call propagate.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        layout_reconciler: LayoutReconciler,
    ) -> None:
        self.uow_factory = uow_factory
        self.layout_reconciler = layout_reconciler

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        layout_reconciler: LayoutReconciler = Depends(Provide[Container.layout_reconciler]),
    ) -> Self:
        return cls(uow_factory=uow_factory, layout_reconciler=layout_reconciler)

    @Logger.io
    async def update_template(
        self,
        *,
        template_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        floor_specs: Optional[List[FloorSpec]] = None,
        regenerate_units: bool = False,
        expected_version: Optional[int] = None,
    ) -> TemplateUpdateResult:
        if floor_specs is not None:
            validate_floor_specs(floor_specs)

        async with self.uow_factory() as uow:
            template = await uow.layout_repo.get_by_id(layout_id=template_id)
            if template is None or not template.is_template:
                raise NotFoundError(f'Template not found: {template_id}')

            if name is not None:
                template.name = name
            if description is not None:
                template.description = description

            specs_changed = floor_specs is not None and sorted(
                floor_specs, key=lambda spec: spec.floor_number
            ) != list(template.floor_specs)
            if floor_specs is not None:
                template.floor_specs = sorted(floor_specs, key=lambda spec: spec.floor_number)

            regeneration: Optional[ReconciliationResult] = None
            if regenerate_units or specs_changed:
                targets = [
                    UnitTarget(
                        floor_number=unit.floor_number,
                        x=unit.position_x,
                        y=unit.position_y,
                        space_kind=unit.space_kind,
                        seat_number=unit.seat_number,
                        seat_type=unit.seat_type,
                        amenities=list(unit.amenities),
                        meta=dict(unit.meta),
                    )
                    for unit in generate_grid(template.floor_specs)
                ]
                regeneration = await self.layout_reconciler.reconcile(
                    uow=uow,
                    layout=template,
                    targets=targets,
                    trigger='regenerate',
                    expected_version=expected_version,
                )
            else:
                if expected_version is not None and expected_version != template.version:
                    raise ConflictError(
                        f'Template {template_id} is at version {template.version}, '
                        f'expected {expected_version}'
                    )
                template = await uow.layout_repo.update(layout=template)

            await uow.commit()

        Logger.base.info(
            f'✅ [UPDATE_TEMPLATE] template={template_id} regenerated={regeneration is not None}'
        )
        return TemplateUpdateResult(template=template, regeneration=regeneration)
