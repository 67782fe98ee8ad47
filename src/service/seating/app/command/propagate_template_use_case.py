"""
Propagate Template Use Case

Pushes a template's current units and zones onto every dependent instance
that is not customized:

1. Load the template, its active units, its zones and its instances
   (independent reads, run concurrently)
2. Skip customized instances entirely (no reads of their content, no writes)
3. Per remaining instance, in its own unit of work:
   - re-check the flag on a fresh read (it may have been set meanwhile)
   - reconcile the instance's units against the template's units
   - replace the instance's zones with the template's zones
4. Collect a summary per synced instance; a failing instance is rolled back,
   logged and reported without affecting the others
"""

from typing import Callable, Dict, List, Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.service.seating.app.command.layout_reconciler import LayoutReconciler
from src.service.seating.app.dto.propagation_result import (
    InstanceSyncFailure,
    InstanceSyncSummary,
    PropagationResult,
)
from src.service.seating.app.interface.i_layout_repo import ILayoutRepo
from src.service.seating.app.interface.i_unit_repo import IUnitRepo
from src.service.seating.app.interface.i_zone_repo import IZoneRepo
from src.service.seating.domain.entity.layout_entity import LayoutEntity
from src.service.seating.domain.entity.positioned_unit_entity import PositionedUnitEntity
from src.service.seating.domain.entity.zone_entity import ZoneEntity
from src.service.seating.domain.value_object.unit_target import UnitTarget


class PropagateTemplateUseCase:
    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        layout_repo: ILayoutRepo,
        unit_repo: IUnitRepo,
        zone_repo: IZoneRepo,
        layout_reconciler: LayoutReconciler,
        max_concurrency: int | None = None,
    ) -> None:
        self.uow_factory = uow_factory
        self.layout_repo = layout_repo
        self.unit_repo = unit_repo
        self.zone_repo = zone_repo
        self.layout_reconciler = layout_reconciler
        self.max_concurrency = max_concurrency or settings.PROPAGATION_MAX_CONCURRENCY
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        layout_repo: ILayoutRepo = Depends(Provide[Container.layout_repo]),
        unit_repo: IUnitRepo = Depends(Provide[Container.unit_repo]),
        zone_repo: IZoneRepo = Depends(Provide[Container.zone_repo]),
        layout_reconciler: LayoutReconciler = Depends(Provide[Container.layout_reconciler]),
    ) -> Self:
        return cls(
            uow_factory=uow_factory,
            layout_repo=layout_repo,
            unit_repo=unit_repo,
            zone_repo=zone_repo,
            layout_reconciler=layout_reconciler,
        )

    @Logger.io
    async def propagate(self, *, template_id: int) -> PropagationResult:
        template = await self.layout_repo.get_by_id(layout_id=template_id)
        if template is None or not template.is_template:
            raise NotFoundError(f'Template not found: {template_id}')

        template_units: List[PositionedUnitEntity] = []
        template_zones: List[ZoneEntity] = []
        instances: List[LayoutEntity] = []

        async def _load_units() -> None:
            template_units.extend(await self.unit_repo.list_active_by_layout(layout_id=template_id))

        async def _load_zones() -> None:
            template_zones.extend(await self.zone_repo.list_by_layout(layout_id=template_id))

        async def _load_instances() -> None:
            instances.extend(await self.layout_repo.list_instances(template_id=template_id))

        async with anyio.create_task_group() as tg:
            tg.start_soon(_load_units)
            tg.start_soon(_load_zones)
            tg.start_soon(_load_instances)

        eligible = [instance for instance in instances if not instance.is_customized]
        skipped = len(instances) - len(eligible)
        if not eligible:
            Logger.base.info(
                f'📭 [PROPAGATE] template={template_id} has no eligible instances '
                f'(instances={len(instances)}, customized={skipped})'
            )
            metrics.record_propagation(synced=0, skipped=skipped, failed=0)
            return PropagationResult(template_id=template_id, skipped_customized=skipped)

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
            for unit in template_units
        ]

        summaries: Dict[int, InstanceSyncSummary] = {}
        failures: Dict[int, InstanceSyncFailure] = {}
        limiter = anyio.CapacityLimiter(self.max_concurrency)

        async def _sync(instance_id: int) -> None:
            async with limiter:
                try:
                    summary = await self._sync_instance(
                        instance_id=instance_id,
                        template=template,
                        targets=targets,
                        zones=template_zones,
                    )
                except Exception as e:
                    Logger.base.error(
                        f'❌ [PROPAGATE] instance={instance_id} rolled back: '
                        f'{type(e).__name__}: {e}'
                    )
                    failures[instance_id] = InstanceSyncFailure(
                        instance_id=instance_id, error=f'{type(e).__name__}: {e}'
                    )
                    return
                if summary is not None:
                    summaries[instance_id] = summary

        with self.tracer.start_as_current_span(
            'seating.propagate',
            attributes={'template.id': template_id, 'propagate.instances': len(eligible)},
        ):
            async with anyio.create_task_group() as tg:
                for instance in eligible:
                    # pyrefly: ignore  # bad-argument-type
                    tg.start_soon(_sync, instance.id)

        metrics.record_propagation(synced=len(summaries), skipped=skipped, failed=len(failures))
        Logger.base.info(
            f'✅ [PROPAGATE] template={template_id} synced={len(summaries)} '
            f'failed={len(failures)} skipped_customized={skipped}'
        )
        return PropagationResult(
            template_id=template_id,
            summaries=[summaries[key] for key in sorted(summaries)],
            failures=[failures[key] for key in sorted(failures)],
            skipped_customized=skipped,
        )

    async def _sync_instance(
        self,
        *,
        instance_id: int,
        template: LayoutEntity,
        targets: List[UnitTarget],
        zones: List[ZoneEntity],
    ) -> InstanceSyncSummary | None:
        async with self.uow_factory() as uow:
            instance = await uow.layout_repo.get_by_id(layout_id=instance_id)
            if instance is None or instance.is_customized:
                Logger.base.info(
                    f'⏭️  [PROPAGATE] instance={instance_id} customized or removed, '
                    'left untouched'
                )
                return None

            # Instances follow the template's grid shape
            instance.floor_specs = list(template.floor_specs)
            result = await self.layout_reconciler.reconcile(
                uow=uow,
                layout=instance,
                targets=targets,
                trigger='propagation',
            )
            await uow.zone_repo.replace_all(
                layout_id=instance_id,
                zones=[zone.copy_for(layout_id=instance_id) for zone in zones],
            )
            await uow.commit()

        return InstanceSyncSummary(
            instance_id=instance_id,
            created=result.created,
            updated=result.updated,
            deleted=result.deactivated,
        )
