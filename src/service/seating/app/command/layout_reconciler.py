"""
Layout Reconciler

Brings one layout's active units to a desired target set inside the
caller's unit of work:

1. Validate the target (duplicates, then floor/row/column bounds)
2. Index current active units by (floor, x, y), once
3. Plan creates / in-place updates / deactivations by position
4. Apply the plan and persist the new active seat count with a version check

Commit and rollback stay with the caller, so the same pass serves direct
edits (one transaction per request) and propagation (one per instance).
"""

import time
from typing import Optional, Sequence

from opentelemetry import trace

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.service.seating.app.dto.reconciliation_result import ReconciliationResult
from src.service.seating.domain.entity.layout_entity import LayoutEntity
from src.service.seating.domain.layout_validator import validate_unit_targets
from src.service.seating.domain.reconciliation_plan import ReconciliationPlan
from src.service.seating.domain.value_object.unit_target import UnitTarget


class LayoutReconciler:
    def __init__(self) -> None:
        self.tracer = trace.get_tracer(__name__)

    @Logger.io(truncate_content=True)
    async def reconcile(
        self,
        *,
        uow: AbstractUnitOfWork,
        layout: LayoutEntity,
        targets: Sequence[UnitTarget],
        trigger: str,
        expected_version: Optional[int] = None,
    ) -> ReconciliationResult:
        if layout.id is None:
            raise ValueError('Layout must be persisted before reconciliation')

        started = time.perf_counter()
        with self.tracer.start_as_current_span(
            'seating.reconcile',
            attributes={
                'layout.id': layout.id,
                'layout.kind': layout.kind.value,
                'reconcile.trigger': trigger,
                'reconcile.targets': len(targets),
            },
        ) as span:
            try:
                if expected_version is not None and expected_version != layout.version:
                    raise ConflictError(
                        f'Layout {layout.id} is at version {layout.version}, '
                        f'expected {expected_version}'
                    )

                # Payload errors surface before any write
                validate_unit_targets(targets, layout.floor_specs)

                current_units = await uow.unit_repo.list_active_by_layout(layout_id=layout.id)
                plan = ReconciliationPlan.build(
                    layout_id=layout.id,
                    current_units=current_units,
                    targets=targets,
                    floor_specs=layout.floor_specs,
                )

                await uow.unit_repo.apply_plan(layout_id=layout.id, plan=plan)

                layout.total_seats = plan.total_active_seats
                await uow.layout_repo.update(layout=layout)
            except Exception:
                metrics.record_reconciliation(
                    layout_kind=layout.kind.value,
                    trigger=trigger,
                    result='error',
                    duration=time.perf_counter() - started,
                )
                raise

            result = ReconciliationResult(
                created=len(plan.creates),
                updated=len(plan.updates),
                deactivated=len(plan.deactivations),
                total_active_seats=plan.total_active_seats,
            )
            span.set_attribute('reconcile.created', result.created)
            span.set_attribute('reconcile.updated', result.updated)
            span.set_attribute('reconcile.deactivated', result.deactivated)

        metrics.record_reconciliation(
            layout_kind=layout.kind.value,
            trigger=trigger,
            result='success',
            duration=time.perf_counter() - started,
            created=result.created,
            updated=result.updated,
            deactivated=result.deactivated,
        )
        Logger.base.info(
            f'🔁 [RECONCILE] layout={layout.id} trigger={trigger} created={result.created} '
            f'updated={result.updated} deactivated={result.deactivated} '
            f'unchanged={plan.unchanged} total_active_seats={result.total_active_seats}'
        )
        return result
