from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncContextManager, AsyncIterator, Callable, List

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_unit_repo import IUnitRepo
from src.service.seating.domain.entity.positioned_unit_entity import PositionedUnitEntity
from src.service.seating.domain.enum.seat_type import SeatType
from src.service.seating.domain.enum.space_kind import SpaceKind
from src.service.seating.domain.reconciliation_plan import ReconciliationPlan
from src.service.seating.driven_adapter.model.seat_layout_unit_model import SeatLayoutUnitModel


class UnitRepoImpl(IUnitRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ) -> None:
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _model_to_entity(model: SeatLayoutUnitModel) -> PositionedUnitEntity:
        return PositionedUnitEntity(
            id=model.id,
            layout_id=model.layout_id,
            floor_number=model.floor_number,
            position_x=model.position_x,
            position_y=model.position_y,
            space_kind=SpaceKind(model.space_kind),
            seat_number=model.seat_number,
            seat_type=SeatType(model.seat_type) if model.seat_type else None,
            amenities=list(model.amenities or []),
            meta=dict(model.meta or {}),
            active=model.active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _entity_to_model(unit: PositionedUnitEntity, *, layout_id: int) -> SeatLayoutUnitModel:
        return SeatLayoutUnitModel(
            layout_id=layout_id,
            floor_number=unit.floor_number,
            position_x=unit.position_x,
            position_y=unit.position_y,
            space_kind=unit.space_kind.value,
            seat_number=unit.seat_number,
            seat_type=unit.seat_type.value if unit.seat_type else None,
            amenities=list(unit.amenities),
            meta=dict(unit.meta),
            active=unit.active,
        )

    @Logger.io(truncate_content=True)
    async def create_many(self, *, layout_id: int, units: List[PositionedUnitEntity]) -> int:
        if not units:
            return 0
        async with self._get_session() as session:
            session.add_all([self._entity_to_model(unit, layout_id=layout_id) for unit in units])
            await session.flush()
            return len(units)

    @Logger.io(truncate_content=True)
    async def list_active_by_layout(self, *, layout_id: int) -> List[PositionedUnitEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SeatLayoutUnitModel)
                .where(
                    SeatLayoutUnitModel.layout_id == layout_id,
                    SeatLayoutUnitModel.active.is_(True),
                )
                .order_by(
                    SeatLayoutUnitModel.floor_number,
                    SeatLayoutUnitModel.position_y,
                    SeatLayoutUnitModel.position_x,
                )
            )
            return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io(truncate_content=True)
    async def apply_plan(self, *, layout_id: int, plan: ReconciliationPlan) -> None:
        if plan.is_noop:
            return

        now = datetime.now(timezone.utc)
        async with self._get_session() as session:
            # 1. Release seat numbers that move to another slot
            if plan.renumbered_ids:
                await session.execute(
                    update(SeatLayoutUnitModel)
                    .where(SeatLayoutUnitModel.id.in_(sorted(plan.renumbered_ids)))
                    .values(seat_number=None, updated_at=now)
                    .execution_options(synchronize_session=False)
                )

            # 2. Deactivate slots missing from the target (seat numbers kept for history)
            if plan.deactivations:
                await session.execute(
                    update(SeatLayoutUnitModel)
                    .where(SeatLayoutUnitModel.id.in_([unit.id for unit in plan.deactivations]))
                    .values(active=False, updated_at=now)
                    .execution_options(synchronize_session=False)
                )

            # 3. New slots
            if plan.creates:
                session.add_all(
                    [self._entity_to_model(unit, layout_id=layout_id) for unit in plan.creates]
                )
                await session.flush()

            # 4. Final content of matched slots, one batch by primary key
            if plan.updates:
                await session.execute(
                    update(SeatLayoutUnitModel),
                    [
                        {
                            'id': unit.id,
                            'space_kind': unit.space_kind.value,
                            'seat_number': unit.seat_number,
                            'seat_type': unit.seat_type.value if unit.seat_type else None,
                            'amenities': list(unit.amenities),
                            'meta': dict(unit.meta),
                            'active': True,
                            'updated_at': now,
                        }
                        for unit in plan.updates
                    ],
                )

        Logger.base.info(
            f'🧩 [UNITS] layout={layout_id} created={len(plan.creates)} '
            f'updated={len(plan.updates)} deactivated={len(plan.deactivations)}'
        )
