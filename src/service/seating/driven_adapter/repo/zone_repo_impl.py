from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_zone_repo import IZoneRepo
from src.service.seating.domain.entity.zone_entity import ZoneEntity
from src.service.seating.driven_adapter.model.seat_layout_zone_model import SeatLayoutZoneModel


class ZoneRepoImpl(IZoneRepo):
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
    def _model_to_entity(model: SeatLayoutZoneModel) -> ZoneEntity:
        return ZoneEntity(
            id=model.id,
            layout_id=model.layout_id,
            name=model.name,
            row_numbers=list(model.row_numbers or []),
            price_multiplier=model.price_multiplier,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @Logger.io
    async def list_by_layout(self, *, layout_id: int) -> List[ZoneEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SeatLayoutZoneModel)
                .where(SeatLayoutZoneModel.layout_id == layout_id)
                .order_by(SeatLayoutZoneModel.id)
            )
            return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def replace_all(self, *, layout_id: int, zones: List[ZoneEntity]) -> List[ZoneEntity]:
        async with self._get_session() as session:
            await session.execute(
                delete(SeatLayoutZoneModel)
                .where(SeatLayoutZoneModel.layout_id == layout_id)
                .execution_options(synchronize_session=False)
            )
            models = [
                SeatLayoutZoneModel(
                    layout_id=layout_id,
                    name=zone.name,
                    row_numbers=list(zone.row_numbers),
                    price_multiplier=zone.price_multiplier,
                )
                for zone in zones
            ]
            session.add_all(models)
            await session.flush()

            return [self._model_to_entity(model) for model in models]
