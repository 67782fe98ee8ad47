from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_layout_repo import ILayoutRepo
from src.service.seating.domain.entity.layout_entity import LayoutEntity
from src.service.seating.domain.enum.layout_kind import LayoutKind
from src.service.seating.domain.value_object.floor_spec import FloorSpec
from src.service.seating.driven_adapter.model.seat_layout_model import SeatLayoutModel
from src.service.seating.driven_adapter.model.seat_layout_unit_model import SeatLayoutUnitModel
from src.service.seating.driven_adapter.model.seat_layout_zone_model import SeatLayoutZoneModel


class LayoutRepoImpl(ILayoutRepo):
    """
    Reads work standalone through `session_factory`; writes expect the
    shared session injected by the unit of work.
    """

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
    def _model_to_entity(model: SeatLayoutModel) -> LayoutEntity:
        return LayoutEntity(
            id=model.id,
            name=model.name,
            kind=LayoutKind(model.kind),
            floor_specs=[FloorSpec.from_dict(spec) for spec in model.floor_specs],
            description=model.description,
            template_id=model.template_id,
            total_seats=model.total_seats,
            is_customized=model.is_customized,
            version=model.version,
            active=model.active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @Logger.io
    async def create(self, *, layout: LayoutEntity) -> LayoutEntity:
        async with self._get_session() as session:
            model = SeatLayoutModel(
                kind=layout.kind.value,
                name=layout.name,
                description=layout.description,
                template_id=layout.template_id,
                num_floors=layout.num_floors,
                floor_specs=[spec.to_dict() for spec in layout.floor_specs],
                total_seats=layout.total_seats,
                is_customized=layout.is_customized,
                version=layout.version,
                active=layout.active,
            )
            session.add(model)
            await session.flush()

            return self._model_to_entity(model)

    @Logger.io
    async def get_by_id(self, *, layout_id: int) -> Optional[LayoutEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SeatLayoutModel).where(SeatLayoutModel.id == layout_id)
            )
            model = result.scalar_one_or_none()
            return self._model_to_entity(model) if model else None

    @Logger.io
    async def list_instances(self, *, template_id: int) -> List[LayoutEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SeatLayoutModel)
                .where(
                    SeatLayoutModel.template_id == template_id,
                    SeatLayoutModel.kind == LayoutKind.INSTANCE.value,
                )
                .order_by(SeatLayoutModel.id)
            )
            return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def update(self, *, layout: LayoutEntity) -> LayoutEntity:
        async with self._get_session() as session:
            stmt = (
                update(SeatLayoutModel)
                .where(
                    SeatLayoutModel.id == layout.id,
                    SeatLayoutModel.version == layout.version,
                )
                .values(
                    name=layout.name,
                    description=layout.description,
                    template_id=layout.template_id,
                    num_floors=layout.num_floors,
                    floor_specs=[spec.to_dict() for spec in layout.floor_specs],
                    total_seats=layout.total_seats,
                    is_customized=layout.is_customized,
                    active=layout.active,
                    version=SeatLayoutModel.version + 1,
                )
                .returning(SeatLayoutModel.version, SeatLayoutModel.updated_at)
                .execution_options(synchronize_session=False)
            )
            row = (await session.execute(stmt)).first()
            if row is None:
                raise ConflictError(
                    f'Layout {layout.id} was modified concurrently '
                    f'(expected version {layout.version})'
                )

            layout.version = row.version
            layout.updated_at = row.updated_at
            return layout

    @Logger.io
    async def delete(self, *, layout_id: int) -> bool:
        async with self._get_session() as session:
            # Children go explicitly so behavior does not hinge on FK enforcement (SQLite)
            await session.execute(
                delete(SeatLayoutUnitModel)
                .where(SeatLayoutUnitModel.layout_id == layout_id)
                .execution_options(synchronize_session=False)
            )
            await session.execute(
                delete(SeatLayoutZoneModel)
                .where(SeatLayoutZoneModel.layout_id == layout_id)
                .execution_options(synchronize_session=False)
            )
            # Instances outlive their template
            await session.execute(
                update(SeatLayoutModel)
                .where(SeatLayoutModel.template_id == layout_id)
                .values(template_id=None)
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(
                delete(SeatLayoutModel)
                .where(SeatLayoutModel.id == layout_id)
                .execution_options(synchronize_session=False)
            )
            return bool(result.rowcount)  # type: ignore[attr-defined]
