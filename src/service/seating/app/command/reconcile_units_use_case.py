from typing import Callable, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.layout_reconciler import LayoutReconciler
from src.service.seating.app.dto.reconciliation_result import ReconciliationResult
from src.service.seating.domain.value_object.unit_target import UnitTarget


class ReconcileUnitsUseCase:
    """
    Batch seat configuration update for one layout (template or instance).

    One transaction per call. On an instance this is a direct edit, so the
    customization flag is set in the same transaction.
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

    @Logger.io(truncate_content=True)
    async def reconcile(
        self,
        *,
        layout_id: int,
        targets: List[UnitTarget],
        expected_version: Optional[int] = None,
    ) -> ReconciliationResult:
        async with self.uow_factory() as uow:
            layout = await uow.layout_repo.get_by_id(layout_id=layout_id)
            if layout is None:
                raise NotFoundError(f'Layout not found: {layout_id}')

            layout.mark_customized()
            result = await self.layout_reconciler.reconcile(
                uow=uow,
                layout=layout,
                targets=targets,
                trigger='edit',
                expected_version=expected_version,
            )
            await uow.commit()

        return result
