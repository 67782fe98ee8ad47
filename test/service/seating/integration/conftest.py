"""Use case fixtures wired to the per-test SQLite database."""

from collections.abc import Callable

import pytest

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.seating.app.command.create_instance_use_case import CreateInstanceUseCase
from src.service.seating.app.command.create_template_use_case import CreateTemplateUseCase
from src.service.seating.app.command.delete_layout_use_case import DeleteLayoutUseCase
from src.service.seating.app.command.layout_reconciler import LayoutReconciler
from src.service.seating.app.command.propagate_template_use_case import (
    PropagateTemplateUseCase,
)
from src.service.seating.app.command.reconcile_units_use_case import ReconcileUnitsUseCase
from src.service.seating.app.command.replace_zones_use_case import ReplaceZonesUseCase
from src.service.seating.app.command.reset_customization_use_case import (
    ResetCustomizationUseCase,
)
from src.service.seating.app.command.update_template_use_case import UpdateTemplateUseCase
from src.service.seating.domain.entity.layout_entity import LayoutEntity
from src.service.seating.driven_adapter.repo.layout_repo_impl import LayoutRepoImpl
from src.service.seating.driven_adapter.repo.unit_repo_impl import UnitRepoImpl
from src.service.seating.driven_adapter.repo.zone_repo_impl import ZoneRepoImpl
from test.service.seating.fixtures import COACH_16


UowFactory = Callable[[], AbstractUnitOfWork]


@pytest.fixture
def create_template_use_case(uow_factory: UowFactory) -> CreateTemplateUseCase:
    return CreateTemplateUseCase(uow_factory=uow_factory)


@pytest.fixture
def create_instance_use_case(uow_factory: UowFactory) -> CreateInstanceUseCase:
    return CreateInstanceUseCase(uow_factory=uow_factory)


@pytest.fixture
def reconcile_units_use_case(
    uow_factory: UowFactory, layout_reconciler: LayoutReconciler
) -> ReconcileUnitsUseCase:
    return ReconcileUnitsUseCase(uow_factory=uow_factory, layout_reconciler=layout_reconciler)


@pytest.fixture
def update_template_use_case(
    uow_factory: UowFactory, layout_reconciler: LayoutReconciler
) -> UpdateTemplateUseCase:
    return UpdateTemplateUseCase(uow_factory=uow_factory, layout_reconciler=layout_reconciler)


@pytest.fixture
def replace_zones_use_case(uow_factory: UowFactory) -> ReplaceZonesUseCase:
    return ReplaceZonesUseCase(uow_factory=uow_factory)


@pytest.fixture
def reset_customization_use_case(uow_factory: UowFactory) -> ResetCustomizationUseCase:
    return ResetCustomizationUseCase(uow_factory=uow_factory)


@pytest.fixture
def delete_layout_use_case(uow_factory: UowFactory) -> DeleteLayoutUseCase:
    return DeleteLayoutUseCase(uow_factory=uow_factory)


@pytest.fixture
def propagate_template_use_case(
    uow_factory: UowFactory,
    layout_repo: LayoutRepoImpl,
    unit_repo: UnitRepoImpl,
    zone_repo: ZoneRepoImpl,
    layout_reconciler: LayoutReconciler,
) -> PropagateTemplateUseCase:
    return PropagateTemplateUseCase(
        uow_factory=uow_factory,
        layout_repo=layout_repo,
        unit_repo=unit_repo,
        zone_repo=zone_repo,
        layout_reconciler=layout_reconciler,
        max_concurrency=2,
    )


@pytest.fixture
async def coach_template(create_template_use_case: CreateTemplateUseCase) -> LayoutEntity:
    """1 floor, 4 rows, 2 + 2 seats: 16 seats numbered 1..16 plus 4 aisle slots."""
    return await create_template_use_case.create_template(
        name='Coach 16', description='2+2 test coach', floor_specs=COACH_16
    )
