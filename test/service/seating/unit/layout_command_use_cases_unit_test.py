"""
Unit tests for layout command use cases

Test Coverage:
1. Template creation persists layout and generated grid in one unit of work
2. Editing an instance (units, zones, properties) sets the customization flag
3. Editing a template never sets it; only reset clears it
4. Template updates regenerate units through the reconciler
5. Not-found and version conflicts surface before any write
"""

from unittest.mock import AsyncMock

import attrs
import pytest

from src.platform.exception.exceptions import ConflictError, DomainError, NotFoundError
from src.service.seating.app.command.create_instance_use_case import CreateInstanceUseCase
from src.service.seating.app.command.create_template_use_case import CreateTemplateUseCase
from src.service.seating.app.command.delete_layout_use_case import DeleteLayoutUseCase
from src.service.seating.app.command.reconcile_units_use_case import ReconcileUnitsUseCase
from src.service.seating.app.command.replace_zones_use_case import ReplaceZonesUseCase
from src.service.seating.app.command.reset_customization_use_case import (
    ResetCustomizationUseCase,
)
from src.service.seating.app.command.update_instance_use_case import UpdateInstanceUseCase
from src.service.seating.app.command.update_template_use_case import UpdateTemplateUseCase
from src.service.seating.app.dto.reconciliation_result import ReconciliationResult
from src.service.seating.domain.entity.zone_entity import ZoneEntity
from src.service.seating.domain.enum.layout_kind import LayoutKind
from src.service.seating.domain.value_object.floor_spec import FloorSpec
from test.service.seating.fixtures import (
    COACH_16,
    FakeUnitOfWork,
    make_instance,
    make_template,
    persisted_grid,
    targets_from,
)


pytestmark = pytest.mark.unit


def _reconciler(result: ReconciliationResult | None = None) -> AsyncMock:
    reconciler = AsyncMock()
    reconciler.reconcile.return_value = result or ReconciliationResult(
        created=0, updated=0, deactivated=0, total_active_seats=16
    )
    return reconciler


class TestCreateTemplate:
    @pytest.mark.asyncio
    async def test_layout_and_grid_written_in_one_unit_of_work(self):
        uow = FakeUnitOfWork()

        async def _create(*, layout):
            return attrs.evolve(layout, id=7)

        uow.layout_repo.create.side_effect = _create
        use_case = CreateTemplateUseCase(uow_factory=lambda: uow)

        template = await use_case.create_template(name='Coach 16', floor_specs=COACH_16)

        assert template.id == 7
        assert template.kind is LayoutKind.TEMPLATE
        assert template.total_seats == 16
        create_many = uow.unit_repo.create_many.await_args.kwargs
        assert create_many['layout_id'] == 7
        assert len(create_many['units']) == 20
        assert uow.committed

    @pytest.mark.asyncio
    async def test_invalid_floor_specs_never_open_a_transaction(self):
        factory = AsyncMock()
        use_case = CreateTemplateUseCase(uow_factory=factory)
        specs = [FloorSpec(floor_number=2, num_rows=1, seats_left=1, seats_right=1)]

        with pytest.raises(DomainError):
            await use_case.create_template(name='Broken', floor_specs=specs)

        factory.assert_not_called()


class TestCreateInstance:
    @pytest.mark.asyncio
    async def test_copies_active_units_and_zones(self):
        template = make_template(template_id=1)
        uow = FakeUnitOfWork({1: template})
        uow.unit_repo.list_active_by_layout.return_value = persisted_grid(COACH_16)
        uow.zone_repo.list_by_layout.return_value = [
            ZoneEntity(name='Front', row_numbers=[1, 2], price_multiplier=1.5, layout_id=1, id=3)
        ]

        async def _create(*, layout):
            return attrs.evolve(layout, id=20)

        uow.layout_repo.create.side_effect = _create
        use_case = CreateInstanceUseCase(uow_factory=lambda: uow)

        instance = await use_case.create_instance(template_id=1, name='Bus 001')

        assert instance.template_id == 1
        assert instance.is_customized is False
        assert instance.total_seats == 16
        copied_units = uow.unit_repo.create_many.await_args.kwargs['units']
        assert len(copied_units) == 20
        assert {unit.layout_id for unit in copied_units} == {20}
        assert all(unit.id is None for unit in copied_units)
        copied_zones = uow.zone_repo.replace_all.await_args.kwargs['zones']
        assert [(zone.name, zone.layout_id) for zone in copied_zones] == [('Front', 20)]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_unknown_template(self):
        uow = FakeUnitOfWork()
        use_case = CreateInstanceUseCase(uow_factory=lambda: uow)

        with pytest.raises(NotFoundError):
            await use_case.create_instance(template_id=1, name='Bus 001')

        uow.layout_repo.create.assert_not_awaited()


class TestCustomizationFlag:
    def setup_method(self):
        self.template = make_template(template_id=1)
        self.instance = make_instance(self.template, instance_id=2)
        self.uow = FakeUnitOfWork({1: self.template, 2: self.instance})

    @pytest.mark.asyncio
    async def test_reconciling_an_instance_marks_it_customized(self):
        reconciler = _reconciler()
        use_case = ReconcileUnitsUseCase(uow_factory=lambda: self.uow, layout_reconciler=reconciler)

        await use_case.reconcile(layout_id=2, targets=targets_from(persisted_grid(COACH_16)))

        assert self.instance.is_customized is True
        kwargs = reconciler.reconcile.await_args.kwargs
        assert kwargs['trigger'] == 'edit'
        assert kwargs['layout'] is self.instance
        assert self.uow.committed

    @pytest.mark.asyncio
    async def test_reconciling_a_template_does_not_flag_it(self):
        use_case = ReconcileUnitsUseCase(
            uow_factory=lambda: self.uow, layout_reconciler=_reconciler()
        )

        await use_case.reconcile(layout_id=1, targets=[])

        assert self.template.is_customized is False

    @pytest.mark.asyncio
    async def test_reconcile_unknown_layout(self):
        reconciler = _reconciler()
        use_case = ReconcileUnitsUseCase(uow_factory=lambda: self.uow, layout_reconciler=reconciler)

        with pytest.raises(NotFoundError):
            await use_case.reconcile(layout_id=404, targets=[])

        reconciler.reconcile.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_replacing_instance_zones_marks_it_customized(self):
        use_case = ReplaceZonesUseCase(uow_factory=lambda: self.uow)
        zones = [ZoneEntity(name='Rear', row_numbers=[4])]

        await use_case.replace_zones(layout_id=2, zones=zones)

        assert self.instance.is_customized is True
        self.uow.zone_repo.replace_all.assert_awaited_once_with(layout_id=2, zones=zones)
        self.uow.layout_repo.update.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_replace_zones_with_stale_version(self):
        self.instance.version = 4
        use_case = ReplaceZonesUseCase(uow_factory=lambda: self.uow)

        with pytest.raises(ConflictError):
            await use_case.replace_zones(layout_id=2, zones=[], expected_version=3)

        self.uow.zone_repo.replace_all.assert_not_awaited()
        assert self.instance.is_customized is False

    @pytest.mark.asyncio
    async def test_updating_instance_properties_marks_it_customized(self):
        use_case = UpdateInstanceUseCase(uow_factory=lambda: self.uow)

        instance = await use_case.update_instance(instance_id=2, name='Bus 002')

        assert instance.name == 'Bus 002'
        assert instance.is_customized is True

    @pytest.mark.asyncio
    async def test_update_instance_rejects_template_ids(self):
        use_case = UpdateInstanceUseCase(uow_factory=lambda: self.uow)

        with pytest.raises(NotFoundError):
            await use_case.update_instance(instance_id=1, name='Nope')

    @pytest.mark.asyncio
    async def test_reset_is_the_only_way_back(self):
        self.instance.is_customized = True
        self.instance.mark_customized()
        assert self.instance.is_customized is True

        use_case = ResetCustomizationUseCase(uow_factory=lambda: self.uow)
        instance = await use_case.reset_customization(instance_id=2)

        assert instance.is_customized is False
        assert self.uow.committed

    @pytest.mark.asyncio
    async def test_reset_on_template_is_not_found(self):
        use_case = ResetCustomizationUseCase(uow_factory=lambda: self.uow)

        with pytest.raises(NotFoundError):
            await use_case.reset_customization(instance_id=1)


class TestUpdateTemplate:
    def setup_method(self):
        self.template = make_template(template_id=1, version=2)
        self.uow = FakeUnitOfWork({1: self.template})
        self.reconciler = _reconciler(
            ReconciliationResult(created=5, updated=0, deactivated=0, total_active_seats=20)
        )
        self.use_case = UpdateTemplateUseCase(
            uow_factory=lambda: self.uow, layout_reconciler=self.reconciler
        )

    @pytest.mark.asyncio
    async def test_property_change_does_not_touch_units(self):
        result = await self.use_case.update_template(template_id=1, name='Coach 16 v2')

        assert result.template.name == 'Coach 16 v2'
        assert result.regeneration is None
        self.reconciler.reconcile.assert_not_awaited()
        self.uow.layout_repo.update.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_new_floor_specs_regenerate_through_reconciler(self):
        specs = [FloorSpec(floor_number=1, num_rows=5, seats_left=2, seats_right=2)]

        result = await self.use_case.update_template(template_id=1, floor_specs=specs)

        assert result.regeneration is not None
        assert result.regeneration.created == 5
        kwargs = self.reconciler.reconcile.await_args.kwargs
        assert kwargs['trigger'] == 'regenerate'
        assert len(kwargs['targets']) == 25
        assert self.template.floor_specs == specs

    @pytest.mark.asyncio
    async def test_regenerate_flag_forces_regeneration(self):
        result = await self.use_case.update_template(template_id=1, regenerate_units=True)

        assert result.regeneration is not None
        assert len(self.reconciler.reconcile.await_args.kwargs['targets']) == 20

    @pytest.mark.asyncio
    async def test_stale_version_conflicts(self):
        with pytest.raises(ConflictError):
            await self.use_case.update_template(template_id=1, name='x', expected_version=1)

        assert not self.uow.committed

    @pytest.mark.asyncio
    async def test_instance_id_is_not_a_template(self):
        self.uow.layouts[2] = make_instance(self.template, instance_id=2)

        with pytest.raises(NotFoundError):
            await self.use_case.update_template(template_id=2, name='x')


class TestDeleteLayout:
    @pytest.mark.asyncio
    async def test_missing_layout(self):
        uow = FakeUnitOfWork()
        uow.layout_repo.delete.return_value = False
        use_case = DeleteLayoutUseCase(uow_factory=lambda: uow)

        with pytest.raises(NotFoundError):
            await use_case.delete_layout(layout_id=1)

        assert not uow.committed
