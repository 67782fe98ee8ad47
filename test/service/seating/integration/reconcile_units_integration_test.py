"""
Integration tests for reconciliation against SQLite

The partial unique indexes (active position, active seat number) are live
here, so these cover the apply order as well as the counts.
"""

import attrs
import pytest

from src.platform.exception.exceptions import ConflictError, PayloadValidationError
from src.service.seating.domain.enum.space_kind import SpaceKind
from src.service.seating.domain.value_object.unit_target import UnitTarget
from test.service.seating.fixtures import targets_from


pytestmark = pytest.mark.integration


class TestCreateTemplate:
    async def test_grid_is_persisted_with_template(self, coach_template, unit_repo, layout_repo):
        units = await unit_repo.list_active_by_layout(layout_id=coach_template.id)

        seats = [unit for unit in units if unit.is_seat]
        assert len(units) == 20
        assert [seat.seat_number for seat in seats] == [str(n) for n in range(1, 17)]
        assert coach_template.total_seats == 16

        stored = await layout_repo.get_by_id(layout_id=coach_template.id)
        assert stored.is_template
        assert stored.floor_specs == coach_template.floor_specs
        assert stored.version == 0


class TestReconcileUnits:
    async def test_first_eight_seats_deactivate_the_rest(
        self, coach_template, unit_repo, layout_repo, reconcile_units_use_case
    ):
        current = await unit_repo.list_active_by_layout(layout_id=coach_template.id)
        seats = [unit for unit in current if unit.is_seat]
        aisles = [unit for unit in current if not unit.is_seat]

        result = await reconcile_units_use_case.reconcile(
            layout_id=coach_template.id, targets=targets_from(aisles + seats[:8])
        )

        assert result.deactivated == 8
        assert result.total_active_seats == 8
        assert (result.created, result.updated) == (0, 0)

        remaining = await unit_repo.list_active_by_layout(layout_id=coach_template.id)
        assert len(remaining) == 12
        stored = await layout_repo.get_by_id(layout_id=coach_template.id)
        assert stored.total_seats == 8
        assert stored.version == 1

    async def test_swapping_seat_numbers_does_not_violate_uniqueness(
        self, coach_template, unit_repo, reconcile_units_use_case
    ):
        current = await unit_repo.list_active_by_layout(layout_id=coach_template.id)
        ids_by_number = {unit.seat_number: unit.id for unit in current if unit.is_seat}
        targets = targets_from(current)
        first = next(i for i, t in enumerate(targets) if t.seat_number == '1')
        second = next(i for i, t in enumerate(targets) if t.seat_number == '2')
        targets[first] = attrs.evolve(targets[first], seat_number='2')
        targets[second] = attrs.evolve(targets[second], seat_number='1')

        result = await reconcile_units_use_case.reconcile(
            layout_id=coach_template.id, targets=targets
        )

        assert (result.created, result.updated, result.deactivated) == (0, 2, 0)
        after = {
            unit.seat_number: unit.id
            for unit in await unit_repo.list_active_by_layout(layout_id=coach_template.id)
            if unit.is_seat
        }
        # Ids stay on their slots; labels moved
        assert after['1'] == ids_by_number['2']
        assert after['2'] == ids_by_number['1']

    async def test_shifting_every_seat_number_by_one(
        self, coach_template, unit_repo, reconcile_units_use_case
    ):
        current = await unit_repo.list_active_by_layout(layout_id=coach_template.id)
        targets = [
            attrs.evolve(target, seat_number=str(int(target.seat_number) + 1))
            if target.seat_number
            else target
            for target in targets_from(current)
        ]

        result = await reconcile_units_use_case.reconcile(
            layout_id=coach_template.id, targets=targets
        )

        assert result.updated == 16
        numbers = sorted(
            int(unit.seat_number)
            for unit in await unit_repo.list_active_by_layout(layout_id=coach_template.id)
            if unit.is_seat
        )
        assert numbers == list(range(2, 18))

    async def test_reapplying_the_same_target_is_idempotent(
        self, coach_template, unit_repo, reconcile_units_use_case
    ):
        current = await unit_repo.list_active_by_layout(layout_id=coach_template.id)
        targets = targets_from(current[:10])

        first = await reconcile_units_use_case.reconcile(
            layout_id=coach_template.id, targets=targets
        )
        second = await reconcile_units_use_case.reconcile(
            layout_id=coach_template.id, targets=targets
        )

        assert first.deactivated == 10
        assert (second.created, second.updated, second.deactivated) == (0, 0, 0)
        assert second.total_active_seats == first.total_active_seats

    async def test_empty_target_deactivates_everything(
        self, coach_template, unit_repo, reconcile_units_use_case
    ):
        result = await reconcile_units_use_case.reconcile(layout_id=coach_template.id, targets=[])

        assert result.deactivated == 20
        assert result.total_active_seats == 0
        assert await unit_repo.list_active_by_layout(layout_id=coach_template.id) == []

    async def test_freed_seat_number_can_be_reused_by_a_new_slot(
        self, coach_template, unit_repo, reconcile_units_use_case
    ):
        current = await unit_repo.list_active_by_layout(layout_id=coach_template.id)
        # Seat "1" leaves its window slot; a bench in the last-row aisle takes the label
        targets = [target for target in targets_from(current) if target.seat_number != '1']
        targets = [
            target
            for target in targets
            if not (target.space_kind is SpaceKind.HALLWAY and target.y == 4)
        ]
        targets.append(UnitTarget(floor_number=1, x=2, y=4, seat_number='1'))

        result = await reconcile_units_use_case.reconcile(
            layout_id=coach_template.id, targets=targets
        )

        assert (result.created, result.updated, result.deactivated) == (0, 1, 1)
        bench = next(
            unit
            for unit in await unit_repo.list_active_by_layout(layout_id=coach_template.id)
            if unit.seat_number == '1'
        )
        assert (bench.position_x, bench.position_y) == (2, 4)
        assert bench.meta['is_window'] is False
        assert result.total_active_seats == 16

    async def test_rejected_payload_writes_nothing(
        self, coach_template, unit_repo, layout_repo, reconcile_units_use_case
    ):
        targets = [
            UnitTarget(floor_number=1, x=0, y=1, seat_number='A1'),
            UnitTarget(floor_number=1, x=1, y=1, seat_number='A1'),
        ]

        with pytest.raises(PayloadValidationError) as exc_info:
            await reconcile_units_use_case.reconcile(layout_id=coach_template.id, targets=targets)

        assert exc_info.value.field == 'seatNumber'
        assert len(await unit_repo.list_active_by_layout(layout_id=coach_template.id)) == 20
        stored = await layout_repo.get_by_id(layout_id=coach_template.id)
        assert stored.version == 0

    async def test_floor_out_of_range(self, coach_template, reconcile_units_use_case):
        with pytest.raises(PayloadValidationError) as exc_info:
            await reconcile_units_use_case.reconcile(
                layout_id=coach_template.id,
                targets=[UnitTarget(floor_number=2, x=0, y=1, seat_number='1')],
            )

        assert exc_info.value.code == 'FLOOR_OUT_OF_RANGE'
        assert exc_info.value.valid_range == (1, 1)

    async def test_stale_expected_version_is_rejected(
        self, coach_template, unit_repo, reconcile_units_use_case
    ):
        current = await unit_repo.list_active_by_layout(layout_id=coach_template.id)
        await reconcile_units_use_case.reconcile(
            layout_id=coach_template.id, targets=targets_from(current), expected_version=0
        )

        with pytest.raises(ConflictError):
            await reconcile_units_use_case.reconcile(
                layout_id=coach_template.id, targets=[], expected_version=0
            )

        assert len(await unit_repo.list_active_by_layout(layout_id=coach_template.id)) == 20
