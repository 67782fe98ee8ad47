"""
Integration tests for template propagation against SQLite

Test Coverage:
1. Non-customized instances follow the template's units and zones
2. Customized instances keep their units, zones and version
3. Reset customization makes an instance eligible again
4. Templates without (eligible) instances return an empty result
"""

import pytest

from src.service.seating.domain.entity.zone_entity import ZoneEntity
from src.service.seating.domain.value_object.unit_target import UnitTarget
from test.service.seating.fixtures import targets_from


pytestmark = pytest.mark.integration


async def _drop_last_row(template, unit_repo, reconcile_units_use_case):
    current = await unit_repo.list_active_by_layout(layout_id=template.id)
    kept = [unit for unit in current if unit.position_y < 4]
    return await reconcile_units_use_case.reconcile(
        layout_id=template.id, targets=targets_from(kept)
    )


class TestPropagateTemplate:
    async def test_instances_follow_template_changes(
        self,
        coach_template,
        create_instance_use_case,
        reconcile_units_use_case,
        replace_zones_use_case,
        propagate_template_use_case,
        unit_repo,
        zone_repo,
        layout_repo,
    ):
        instance = await create_instance_use_case.create_instance(
            template_id=coach_template.id, name='Bus 001'
        )
        await _drop_last_row(coach_template, unit_repo, reconcile_units_use_case)
        await replace_zones_use_case.replace_zones(
            layout_id=coach_template.id,
            zones=[ZoneEntity(name='Front', row_numbers=[1], price_multiplier=1.3)],
        )

        result = await propagate_template_use_case.propagate(template_id=coach_template.id)

        assert result.failures == []
        assert len(result.summaries) == 1
        summary = result.summaries[0]
        assert summary.instance_id == instance.id
        assert (summary.created, summary.updated, summary.deleted) == (0, 0, 5)

        units = await unit_repo.list_active_by_layout(layout_id=instance.id)
        assert len(units) == 15
        assert max(unit.position_y for unit in units) == 3
        zones = await zone_repo.list_by_layout(layout_id=instance.id)
        assert [(zone.name, zone.row_numbers, zone.price_multiplier) for zone in zones] == [
            ('Front', [1], 1.3)
        ]

        stored = await layout_repo.get_by_id(layout_id=instance.id)
        assert stored.total_seats == 12
        assert stored.is_customized is False

    async def test_customized_instance_is_left_untouched(
        self,
        coach_template,
        create_instance_use_case,
        reconcile_units_use_case,
        replace_zones_use_case,
        propagate_template_use_case,
        unit_repo,
        zone_repo,
        layout_repo,
    ):
        plain = await create_instance_use_case.create_instance(
            template_id=coach_template.id, name='Bus 001'
        )
        custom = await create_instance_use_case.create_instance(
            template_id=coach_template.id, name='Bus 002'
        )
        # Hand edit: seat 1 is relabelled W1
        custom_units = await unit_repo.list_active_by_layout(layout_id=custom.id)
        edited = targets_from(custom_units)
        edited[0] = UnitTarget(floor_number=1, x=0, y=1, seat_number='W1')
        await reconcile_units_use_case.reconcile(layout_id=custom.id, targets=edited)
        await replace_zones_use_case.replace_zones(
            layout_id=custom.id, zones=[ZoneEntity(name='Custom', row_numbers=[2])]
        )
        custom_before = await layout_repo.get_by_id(layout_id=custom.id)
        assert custom_before.is_customized is True

        await _drop_last_row(coach_template, unit_repo, reconcile_units_use_case)
        result = await propagate_template_use_case.propagate(template_id=coach_template.id)

        assert [summary.instance_id for summary in result.summaries] == [plain.id]
        assert result.skipped_customized == 1

        custom_units_after = await unit_repo.list_active_by_layout(layout_id=custom.id)
        assert len(custom_units_after) == 20
        assert 'W1' in {unit.seat_number for unit in custom_units_after}
        custom_zones = await zone_repo.list_by_layout(layout_id=custom.id)
        assert [zone.name for zone in custom_zones] == ['Custom']
        custom_after = await layout_repo.get_by_id(layout_id=custom.id)
        assert custom_after.version == custom_before.version

    async def test_reset_makes_instance_eligible_again(
        self,
        coach_template,
        create_instance_use_case,
        reconcile_units_use_case,
        reset_customization_use_case,
        propagate_template_use_case,
        unit_repo,
    ):
        instance = await create_instance_use_case.create_instance(
            template_id=coach_template.id, name='Bus 001'
        )
        await reconcile_units_use_case.reconcile(layout_id=instance.id, targets=[])
        await reset_customization_use_case.reset_customization(instance_id=instance.id)

        # Reset alone does not resynchronize
        assert await unit_repo.list_active_by_layout(layout_id=instance.id) == []

        result = await propagate_template_use_case.propagate(template_id=coach_template.id)

        assert result.summaries[0].created == 20
        assert len(await unit_repo.list_active_by_layout(layout_id=instance.id)) == 20

    async def test_template_without_instances(self, coach_template, propagate_template_use_case):
        result = await propagate_template_use_case.propagate(template_id=coach_template.id)

        assert result.template_id == coach_template.id
        assert result.summaries == []
        assert result.failures == []

    async def test_only_customized_instances(
        self,
        coach_template,
        create_instance_use_case,
        reconcile_units_use_case,
        propagate_template_use_case,
        unit_repo,
    ):
        instance = await create_instance_use_case.create_instance(
            template_id=coach_template.id, name='Bus 001'
        )
        units = await unit_repo.list_active_by_layout(layout_id=instance.id)
        await reconcile_units_use_case.reconcile(
            layout_id=instance.id, targets=targets_from(units)
        )

        result = await propagate_template_use_case.propagate(template_id=coach_template.id)

        assert result.summaries == []
        assert result.skipped_customized == 1

    async def test_many_instances_sync_independently(
        self,
        coach_template,
        create_instance_use_case,
        reconcile_units_use_case,
        propagate_template_use_case,
        unit_repo,
    ):
        instances = [
            await create_instance_use_case.create_instance(
                template_id=coach_template.id, name=f'Bus {n:03d}'
            )
            for n in range(1, 5)
        ]
        await _drop_last_row(coach_template, unit_repo, reconcile_units_use_case)

        result = await propagate_template_use_case.propagate(template_id=coach_template.id)

        assert [summary.instance_id for summary in result.summaries] == [
            instance.id for instance in instances
        ]
        assert all(summary.deleted == 5 for summary in result.summaries)
