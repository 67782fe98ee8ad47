#!/usr/bin/env python3
"""
Database Seed Script
Populate demo fleet layouts

Features:
1. Create Templates - one per bus model in TEMPLATE_CONFIGS (grid + zones)
2. Create Instances - INSTANCES_PER_TEMPLATE vehicles per template

Notes:
- Expects a migrated, empty database (see script/reset_database.py)
- SEED_INSTANCES overrides INSTANCES_PER_TEMPLATE
"""

import asyncio
import os
from dataclasses import dataclass, field
from typing import List

from sqlalchemy import text

from src.platform.config.di import container
from src.platform.database.orm_db_setting import dispose_engine, get_session_maker
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.create_instance_use_case import CreateInstanceUseCase
from src.service.seating.app.command.create_template_use_case import CreateTemplateUseCase
from src.service.seating.app.command.replace_zones_use_case import ReplaceZonesUseCase
from src.service.seating.domain.entity.zone_entity import ZoneEntity
from src.service.seating.domain.value_object.floor_spec import FloorSpec


INSTANCES_PER_TEMPLATE = int(os.getenv('SEED_INSTANCES', '2'))


@dataclass
class TemplateConfig:
    """Template seed configuration"""

    name: str
    description: str
    floor_specs: List[FloorSpec]
    zones: List[ZoneEntity] = field(default_factory=list)


TEMPLATE_CONFIGS = [
    TemplateConfig(
        name='Coach 48 - single deck',
        description='2+2 coach, 12 rows',
        floor_specs=[FloorSpec(floor_number=1, num_rows=12, seats_left=2, seats_right=2)],
        zones=[
            ZoneEntity(name='Front', row_numbers=[1, 2, 3], price_multiplier=1.2),
            ZoneEntity(name='Standard', row_numbers=list(range(4, 13)), price_multiplier=1.0),
        ],
    ),
    TemplateConfig(
        name='Double decker 66',
        description='Executive lower deck, 2+2 upper deck',
        floor_specs=[
            FloorSpec(floor_number=1, num_rows=5, seats_left=1, seats_right=2),
            FloorSpec(floor_number=2, num_rows=12, seats_left=2, seats_right=2),
        ],
        zones=[
            ZoneEntity(name='Panoramic', row_numbers=[1], price_multiplier=1.5),
        ],
    ),
]


async def create_layouts() -> None:
    uow_factory = container.unit_of_work.provider
    create_template = CreateTemplateUseCase(uow_factory=uow_factory)
    replace_zones = ReplaceZonesUseCase(uow_factory=uow_factory)
    create_instance = CreateInstanceUseCase(uow_factory=uow_factory)

    for config in TEMPLATE_CONFIGS:
        template = await create_template.create_template(
            name=config.name,
            description=config.description,
            floor_specs=config.floor_specs,
        )
        if template.id is None:
            raise RuntimeError(f'Template {config.name!r} has no id after creation')
        Logger.base.info(
            f'   ✅ Template: ID={template.id}, Name={template.name}, seats={template.total_seats}'
        )

        if config.zones:
            await replace_zones.replace_zones(layout_id=template.id, zones=config.zones)
            Logger.base.info(f'      🏷️  Zones: {len(config.zones)}')

        for index in range(1, INSTANCES_PER_TEMPLATE + 1):
            instance = await create_instance.create_instance(
                template_id=template.id, name=f'{config.name} #{index:02d}'
            )
            Logger.base.info(f'      🚌 Instance: ID={instance.id}, Name={instance.name}')


async def verify_data() -> None:
    Logger.base.info('🔍 Verifying seeded data...')
    async with get_session_maker()() as session:
        for table in ['seat_layout', 'seat_layout_unit', 'seat_layout_zone']:
            result = await session.execute(text(f'SELECT COUNT(*) FROM {table}'))
            Logger.base.info(f'   {table} count: {result.scalar()}')


async def main() -> None:
    Logger.base.info('🌱 Starting data seeding...')
    try:
        await create_layouts()
        await verify_data()
    except Exception as e:
        Logger.base.error(f'❌ Seeding failed: {e}')
        raise SystemExit(1) from e
    finally:
        await dispose_engine()

    Logger.base.info('✅ Data seeding completed!')


if __name__ == '__main__':
    asyncio.run(main())
