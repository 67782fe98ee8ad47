#!/usr/bin/env python3
"""
Database Reset Script
Drop and recreate the PostgreSQL database, then migrate it to head.

Notes:
- Structure only; run `script/seed_data.py` afterwards for demo layouts
- Make sure no app instance holds connections while this runs
"""

import asyncio
import os
import subprocess
import time

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection

from src.platform.config.core_setting import settings
from src.platform.constant.path import BASE_DIR
from src.platform.logging.loguru_io import Logger


DB_WAIT_SECONDS = 1


def _parse_db_connection(sync_url: str) -> tuple[str, str]:
    """Return (server_url, db_name)"""
    server_url, db_name = sync_url.rsplit('/', 1)
    return server_url, db_name


def _terminate_connections(conn: Connection, db_name: str) -> None:
    conn.execute(
        text(
            """
            SELECT pg_terminate_backend(pid)
            FROM pg_stat_activity
            WHERE datname = :db_name AND pid <> pg_backend_pid();
            """
        ),
        {'db_name': db_name},
    )


def _drop_and_create_db(server_url: str, db_name: str) -> None:
    admin_engine = create_engine(f'{server_url}/postgres', isolation_level='AUTOCOMMIT')

    try:
        with admin_engine.connect() as conn:
            _terminate_connections(conn, db_name)

            conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}";'))
            Logger.base.info(f"   ✅ Database '{db_name}' dropped")

            time.sleep(DB_WAIT_SECONDS)

            conn.execute(text(f'CREATE DATABASE "{db_name}";'))
            Logger.base.info(f"   ✅ Database '{db_name}' created")
    finally:
        admin_engine.dispose()


def _run_alembic_migrations() -> None:
    Logger.base.info("   🔄 Running 'alembic upgrade head'...")

    result = subprocess.run(
        ['alembic', 'upgrade', 'head'],
        cwd=BASE_DIR,
        capture_output=True,
        text=True,
        env=os.environ.copy(),
    )

    if result.returncode != 0:
        Logger.base.error(f'   ❌ Migration failed (return code: {result.returncode})')
        if result.stdout:
            Logger.base.error(f'   📋 STDOUT: {result.stdout}')
        if result.stderr:
            Logger.base.error(f'   📋 STDERR: {result.stderr}')
        raise RuntimeError(f'Alembic migration failed with return code {result.returncode}')

    Logger.base.info('   ✅ Database migrations completed')


async def drop_and_recreate_database() -> None:
    if settings.IS_SQLITE:
        raise RuntimeError('Reset targets PostgreSQL; delete the SQLite file instead')

    server_url, db_name = _parse_db_connection(settings.DATABASE_URL_SYNC)
    Logger.base.info(f'🗑️  Recreating database {db_name!r} on {server_url.rsplit("@", 1)[-1]}')

    _drop_and_create_db(server_url, db_name)
    _run_alembic_migrations()


async def main() -> None:
    Logger.base.info('🔄 Starting database reset...')
    try:
        await drop_and_recreate_database()
    except Exception as e:
        Logger.base.error(f'❌ Reset failed: {e}')
        raise SystemExit(1) from e

    Logger.base.info('✅ Database reset completed! Seed with: python -m script.seed_data')


if __name__ == '__main__':
    asyncio.run(main())
