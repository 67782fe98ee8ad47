"""init_seating_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- seat_layout: Templates and instances (kind), floor specs, customization flag, version
- seat_layout_unit: Positioned units (seats and non-seat spaces) per layout
- seat_layout_zone: Named row groups with a price multiplier per layout

Partial unique indexes keep, among ACTIVE units of one layout, a single unit per
(floor, x, y) and a single unit per seat number. Deactivated units keep their
seat number and are ignored by both.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create seating tables and indexes."""

    # ========== Layouts ==========
    op.create_table(
        'seat_layout',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('kind', sa.String(length=20), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('template_id', sa.Integer(), nullable=True),
        sa.Column('num_floors', sa.Integer(), nullable=False),
        sa.Column('floor_specs', sa.JSON(), nullable=False),
        sa.Column('total_seats', sa.Integer(), nullable=False),
        sa.Column('is_customized', sa.Boolean(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['template_id'], ['seat_layout.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_seat_layout_kind'), 'seat_layout', ['kind'], unique=False)
    op.create_index(
        op.f('ix_seat_layout_template_id'), 'seat_layout', ['template_id'], unique=False
    )

    # ========== Units ==========
    op.create_table(
        'seat_layout_unit',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('layout_id', sa.Integer(), nullable=False),
        sa.Column('floor_number', sa.Integer(), nullable=False),
        sa.Column('position_x', sa.Integer(), nullable=False),
        sa.Column('position_y', sa.Integer(), nullable=False),
        sa.Column('space_kind', sa.String(length=20), nullable=False),
        sa.Column('seat_number', sa.String(length=20), nullable=True),
        sa.Column('seat_type', sa.String(length=20), nullable=True),
        sa.Column('amenities', sa.JSON(), nullable=False),
        sa.Column('meta', sa.JSON(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['layout_id'], ['seat_layout.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        op.f('ix_seat_layout_unit_layout_id'), 'seat_layout_unit', ['layout_id'], unique=False
    )
    op.create_index(
        'uq_seat_layout_unit_active_position',
        'seat_layout_unit',
        ['layout_id', 'floor_number', 'position_x', 'position_y'],
        unique=True,
        postgresql_where=sa.text('active'),
        sqlite_where=sa.text('active'),
    )
    op.create_index(
        'uq_seat_layout_unit_active_seat_number',
        'seat_layout_unit',
        ['layout_id', 'seat_number'],
        unique=True,
        postgresql_where=sa.text('active AND seat_number IS NOT NULL'),
        sqlite_where=sa.text('active AND seat_number IS NOT NULL'),
    )

    # ========== Zones ==========
    op.create_table(
        'seat_layout_zone',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('layout_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('row_numbers', sa.JSON(), nullable=False),
        sa.Column('price_multiplier', sa.Float(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['layout_id'], ['seat_layout.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        op.f('ix_seat_layout_zone_layout_id'), 'seat_layout_zone', ['layout_id'], unique=False
    )


def downgrade() -> None:
    """Drop seating tables."""
    op.drop_table('seat_layout_zone')
    op.drop_index('uq_seat_layout_unit_active_seat_number', table_name='seat_layout_unit')
    op.drop_index('uq_seat_layout_unit_active_position', table_name='seat_layout_unit')
    op.drop_table('seat_layout_unit')
    op.drop_table('seat_layout')
