from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base
from src.service.seating.domain.value_object.unit_target import SEAT_NUMBER_MAX_LENGTH


class SeatLayoutUnitModel(Base):
    __tablename__ = 'seat_layout_unit'
    __mapper_args__ = {'eager_defaults': True}
    __table_args__ = (
        # Among active units: one unit per slot, one unit per seat number
        Index(
            'uq_seat_layout_unit_active_position',
            'layout_id',
            'floor_number',
            'position_x',
            'position_y',
            unique=True,
            postgresql_where=text('active'),
            sqlite_where=text('active'),
        ),
        Index(
            'uq_seat_layout_unit_active_seat_number',
            'layout_id',
            'seat_number',
            unique=True,
            postgresql_where=text('active AND seat_number IS NOT NULL'),
            sqlite_where=text('active AND seat_number IS NOT NULL'),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    layout_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('seat_layout.id', ondelete='CASCADE'), nullable=False, index=True
    )
    floor_number: Mapped[int] = mapped_column(Integer, nullable=False)
    position_x: Mapped[int] = mapped_column(Integer, nullable=False)
    position_y: Mapped[int] = mapped_column(Integer, nullable=False)
    space_kind: Mapped[str] = mapped_column(String(20), nullable=False)
    seat_number: Mapped[Optional[str]] = mapped_column(
        String(SEAT_NUMBER_MAX_LENGTH), nullable=True
    )
    seat_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    amenities: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    meta: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
