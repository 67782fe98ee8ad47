from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class SeatLayoutModel(Base):
    """Templates and instances share one table, told apart by `kind`."""

    __tablename__ = 'seat_layout'
    __mapper_args__ = {'eager_defaults': True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kind: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    # Instances survive template deletion
    template_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey('seat_layout.id', ondelete='SET NULL'), nullable=True, index=True
    )
    num_floors: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    floor_specs: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_customized: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
