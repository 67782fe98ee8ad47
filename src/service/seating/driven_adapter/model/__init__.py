"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.seating.driven_adapter.model.seat_layout_model import SeatLayoutModel
from src.service.seating.driven_adapter.model.seat_layout_unit_model import SeatLayoutUnitModel
from src.service.seating.driven_adapter.model.seat_layout_zone_model import SeatLayoutZoneModel

__all__ = [
    'SeatLayoutModel',
    'SeatLayoutUnitModel',
    'SeatLayoutZoneModel',
]
