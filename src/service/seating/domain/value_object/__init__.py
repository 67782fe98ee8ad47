"""Seating Domain Value Objects"""

from src.service.seating.domain.value_object.floor_spec import FloorSpec
from src.service.seating.domain.value_object.position import Position
from src.service.seating.domain.value_object.unit_target import UnitTarget

__all__ = ['FloorSpec', 'Position', 'UnitTarget']
