"""Seating Domain Enums"""

from src.service.seating.domain.enum.layout_kind import LayoutKind
from src.service.seating.domain.enum.seat_type import SeatType
from src.service.seating.domain.enum.space_kind import SpaceKind

__all__ = ['LayoutKind', 'SeatType', 'SpaceKind']
