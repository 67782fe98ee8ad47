"""Application layer interfaces (Ports)"""

from src.service.seating.app.interface.i_layout_repo import ILayoutRepo
from src.service.seating.app.interface.i_unit_repo import IUnitRepo
from src.service.seating.app.interface.i_zone_repo import IZoneRepo

__all__ = ['ILayoutRepo', 'IUnitRepo', 'IZoneRepo']
