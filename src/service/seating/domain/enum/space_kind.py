from enum import Enum


class SpaceKind(Enum):
    """What occupies a positioned unit's slot"""

    SEAT = 'seat'
    HALLWAY = 'hallway'  # aisle column
    BATHROOM = 'bathroom'
    STAIRS = 'stairs'
    EMPTY = 'empty'

    @property
    def is_seat(self) -> bool:
        return self is SpaceKind.SEAT
