from enum import Enum


class LayoutKind(Enum):
    """Templates are canonical seat maps; instances are per-vehicle copies."""

    TEMPLATE = 'template'
    INSTANCE = 'instance'
