import attrs


@attrs.frozen(order=True)
class Position:
    """Stable identity of a physical slot: floor plus (x, y) on that floor's grid."""

    floor_number: int
    x: int
    y: int

    def __str__(self) -> str:
        return f'{self.floor_number}:{self.x}:{self.y}'
