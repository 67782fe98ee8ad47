from datetime import datetime
from typing import List, Optional

import attrs


@attrs.define
class ZoneEntity:
    """Named price multiplier applied to a set of row numbers of one layout."""

    name: str
    row_numbers: List[int] = attrs.field(factory=list)
    price_multiplier: float = 1.0
    layout_id: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def copy_for(self, *, layout_id: Optional[int]) -> 'ZoneEntity':
        return ZoneEntity(
            name=self.name,
            row_numbers=list(self.row_numbers),
            price_multiplier=self.price_multiplier,
            layout_id=layout_id,
        )
