from abc import ABC, abstractmethod
from typing import List

from src.service.seating.domain.entity.zone_entity import ZoneEntity


class IZoneRepo(ABC):
    @abstractmethod
    async def list_by_layout(self, *, layout_id: int) -> List[ZoneEntity]:
        pass

    @abstractmethod
    async def replace_all(self, *, layout_id: int, zones: List[ZoneEntity]) -> List[ZoneEntity]:
        """Delete every zone of the layout and insert `zones`, in the caller's transaction."""
        pass
