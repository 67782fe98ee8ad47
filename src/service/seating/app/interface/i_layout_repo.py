"""
Layout Repository Interface

Persistence of template and instance headers. Every update is a
compare-and-set on `version`: the stored row must still carry the version
the caller read, and the stored version is incremented.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.seating.domain.entity.layout_entity import LayoutEntity


class ILayoutRepo(ABC):
    @abstractmethod
    async def create(self, *, layout: LayoutEntity) -> LayoutEntity:
        """Insert a layout and return it with its generated id."""
        pass

    @abstractmethod
    async def get_by_id(self, *, layout_id: int) -> Optional[LayoutEntity]:
        pass

    @abstractmethod
    async def list_instances(self, *, template_id: int) -> List[LayoutEntity]:
        """All instances referencing the template, ordered by id."""
        pass

    @abstractmethod
    async def update(self, *, layout: LayoutEntity) -> LayoutEntity:
        """
        Persist header fields if the stored version equals `layout.version`.

        Returns the layout carrying the new version.

        Raises:
            ConflictError: the layout was changed since it was read
        """
        pass

    @abstractmethod
    async def delete(self, *, layout_id: int) -> bool:
        """Physically delete the layout with its units and zones."""
        pass
