from abc import ABC, abstractmethod
from typing import List

from src.service.seating.domain.entity.positioned_unit_entity import PositionedUnitEntity
from src.service.seating.domain.reconciliation_plan import ReconciliationPlan


class IUnitRepo(ABC):
    """Positioned unit store, scoped to one layout per call."""

    @abstractmethod
    async def create_many(self, *, layout_id: int, units: List[PositionedUnitEntity]) -> int:
        """Bulk insert (initial grid, instance copy). Returns rows inserted."""
        pass

    @abstractmethod
    async def list_active_by_layout(self, *, layout_id: int) -> List[PositionedUnitEntity]:
        """Active units ordered by floor, row, column."""
        pass

    @abstractmethod
    async def apply_plan(self, *, layout_id: int, plan: ReconciliationPlan) -> None:
        """
        Write a reconciliation plan in the caller's transaction.

        Must not violate the active position / seat number unique indexes at
        any intermediate step, so renumbered units are released first.
        """
        pass
