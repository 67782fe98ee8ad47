from typing import Optional

import attrs

from src.service.seating.app.dto.reconciliation_result import ReconciliationResult
from src.service.seating.domain.entity.layout_entity import LayoutEntity


@attrs.define(frozen=True)
class TemplateUpdateResult:
    template: LayoutEntity
    regeneration: Optional[ReconciliationResult] = None  # set when units were regenerated
