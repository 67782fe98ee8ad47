"""Application layer DTOs"""

from src.service.seating.app.dto.propagation_result import (
    InstanceSyncFailure,
    InstanceSyncSummary,
    PropagationResult,
)
from src.service.seating.app.dto.reconciliation_result import ReconciliationResult
from src.service.seating.app.dto.template_update_result import TemplateUpdateResult

__all__ = [
    'InstanceSyncFailure',
    'InstanceSyncSummary',
    'PropagationResult',
    'ReconciliationResult',
    'TemplateUpdateResult',
]
