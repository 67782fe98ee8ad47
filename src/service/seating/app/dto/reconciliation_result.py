"""Reconciliation result DTO."""

import attrs


@attrs.define(frozen=True)
class ReconciliationResult:
    """
    Outcome of one reconciliation pass.

    `updated` counts only matched units whose content actually changed, so
    re-applying the same target reports zero updates.
    """

    created: int
    updated: int
    deactivated: int
    total_active_seats: int
