"""Propagation result DTOs."""

from typing import List

import attrs


@attrs.define(frozen=True)
class InstanceSyncSummary:
    instance_id: int
    created: int
    updated: int
    deleted: int  # units deactivated in the instance


@attrs.define(frozen=True)
class InstanceSyncFailure:
    instance_id: int
    error: str


@attrs.define(frozen=True)
class PropagationResult:
    """
    Per-instance outcome of pushing a template onto its instances.

    Customized instances appear in neither list. Each instance was synced in
    its own transaction, so a failure leaves the others' summaries intact.
    """

    template_id: int
    summaries: List[InstanceSyncSummary] = attrs.field(factory=list)
    failures: List[InstanceSyncFailure] = attrs.field(factory=list)
    skipped_customized: int = 0
