from prometheus_client import Counter, Histogram


class SeatingMetrics:
    """
    Seating Layout Core Metrics Collector

    Tracks reconciliation passes (per layout kind and trigger), unit churn,
    and per-instance propagation outcomes.
    """

    def __init__(self) -> None:
        # ========== Reconciliation ==========
        self.reconciliations = Counter(
            'seating_reconciliations_total',
            'Reconciliation passes',
            ['layout_kind', 'trigger', 'result'],  # trigger: edit/propagation/regenerate
        )

        self.reconciliation_duration = Histogram(
            'seating_reconciliation_duration_seconds',
            'Reconciliation pass duration (plan + apply)',
            ['layout_kind', 'trigger'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
        )

        self.units_changed = Counter(
            'seating_units_changed_total',
            'Positioned units touched by reconciliation',
            ['operation'],  # created/updated/deactivated
        )

        # ========== Propagation ==========
        self.propagated_instances = Counter(
            'seating_propagated_instances_total',
            'Instances processed by template propagation',
            ['result'],  # synced/skipped_customized/failed
        )

    # ========== Helper Methods ==========

    def record_reconciliation(
        self,
        *,
        layout_kind: str,
        trigger: str,
        result: str,
        duration: float,
        created: int = 0,
        updated: int = 0,
        deactivated: int = 0,
    ) -> None:
        self.reconciliations.labels(layout_kind=layout_kind, trigger=trigger, result=result).inc()
        self.reconciliation_duration.labels(layout_kind=layout_kind, trigger=trigger).observe(
            duration
        )
        self.units_changed.labels(operation='created').inc(created)
        self.units_changed.labels(operation='updated').inc(updated)
        self.units_changed.labels(operation='deactivated').inc(deactivated)

    def record_propagation(self, *, synced: int, skipped: int, failed: int) -> None:
        self.propagated_instances.labels(result='synced').inc(synced)
        self.propagated_instances.labels(result='skipped_customized').inc(skipped)
        self.propagated_instances.labels(result='failed').inc(failed)


# Global metrics instance
metrics = SeatingMetrics()
