"""
Request-scoped merge telemetry helpers.

Telemetry is enabled by attaching a MergeCollector via contextvars.
Engines read the active stage label and emit one MergeStageRecord per stage.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar

from kspacing.types.results import MergeReport, MergeStageRecord, StageMergeBreakdown

_COLLECTOR: ContextVar[MergeCollector | None] = ContextVar(
    "kspacing_merge_collector",
    default=None,
)
_STAGE: ContextVar[str] = ContextVar("kspacing_merge_stage", default="unknown")


class MergeCollector:
    """Accumulates merge records for one request."""

    def __init__(self) -> None:
        self._records: list[MergeStageRecord] = []

    def add(self, record: MergeStageRecord) -> None:
        """Add one stage record."""
        self._records.append(record)

    @property
    def records(self) -> list[MergeStageRecord]:
        return list(self._records)

    def summary(self) -> MergeReport:
        """Build aggregate report across all records."""
        by_stage: dict[str, StageMergeBreakdown] = {}
        total_candidates = 0
        total_merges = 0
        total_latency = 0

        for record in self._records:
            total_candidates += record.candidates
            total_merges += record.merges
            total_latency += record.latency_ms

            stage = by_stage.setdefault(record.stage, StageMergeBreakdown(stage=record.stage))
            stage.runs += 1
            stage.candidates += record.candidates
            stage.merges += record.merges
            stage.total_latency_ms += record.latency_ms

        return MergeReport(
            total_stages=len(self._records),
            total_candidates=total_candidates,
            total_merges=total_merges,
            total_latency_ms=total_latency,
            final_clusters=self._records[-1].clusters_after if self._records else None,
            by_stage=list(by_stage.values()),
        )


@contextmanager
def telemetry_collector(collector: MergeCollector | None):
    """Set active request collector for engine instrumentation."""
    token = _COLLECTOR.set(collector)
    try:
        yield
    finally:
        _COLLECTOR.reset(token)


@contextmanager
def telemetry_stage(stage: str):
    """Set stage label for engine instrumentation."""
    token = _STAGE.set(stage)
    try:
        yield
    finally:
        _STAGE.reset(token)


def current_stage() -> str:
    """Return currently active telemetry stage label."""
    return _STAGE.get()


def record_merges(record: MergeStageRecord) -> None:
    """Add record to active collector if telemetry is enabled."""
    collector = _COLLECTOR.get()
    if collector is not None:
        collector.add(record)
