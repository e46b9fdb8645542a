"""
DOM Mutation Sampler.

On every mutation batch, records the document's current element count and
the batch size. Reading the element count walks the whole document, so the
cost per batch grows with document size.
"""

from __future__ import annotations

from typing import Optional

from perf_telemetry.domain.records import DomSample, MutationBatch
from perf_telemetry.interfaces.probes import DocumentProbe
from perf_telemetry.interfaces.scheduling import Clock
from perf_telemetry.interfaces.sources import NotificationSource, Unsubscribe
from perf_telemetry.samplers.base import RecordSink, Sampler


class DomMutationSampler(Sampler):
    """Records DOM churn per mutation batch."""

    name = "dom"

    def __init__(
        self,
        sink: RecordSink,
        clock: Clock,
        source: NotificationSource[MutationBatch],
        document: DocumentProbe,
    ) -> None:
        super().__init__(sink, clock)
        self._source = source
        self._document = document
        self._unsubscribe: Optional[Unsubscribe] = None

    @property
    def available(self) -> bool:
        return self._source.available and self._document.available

    def _activate(self) -> None:
        self._unsubscribe = self._source.subscribe(self.handle_batch)

    def _deactivate(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def handle_batch(self, batch: MutationBatch) -> bool:
        return self.emit(
            DomSample(
                node_count=self._document.element_count(),
                mutation_count=batch.mutation_count,
                timestamp=self._clock.now_ms(),
            )
        )
