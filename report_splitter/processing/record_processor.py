"""
Sequential record processor - runs a report filter over a stream of records.

This is the host-pipeline side of a filter: it decides what happens to the
original record for every FilterStatus and keeps running statistics.
"""

import logging
import time
from typing import Any, Iterable, Iterator, Mapping

from ..interfaces import RecordProcessorInterface, ReportFilterInterface
from ..models import FilterStatus, ProcessingResult


class RecordProcessor(RecordProcessorInterface):
    """
    Single-threaded processor for record streams.

    Output per input record:
    - SPLIT: the derived records, the original is dropped
    - PARSE_FAILURE: the tagged original
    - SKIPPED / NO_MATCH: the original, unchanged
    """

    def __init__(self, report_filter: ReportFilterInterface):
        self.logger = logging.getLogger(__name__)
        self.report_filter = report_filter
        self.result = ProcessingResult()

    def process(self, records: Iterable[Mapping[str, Any]]) -> Iterator[dict]:
        """
        Run the filter over every record.

        Args:
            records: Input records in pipeline order

        Yields:
            Output records as plain dictionaries
        """
        start_time = time.time()
        try:
            for sequence, record in enumerate(records, 1):
                self.result.records_processed += 1
                outcome = self.report_filter.filter(record)

                if outcome.status is FilterStatus.SPLIT:
                    self.result.records_split += 1
                    emitted = [derived.to_dict() for derived in outcome.records]
                elif outcome.status is FilterStatus.PARSE_FAILURE:
                    self.result.records_failed += 1
                    self.result.errors.append(f"Record {sequence}: XML parse failure")
                    emitted = [derived.to_dict() for derived in outcome.records]
                else:
                    self.result.records_skipped += 1
                    emitted = [dict(record)]

                self.result.records_emitted += len(emitted)
                yield from emitted
        finally:
            self.result.processing_time_seconds += time.time() - start_time
            self.logger.info(
                f"Processed {self.result.records_processed} record(s): "
                f"{self.result.records_split} split, {self.result.records_skipped} skipped, "
                f"{self.result.records_failed} failed, {self.result.records_emitted} emitted"
            )

    def get_result(self) -> ProcessingResult:
        return self.result
