import asyncio
from dataclasses import dataclass, field

from medcommittee.documents.models import ProcessingStatus, RawDocument, StructuredRecord
from medcommittee.logging.logger import Log
from medcommittee.processor.processor import DocumentProcessor


@dataclass
class BatchResult:
    """Per-document records in input order plus outcome counts."""

    records: list[StructuredRecord] = field(default_factory=list)

    @property
    def completed_count(self) -> int:
        return sum(1 for r in self.records if r.processing_status is ProcessingStatus.COMPLETED)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.records if r.processing_status is ProcessingStatus.ERROR)

    @property
    def total(self) -> int:
        return len(self.records)


class BatchProcessor:
    """Fans documents out to worker threads, at most ``max_concurrency`` at a time.

    Documents share no state, so one failure never affects its siblings.
    """

    def __init__(self, processor: DocumentProcessor, max_concurrency: int = 4) -> None:
        self._processor = processor
        self._max_concurrency = max(1, max_concurrency)

    def process(self, documents: list[RawDocument]) -> BatchResult:
        return asyncio.run(self.process_async(documents))

    async def process_async(self, documents: list[RawDocument]) -> BatchResult:
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def run_one(document: RawDocument) -> StructuredRecord:
            async with semaphore:
                return await asyncio.to_thread(self._process_one, document)

        Log.info(f"Processing batch of {len(documents)} documents")
        records = await asyncio.gather(*(run_one(document) for document in documents))
        result = BatchResult(records=list(records))
        Log.info(
            f"Batch finished: {result.completed_count} completed, {result.error_count} failed"
        )
        return result

    def _process_one(self, document: RawDocument) -> StructuredRecord:
        try:
            return self._processor.process(document)
        except Exception as exc:
            Log.error(f"Unexpected failure on {document.file_name}: {exc}")
            record = StructuredRecord(file_name=document.file_name)
            record.mark_processing()
            record.mark_error(str(exc))
            return record
