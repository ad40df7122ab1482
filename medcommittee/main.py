import argparse
from pathlib import Path

from medcommittee.aggregation.aggregator import ResultAggregator
from medcommittee.config.settings import Settings
from medcommittee.documents.file_loader import FileLoader
from medcommittee.documents.models import StructuredRecord
from medcommittee.exceptions import PipelineError
from medcommittee.export.excel_exporter import ExcelExporter
from medcommittee.logging.logger import Log
from medcommittee.processor.batch import BatchProcessor
from medcommittee.processor.processor import build_processor


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="medcommittee",
        description="Extract structured fields from Hebrew medical-committee documents.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="PDF or image files to process")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the exported workbook (defaults to EXPORT_DIR)",
    )
    return parser.parse_args(argv)


def _report(record: StructuredRecord) -> None:
    Log.info(f"Status of {record.file_name}: {record.processing_status.value}")


def main(argv: list[str] | None = None) -> int:
    """Entry point: load files -> process batch -> export workbook.

    Returns 0 when at least one document completed, 1 otherwise.
    """
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        documents = FileLoader().load_many(args.files)
    except (OSError, PipelineError) as exc:
        Log.error(f"Cannot load input files: {exc}")
        return 1
    processor = build_processor(settings, listener=_report)
    try:
        result = BatchProcessor(processor, settings.max_concurrent_documents).process(documents)
    finally:
        processor.close()

    for record in result.records:
        suffix = f" ({record.error_message})" if record.error_message else ""
        print(f"{record.file_name}: {record.processing_status.value}{suffix}")
    print(f"{result.completed_count} completed, {result.error_count} errors")

    aggregated = ResultAggregator().aggregate(result.records)
    path = ExcelExporter(args.output_dir or settings.export_dir).export(aggregated)
    print(f"Workbook written to {path}")
    return 0 if result.completed_count > 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
