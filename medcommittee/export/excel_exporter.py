from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE, Cell
from openpyxl.styles import PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from medcommittee.aggregation.models import AggregatedExport
from medcommittee.logging.logger import Log

SUMMARY_SHEET = "סיכום כללי"
CONSOLIDATED_SHEET = "טבלה מאוחדת"
FILE_PREFIX = "ועדות_רפואיות"

_MAX_COLUMN_WIDTH = 40
_MIN_COLUMN_WIDTH = 8


class ExcelExporter:
    """Writes an AggregatedExport to a right-to-left .xlsx workbook."""

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir

    def export(self, aggregated: AggregatedExport, now: datetime | None = None) -> Path:
        """Write the workbook and return its path.

        Raises:
            OSError: if the output directory cannot be created or written.
        """
        workbook = self.build_workbook(aggregated)
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / self.file_name(now or datetime.now())
        workbook.save(path)
        Log.info(f"Exported {len(aggregated.records)} documents to {path}")
        return path

    @staticmethod
    def file_name(now: datetime) -> str:
        return f"{FILE_PREFIX}_{now:%Y-%m-%d_%H%M%S}.xlsx"

    def build_workbook(self, aggregated: AggregatedExport) -> Workbook:
        workbook = Workbook()
        summary = workbook.active
        summary.title = SUMMARY_SHEET
        _append(summary, aggregated.summary_columns)
        for row in aggregated.summary_rows:
            _append(
                summary,
                [
                    row.number,
                    row.file_name,
                    *row.values.values(),
                    row.status,
                    row.error_message,
                ]
            )
        self._finish_sheet(summary)

        consolidated = workbook.create_sheet(CONSOLIDATED_SHEET)
        _append(consolidated, aggregated.consolidated_columns)
        for row in aggregated.consolidated_rows:
            cells = _append(consolidated, [row.number, row.file_name, *row.values.values()])
            fill = PatternFill(start_color=row.color, end_color=row.color, fill_type="solid")
            for cell in cells:
                cell.fill = fill
        self._finish_sheet(consolidated)

        for sheet in aggregated.document_sheets:
            detail = workbook.create_sheet(sheet.title)
            _append(detail, ["שדה", "ערך"])
            for name, value in sheet.fields:
                _append(detail, [name, value])
            if sheet.decisions:
                detail.append([])
                _append(detail, aggregated.decision_columns)
                for decision in sheet.decisions:
                    _append(detail, decision)
            self._finish_sheet(detail)

        return workbook

    @staticmethod
    def _finish_sheet(sheet: Worksheet) -> None:
        sheet.sheet_view.rightToLeft = True
        for index, column in enumerate(sheet.iter_cols(values_only=True), start=1):
            longest = max((len(str(value)) for value in column if value is not None), default=0)
            width = min(_MAX_COLUMN_WIDTH, max(_MIN_COLUMN_WIDTH, longest + 2))
            sheet.column_dimensions[get_column_letter(index)].width = width


def _append(sheet: Worksheet, values: Iterable[object]) -> tuple[Cell, ...]:
    """Append one row of model-derived values as inert cells.

    Characters the xlsx format cannot store are dropped, and text that
    openpyxl would read as a formula is kept as a plain string.
    """
    sheet.append([_clean(value) for value in values])
    cells = sheet[sheet.max_row]
    for cell in cells:
        if cell.data_type == "f":
            cell.data_type = "s"
    return cells


def _clean(value: object) -> object:
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value
