from medcommittee.aggregation.models import (
    PLACEHOLDER,
    AggregatedExport,
    ConsolidatedRow,
    DocumentSheet,
    SummaryRow,
)
from medcommittee.documents.models import ProcessingStatus, StructuredRecord
from medcommittee.llm.schema import COMMITTEE_SCHEMA, ExtractionSchema

# Pale fills, one per document, cycling by position.
PALETTE: tuple[str, ...] = (
    "DBEAFE",
    "DCFCE7",
    "FEF9C3",
    "FCE7F3",
    "E0E7FF",
    "FFEDD5",
    "CCFBF1",
    "F3E8FF",
)

STATUS_LABELS: dict[ProcessingStatus, str] = {
    ProcessingStatus.COMPLETED: "✓ הושלם",
    ProcessingStatus.ERROR: "✗ שגיאה",
    ProcessingStatus.PROCESSING: "⏳ בעיבוד",
    ProcessingStatus.PENDING: "⏳ ממתין",
}

NUMBER_COLUMN = 'מס"ד'
FILE_COLUMN = "שם קובץ"
STATUS_COLUMN = "סטטוס"
ERROR_COLUMN = "שגיאה"
DOCUMENT_COLUMNS = ("סוג ועדה", "שם המבוטח", "ת.ז:", "תאריך ועדה")


def group_color(index: int) -> str:
    return PALETTE[index % len(PALETTE)]


class ResultAggregator:
    """Projects per-document records onto the summary, consolidated and detail views.

    Output depends only on the records and their order.
    """

    def __init__(self, schema: ExtractionSchema = COMMITTEE_SCHEMA) -> None:
        self._schema = schema
        self._summary_fields = [
            name for name in schema.keys() if name != schema.decisions_field
        ]

    def aggregate(self, records: list[StructuredRecord]) -> AggregatedExport:
        summary_rows = []
        consolidated_rows = []
        document_sheets = []
        for index, record in enumerate(records):
            number = index + 1
            summary_rows.append(self._summary_row(number, record))
            consolidated_rows.extend(self._consolidated_rows(index, record))
            if record.processing_status is ProcessingStatus.COMPLETED:
                document_sheets.append(self._document_sheet(number, record))

        return AggregatedExport(
            records=list(records),
            summary_columns=[
                NUMBER_COLUMN,
                FILE_COLUMN,
                *self._summary_fields,
                STATUS_COLUMN,
                ERROR_COLUMN,
            ],
            summary_rows=summary_rows,
            consolidated_columns=[
                NUMBER_COLUMN,
                FILE_COLUMN,
                *DOCUMENT_COLUMNS,
                *self._schema.decision_fields,
            ],
            consolidated_rows=consolidated_rows,
            decision_columns=[NUMBER_COLUMN, *self._schema.decision_fields],
            document_sheets=document_sheets,
        )

    def _summary_row(self, number: int, record: StructuredRecord) -> SummaryRow:
        return SummaryRow(
            number=number,
            file_name=record.file_name,
            values={name: record.get(name) or PLACEHOLDER for name in self._summary_fields},
            status=STATUS_LABELS[record.processing_status],
            error_message=record.error_message or "",
        )

    def _consolidated_rows(self, index: int, record: StructuredRecord) -> list[ConsolidatedRow]:
        number = index + 1
        color = group_color(index)
        document_values = {name: record.get(name) or PLACEHOLDER for name in DOCUMENT_COLUMNS}

        decisions = record.decisions or [{}]
        rows = []
        for sub_index, decision in enumerate(decisions, start=1):
            values = dict(document_values)
            for name in self._schema.decision_fields:
                values[name] = decision.get(name) or PLACEHOLDER
            rows.append(
                ConsolidatedRow(
                    number=str(number) if len(decisions) == 1 else f"{number}.{sub_index}",
                    group=number,
                    color=color,
                    file_name=record.file_name,
                    values=values,
                )
            )
        return rows

    def _document_sheet(self, number: int, record: StructuredRecord) -> DocumentSheet:
        fields = [(FILE_COLUMN, record.file_name)]
        fields.extend((name, record.get(name) or PLACEHOLDER) for name in self._summary_fields)
        decisions = [
            [str(row_number), *(row.get(name) or PLACEHOLDER for name in self._schema.decision_fields)]
            for row_number, row in enumerate(record.decisions, start=1)
        ]
        return DocumentSheet(
            number=number,
            title=f"מסמך {number} - פרטים",
            fields=fields,
            decisions=decisions,
        )
