from dataclasses import dataclass, field

from medcommittee.documents.models import StructuredRecord

PLACEHOLDER = "-"


@dataclass(frozen=True)
class SummaryRow:
    """One row per document on the summary sheet."""

    number: int
    file_name: str
    values: dict[str, str]
    status: str
    error_message: str = ""


@dataclass(frozen=True)
class ConsolidatedRow:
    """One row per decision; documents without decisions get a single placeholder row."""

    number: str
    group: int
    color: str
    file_name: str
    values: dict[str, str]


@dataclass(frozen=True)
class DocumentSheet:
    number: int
    title: str
    fields: list[tuple[str, str]]
    decisions: list[list[str]] = field(default_factory=list)


@dataclass
class AggregatedExport:
    """Everything an export collaborator needs, with no further transformation."""

    records: list[StructuredRecord]
    summary_columns: list[str]
    summary_rows: list[SummaryRow]
    consolidated_columns: list[str]
    consolidated_rows: list[ConsolidatedRow]
    decision_columns: list[str]
    document_sheets: list[DocumentSheet]
