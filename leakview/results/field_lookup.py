from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from leakview.normalization.labels import normalize_key
from leakview.normalization.types import ResultField, ResultRecord, ResultValue


SOURCE_FIELD_KEYS = ("source", "breach", "leak name", "leak")
DATASET_FIELD_KEYS = ("database", "db", "table", "collection")


def normalize_field_key(key: str) -> str:
    return normalize_key(key)


def scalar_text(value) -> str:
    """Text of a str/int/float the way JSON prints it (1.0 -> "1")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def extract_first_text(value: ResultValue) -> Optional[str]:
    """
    Return the first non-empty text found in a value, depth first.

    Booleans read as "Yes" / "No".
    """
    stack = [value]
    while stack:
        item = stack.pop()
        if isinstance(item, bool):
            return "Yes" if item else "No"
        if isinstance(item, (str, int, float)):
            text = scalar_text(item).strip()
            if text:
                return text
        elif isinstance(item, (list, tuple)):
            stack.extend(reversed(item))
        elif isinstance(item, dict):
            stack.extend(reversed(list(item.values())))
    return None


def find_field_value(fields: Iterable[ResultField], candidates: Sequence[str]) -> Optional[str]:
    """First text of the first field whose normalized key is one of `candidates`."""
    wanted = {candidate.lower() for candidate in candidates}
    for result_field in fields:
        if normalize_field_key(result_field.key) in wanted:
            text = extract_first_text(result_field.value)
            if text:
                return text
    return None


def collect_distinct_field_values(
    records: Iterable[ResultRecord],
    candidates: Sequence[str]
) -> List[str]:
    """Distinct per-record values for `candidates`, sorted."""
    unique = set()
    for record in records:
        text = find_field_value(record.fields, candidates)
        if text:
            unique.add(text)
    return sorted(unique)


@dataclass(frozen=True)
class RecordSummary:
    """What a card header shows for one record."""

    order: int  # 1-based position in the list
    total: int
    display_title: str
    subtitle: Optional[str]
    source: Optional[str]
    dataset: Optional[str]
    field_count: int


def summarize_record(record: ResultRecord, order: int, total: Optional[int] = None) -> RecordSummary:
    """
    Build the header summary of a record card.

    Args:
        record: Record to summarize
        order: 1-based position of the record
        total: Total number of records shown (defaults to `order`)

    Returns:
        RecordSummary; the title falls back to "Record <order>" and the
        subtitle is the context label only when it differs from the title.
    """
    title = (record.title or "").strip()
    subtitle = None
    if record.context_label and record.context_label != record.title:
        subtitle = record.context_label

    return RecordSummary(
        order=order,
        total=total if total is not None else order,
        display_title=title or f"Record {order}",
        subtitle=subtitle,
        source=find_field_value(record.fields, SOURCE_FIELD_KEYS),
        dataset=find_field_value(record.fields, DATASET_FIELD_KEYS),
        field_count=record.field_count,
    )
