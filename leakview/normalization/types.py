# ==============================================
# Types (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of normalization.
#   These are what renderers, the text export and the handoff
#   store consume.
#
# WHY THIS FILE EXISTS:
#   Separating data classes from logic keeps the builder clean.
#   The same classes are serialized by the handoff store and
#   printed by the CLI, so (de)serialization lives here too.
#
# TYPES:
# ------
# - ResultValue
#     None | str | int | float | bool | list[ResultValue]
#     | dict[str, ResultValue]
#
# CLASSES:
# --------
# - ResultField     → one labeled value of a record
# - ResultRecord    → one card: id, optional title / context label, fields
# - NormalizedSearchResults → all records plus counts
#
#   Every class is frozen and offers:
#     - to_dict() -> dict              → camelCase JSON form
#     - from_dict(data: dict) (classmethod) → inverse of to_dict()
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


ResultValue = Union[None, str, int, float, bool, List[Any], Dict[str, Any]]


@dataclass(frozen=True)
class ResultField:
    """A single labeled field of a record."""

    key: str  # Original source key, untouched
    label: str  # Display label derived from the key
    value: ResultValue

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResultField":
        return cls(
            key=data["key"],
            label=data.get("label", ""),
            value=data.get("value"),
        )


@dataclass(frozen=True)
class ResultRecord:
    """
    One renderable card.

    `context_label` names the nested array the record came from
    (e.g., "Accounts") and is None whenever it would repeat `title`.
    """

    id: str  # "record-<N>"
    fields: List[ResultField] = field(default_factory=list)
    title: Optional[str] = None
    context_label: Optional[str] = None

    @property
    def field_count(self) -> int:
        return len(self.fields)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the record to the camelCase JSON form.

        Returns:
            A JSON-serializable dictionary; absent title / context
            label are omitted rather than written as null.
        """
        data: Dict[str, Any] = {"id": self.id}
        if self.title is not None:
            data["title"] = self.title
        if self.context_label is not None:
            data["contextLabel"] = self.context_label
        data["fields"] = [f.to_dict() for f in self.fields]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResultRecord":
        return cls(
            id=data["id"],
            fields=[ResultField.from_dict(f) for f in data.get("fields", [])],
            title=data.get("title"),
            context_label=data.get("contextLabel"),
        )


@dataclass(frozen=True)
class NormalizedSearchResults:
    """Final output of the normalization pipeline."""

    records: List[ResultRecord] = field(default_factory=list)
    record_count: int = 0
    field_count: int = 0
    has_meaningful_data: bool = False

    @classmethod
    def from_records(cls, records: List[ResultRecord]) -> "NormalizedSearchResults":
        """Derive the counts from an already-filtered record list."""
        return cls(
            records=list(records),
            record_count=len(records),
            field_count=sum(record.field_count for record in records),
            has_meaningful_data=len(records) > 0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records": [record.to_dict() for record in self.records],
            "recordCount": self.record_count,
            "fieldCount": self.field_count,
            "hasMeaningfulData": self.has_meaningful_data,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NormalizedSearchResults":
        """
        Reconstruct results from stored JSON.

        Counts missing from the stored form are derived from the records.
        """
        records = [ResultRecord.from_dict(r) for r in data.get("records", [])]
        derived = cls.from_records(records)
        return cls(
            records=records,
            record_count=data.get("recordCount", derived.record_count),
            field_count=data.get("fieldCount", derived.field_count),
            has_meaningful_data=data.get("hasMeaningfulData", derived.has_meaningful_data),
        )
