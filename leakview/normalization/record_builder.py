# ==============================================
# RecordBuilder
# ==============================================
#
# PURPOSE:
#   Split an arbitrarily shaped search payload into an ordered
#   list of ResultRecords (one card each) with a derived title.
#
# HOW A PAYLOAD IS SPLIT:
#
#   classify_shape(value)
#     │
#     ├── OBJECT_ARRAY  [{...}, {...}]  → one record per element
#     ├── MIXED_ARRAY   ["a", 1, {...}] → one record, one list field
#     ├── PLAIN_OBJECT  {...}           → one record from the non-list
#     │                                   keys, then recurse into every
#     │                                   list value with its key as
#     │                                   context label
#     └── SCALAR        "x" / 5 / None  → one record, one field
#
# TITLE:
#   First key of the object (in the object's own key order) whose
#   normalized form is a TITLE_KEY_CANDIDATES entry and whose value
#   is a non-blank string. Falls back to the context label.
#
# RECORD IDS:
#   "record-<N>" from a RecordIdSequence. normalize_search_results()
#   starts a new sequence per call unless one is passed in.
#
# ==============================================

import threading
from enum import Enum
from typing import Any, Dict, List, Optional

from .labels import format_label, normalize_key
from .types import NormalizedSearchResults, ResultField, ResultRecord
from .value_normalizer import has_meaningful_value, normalize_with_meaning, should_skip_key


DEFAULT_VALUE_LABEL = "Value"
DEFAULT_VALUES_LABEL = "Values"

TITLE_KEY_CANDIDATES = (
    "title",
    "name",
    "full name",
    "full_name",
    "email",
    "username",
    "user name",
    "domain",
    "ip",
    "ip address",
    "ip_address",
    "address",
    "id",
    "record id",
    "leak name",
    "breach",
    "source",
)

_TITLE_KEYS = frozenset(normalize_key(k) for k in TITLE_KEY_CANDIDATES)


class Shape(Enum):
    """
    Payload shapes the builder dispatches on.

    - OBJECT_ARRAY: list whose elements are all dicts (including [])
    - MIXED_ARRAY: any other list
    - PLAIN_OBJECT: dict
    - SCALAR: everything else
    """
    OBJECT_ARRAY = "object_array"
    MIXED_ARRAY = "mixed_array"
    PLAIN_OBJECT = "plain_object"
    SCALAR = "scalar"


def classify_shape(value: Any) -> Shape:
    if isinstance(value, (list, tuple)):
        if all(isinstance(item, dict) for item in value):
            return Shape.OBJECT_ARRAY
        return Shape.MIXED_ARRAY
    if isinstance(value, dict):
        return Shape.PLAIN_OBJECT
    return Shape.SCALAR


class RecordIdSequence:
    """Thread-safe "record-<N>" generator."""

    def __init__(self, start: int = 0):
        self._counter = start
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            self._counter += 1
            return f"record-{self._counter}"

    @property
    def last_value(self) -> int:
        return self._counter


def derive_title(obj: Dict[Any, Any]) -> Optional[str]:
    """Return the stripped value of the first title-like key, in the object's key order."""
    for key, value in obj.items():
        if not isinstance(value, str):
            continue
        if normalize_key(key) in _TITLE_KEYS and value.strip():
            return value.strip()
    return None


class RecordBuilder:
    """
    Accumulates records while walking one payload.

    A builder is meant for a single payload: call build() once.
    """

    def __init__(self, id_sequence: Optional[RecordIdSequence] = None):
        self._ids = id_sequence or RecordIdSequence()
        self._records: List[ResultRecord] = []

    def build(self, data: Any) -> NormalizedSearchResults:
        """
        Walk the payload and assemble the final results.

        Records whose fields are all unmeaningful are dropped before
        the counts are taken.
        """
        self.process(data)
        cleaned = [
            record for record in self._records
            if any(has_meaningful_value(f.value) for f in record.fields)
        ]
        return NormalizedSearchResults.from_records(cleaned)

    def process(self, value: Any, context_label: Optional[str] = None) -> None:
        shape = classify_shape(value)

        if shape is Shape.OBJECT_ARRAY:
            for item in value:
                self._append(self.object_to_record(item, context_label))
            return

        if shape is Shape.MIXED_ARRAY:
            self._append_values(value, context_label)
            return

        if shape is Shape.PLAIN_OBJECT:
            base_fields: Dict[Any, Any] = {}
            nested_arrays = []
            for key, item in value.items():
                if should_skip_key(key):
                    continue
                if isinstance(item, (list, tuple)):
                    nested_arrays.append((key, item))
                else:
                    base_fields[key] = item

            self._append(self.object_to_record(base_fields, context_label))

            for key, items in nested_arrays:
                self.process(items, format_label(key))
            return

        normalized, meaningful = normalize_with_meaning(value, set())
        if not meaningful:
            return
        self._append(self._single_field_record(
            normalized, context_label, context_label or DEFAULT_VALUE_LABEL
        ))

    def object_to_record(
        self,
        obj: Dict[Any, Any],
        context_label: Optional[str] = None
    ) -> Optional[ResultRecord]:
        """
        Build one record from the keys of a dict.

        Each key is normalized with its own visited set, so a cycle
        in one field cannot affect another.

        Returns:
            The record, or None when no field survives.
        """
        fields = []
        for key, raw_value in obj.items():
            if should_skip_key(key):
                continue
            normalized, meaningful = normalize_with_meaning(raw_value, set())
            if not meaningful:
                continue
            fields.append(ResultField(key=key, label=format_label(key), value=normalized))

        if not fields:
            return None

        title = derive_title(obj) or context_label
        return self._make_record(fields, title, context_label)

    def _append_values(self, items: List[Any], context_label: Optional[str]) -> None:
        pairs = [normalize_with_meaning(item, set()) for item in items]
        values = [item for item, meaningful in pairs if meaningful]
        if not values:
            return
        self._append(self._single_field_record(
            values, context_label, context_label or DEFAULT_VALUES_LABEL
        ))

    def _single_field_record(
        self,
        value: Any,
        context_label: Optional[str],
        label: str
    ) -> ResultRecord:
        result_field = ResultField(key=label.lower(), label=format_label(label), value=value)
        return self._make_record([result_field], context_label, context_label)

    def _make_record(
        self,
        fields: List[ResultField],
        title: Optional[str],
        context_label: Optional[str]
    ) -> ResultRecord:
        return ResultRecord(
            id=self._ids.next_id(),
            fields=fields,
            title=title,
            context_label=context_label if context_label and context_label != title else None,
        )

    def _append(self, record: Optional[ResultRecord]) -> None:
        if record is not None:
            self._records.append(record)


def normalize_search_results(
    data: Any,
    id_sequence: Optional[RecordIdSequence] = None
) -> NormalizedSearchResults:
    """
    Normalize a raw breach-API payload into renderable records.

    Args:
        data: Parsed JSON body (any shape)
        id_sequence: Sequence to draw record ids from. A new one,
            starting at "record-1", is used when omitted.

    Returns:
        NormalizedSearchResults with only records that carry at least
        one meaningful field.
    """
    return RecordBuilder(id_sequence).build(data)
