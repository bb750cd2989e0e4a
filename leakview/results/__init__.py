# ==============================================
# RESULTS
# ==============================================
#
# Read-side helpers over NormalizedSearchResults: field lookups
# used by card headers, and the plain-text export.
#
# Modules:
# --------
# - field_lookup.py → find / summarize values inside records
# - text_export.py  → render results as a downloadable text file
#
# ==============================================

from .field_lookup import (
    DATASET_FIELD_KEYS,
    SOURCE_FIELD_KEYS,
    RecordSummary,
    collect_distinct_field_values,
    extract_first_text,
    find_field_value,
    normalize_field_key,
    summarize_record,
)
from .text_export import DEFAULT_FOOTER, export_filename, format_results_text, stringify_value

__all__ = [
    "DATASET_FIELD_KEYS",
    "SOURCE_FIELD_KEYS",
    "RecordSummary",
    "collect_distinct_field_values",
    "extract_first_text",
    "find_field_value",
    "normalize_field_key",
    "summarize_record",
    "DEFAULT_FOOTER",
    "export_filename",
    "format_results_text",
    "stringify_value",
]
