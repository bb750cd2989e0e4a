# ==============================================
# NORMALIZATION
# ==============================================
#
# This package turns the raw, untrusted JSON body returned by
# the breach-lookup API into renderable records. It is pure:
# no I/O, no global state.
#
# Modules:
# --------
# - labels.py           → Key normalization and display labels
# - value_normalizer.py → Sanitize one value (noise keys, cycles, pruning)
# - record_builder.py   → Split a payload into titled records
# - types.py            → ResultField / ResultRecord / NormalizedSearchResults
#
# ==============================================

from .labels import format_label, normalize_key
from .types import NormalizedSearchResults, ResultField, ResultRecord, ResultValue
from .value_normalizer import (
    CIRCULAR_REFERENCE,
    HIDDEN_KEYS,
    has_meaningful_value,
    normalize_value,
    normalize_with_meaning,
    should_skip_key,
)
from .record_builder import (
    RecordBuilder,
    RecordIdSequence,
    Shape,
    classify_shape,
    normalize_search_results,
)

__all__ = [
    "format_label",
    "normalize_key",
    "NormalizedSearchResults",
    "ResultField",
    "ResultRecord",
    "ResultValue",
    "CIRCULAR_REFERENCE",
    "HIDDEN_KEYS",
    "has_meaningful_value",
    "normalize_value",
    "normalize_with_meaning",
    "should_skip_key",
    "RecordBuilder",
    "RecordIdSequence",
    "Shape",
    "classify_shape",
    "normalize_search_results",
]
