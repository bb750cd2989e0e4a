# ==============================================
# Value Normalizer
# ==============================================
#
# PURPOSE:
#   Sanitize one parsed JSON value into a ResultValue before it
#   becomes part of a record field.
#
# FUNCTIONS:
# ----------
#   - normalize_value(value, seen) -> ResultValue
#   - normalize_with_meaning(value, seen) -> (ResultValue, bool)
#   - has_meaningful_value(value) -> bool
#   - should_skip_key(key) -> bool
#
# RULES:
# ------
#   1. Strings              → stripped
#   2. Numbers / booleans   → unchanged
#   3. Lists                → every element normalized, none pruned
#   4. Dicts                → noise keys ("price", "search time",
#                             "num of results", ...) and blank keys
#                             skipped; children that are None or
#                             empty containers pruned
#   5. Container already on the current path → "Circular reference"
#   6. Anything else        → str(value)
#
#   The walk keeps its own stack instead of recursing, so the
#   nesting depth of the payload is not bounded by Python's
#   recursion limit. Meaningfulness is computed bottom-up in the
#   same pass; no subtree is scanned twice.
#
# ==============================================

import math
from typing import Any, FrozenSet, List, Set, Tuple

from .labels import normalize_key
from .types import ResultValue


CIRCULAR_REFERENCE = "Circular reference"

HIDDEN_KEY_VALUES = (
    "num of results",
    "num_of_results",
    "num-results",
    "numresults",
    "num results",
    "price",
    "search time",
    "search_time",
    "search-time",
)

HIDDEN_KEYS: FrozenSet[str] = frozenset(normalize_key(k) for k in HIDDEN_KEY_VALUES)

UNMEANINGFUL_STRINGS: FrozenSet[str] = frozenset({
    "",
    "n/a",
    "na",
    "none",
    "null",
    "undefined",
    "unknown",
    "no data",
    "circular reference",
})

_PENDING = object()


def should_skip_key(key: Any) -> bool:
    """True for blank keys and API bookkeeping keys (result count, price, timing)."""
    normalized = normalize_key(key)
    return not normalized or normalized in HIDDEN_KEYS


class _Frame:
    """One container being normalized: its source iterator and the partial result."""

    __slots__ = ("marker", "is_mapping", "items", "result", "meaningful", "key")

    def __init__(self, value: Any):
        self.marker = id(value)
        self.is_mapping = isinstance(value, dict)
        self.items = iter(value.items()) if self.is_mapping else enumerate(value)
        self.result = {} if self.is_mapping else []
        self.meaningful = False
        self.key = None

    def add(self, key: Any, value: ResultValue, meaningful: bool) -> None:
        if self.is_mapping:
            if value is None:
                return
            if isinstance(value, (list, dict)) and not meaningful:
                return
            self.result[key] = value
        else:
            self.result.append(value)
        self.meaningful = self.meaningful or meaningful


def _scalar(value: Any) -> Tuple[ResultValue, bool]:
    if value is None:
        return None, False
    if isinstance(value, str):
        text = value.strip()
        return text, _string_is_meaningful(text)
    if isinstance(value, (bool, int, float)):
        return value, _scalar_is_meaningful(value)
    text = str(value)
    return text, _string_is_meaningful(text)


def _enter(value: Any, seen: Set[int], stack: List[_Frame]):
    """Normalize a leaf directly, or push a frame for a container and return _PENDING."""
    if not isinstance(value, (dict, list, tuple)):
        return _scalar(value)
    if id(value) in seen:
        return CIRCULAR_REFERENCE, False
    seen.add(id(value))
    stack.append(_Frame(value))
    return _PENDING


def normalize_with_meaning(value: Any, seen: Set[int]) -> Tuple[ResultValue, bool]:
    """
    Normalize a value and report whether the result is meaningful.

    Same result as (normalize_value(v), has_meaningful_value(...)),
    in a single pass.
    """
    stack: List[_Frame] = []
    outcome = _enter(value, seen, stack)
    if outcome is not _PENDING:
        return outcome

    try:
        while True:
            frame = stack[-1]
            descended = False
            for key, item in frame.items:
                if frame.is_mapping and should_skip_key(key):
                    continue
                child = _enter(item, seen, stack)
                if child is _PENDING:
                    frame.key = key
                    descended = True
                    break
                frame.add(key, *child)
            if descended:
                continue

            stack.pop()
            seen.discard(frame.marker)
            if not stack:
                return frame.result, frame.meaningful
            parent = stack[-1]
            parent.add(parent.key, frame.result, frame.meaningful)
    finally:
        for frame in stack:
            seen.discard(frame.marker)


def normalize_value(value: Any, seen: Set[int]) -> ResultValue:
    """
    Sanitize a parsed JSON value.

    Args:
        value: Any parsed JSON value, or an object graph built in code
        seen: ids of the containers currently being descended into.
            A container is added on entry and discarded on exit, so
            only ancestor cycles hit the sentinel.

    Returns:
        The normalized value. Strings are stripped, noise keys dropped,
        empty children pruned from mappings, and a cyclic container
        becomes the string "Circular reference".
    """
    return normalize_with_meaning(value, seen)[0]


def has_meaningful_value(value: ResultValue) -> bool:
    """
    True when the value carries something worth showing.

    Containers are meaningful only through their contents; 0 and
    False are meaningful, NaN and placeholder strings ("n/a",
    "unknown", ...) are not.
    """
    stack = [value]
    visited: Set[int] = set()
    while stack:
        item = stack.pop()
        if isinstance(item, (dict, list, tuple)):
            if id(item) in visited:
                continue
            visited.add(id(item))
            stack.extend(item.values() if isinstance(item, dict) else item)
            continue
        if _scalar_is_meaningful(item):
            return True
    return False


def _scalar_is_meaningful(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return _string_is_meaningful(value)
    if isinstance(value, bool):
        return True
    if isinstance(value, float):
        return not math.isnan(value)
    return True


def _string_is_meaningful(text: str) -> bool:
    return text.strip().lower() not in UNMEANINGFUL_STRINGS
