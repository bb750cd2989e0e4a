# ==============================================
# Text Export
# ==============================================
#
# PURPOSE:
#   Render NormalizedSearchResults as the plain-text file a user
#   downloads from the results page.
#
# OUTPUT LAYOUT:
# --------------
#   <site> for "<query>"
#
#   Results (<n>)              ← or "No results found."
#
#   1. <title>
#   Context: <context label>   ← only when it differs from the title
#   - <label>: <value>
#   ...
#
#   <footer lines>
#
# ==============================================

import re
from typing import Sequence

from leakview.normalization.types import NormalizedSearchResults, ResultValue
from .field_lookup import scalar_text


DEFAULT_FOOTER = (
    "Need help with anything? Contact our support team.",
    "",
    "Thank you for using our service!",
)

_SLUG_INVALID = re.compile(r'[^a-z0-9]+')


def _scalar_string(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return scalar_text(value)
    return str(value)


class _Joined:
    """Parts collected so far for one list or mapping."""

    def __init__(self, value):
        self.is_mapping = isinstance(value, dict)
        self.items = iter(value.items()) if self.is_mapping else ((None, v) for v in value)
        self.parts = []
        self.key = None

    def add(self, key, text: str) -> None:
        if text:
            self.parts.append(f"{key}: {text}" if self.is_mapping else text)


def stringify_value(value: ResultValue) -> str:
    """
    Flatten a value onto one line.

    Lists join with ", ", mappings as "key: value" pairs; empty parts
    are left out. Nesting depth is not limited by the recursion limit.
    """
    if not isinstance(value, (list, tuple, dict)):
        return _scalar_string(value)

    stack = [_Joined(value)]
    while True:
        frame = stack[-1]
        for key, item in frame.items:
            if isinstance(item, (list, tuple, dict)):
                frame.key = key
                stack.append(_Joined(item))
                break
            frame.add(key, _scalar_string(item))
        else:
            stack.pop()
            text = ", ".join(frame.parts)
            if not stack:
                return text
            stack[-1].add(stack[-1].key, text)


def format_results_text(
    site: str,
    query: str,
    normalized: NormalizedSearchResults,
    footer: Sequence[str] = DEFAULT_FOOTER
) -> str:
    lines = [f'{site} for "{query}"', ""]

    if not normalized.records:
        lines.append("No results found.")
    else:
        lines.append(f"Results ({len(normalized.records)})")
        for index, record in enumerate(normalized.records, start=1):
            title = (record.title or "").strip() or f"Record {index}"
            lines.append("")
            lines.append(f"{index}. {title}")
            if record.context_label and record.context_label != title:
                lines.append(f"Context: {record.context_label}")
            for result_field in record.fields:
                text = stringify_value(result_field.value).strip()
                if text:
                    lines.append(f"- {result_field.label}: {text}")

    if footer:
        lines.append("")
        lines.extend(footer)
    return "\n".join(lines)


def export_filename(query: str, prefix: str = "leakview-results") -> str:
    """File name for a downloaded export, e.g. "leakview-results-john-doe.txt"."""
    slug = _SLUG_INVALID.sub("-", (query.strip() or "query").lower()).strip("-")
    return f"{prefix}-{slug or 'query'}.txt"
