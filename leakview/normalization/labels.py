# ==============================================
# Labels
# ==============================================
#
# PURPOSE:
#   Turn raw payload keys into display labels, and reduce keys
#   to a comparable form so that naming variants resolve to the
#   same thing before any lookup.
#
# WHY THIS MODULE EXISTS:
#   The breach API sends the same logical field under many names:
#     - "full_name", "fullName", "Full-Name"
#     - "ip", "IP", "ipAddress", "ip_address"
#   Cards need one readable label per key, and the noise / title
#   lookups need one canonical spelling per key.
#
# FUNCTIONS:
# ----------
#   - normalize_key(key: str) -> str
#       "Search_Time " -> "search time"
#
#   - format_label(key: str) -> str
#       "ipAddress" -> "IP Address", "full_name" -> "Full Name"
#
# RULES (format_label):
# ---------------------
#   1. "_" / "-" runs     → single space
#   2. camelCase boundary → space        (ipAddress → ip Address)
#   3. Known acronym      → UPPERCASE    (md5 → MD5)
#   4. Word of ≤ 2 chars  → UPPERCASE    (db → DB)
#   5. Otherwise          → Capitalized  (address → Address)
#
#   Not idempotent: re-formatting a formatted label can change
#   the casing of short words.
#
# ==============================================

import re
from typing import FrozenSet


DEFAULT_LABEL = "Value"

ACRONYMS: FrozenSet[str] = frozenset({
    "ip",
    "url",
    "id",
    "ssid",
    "ssidpassword",
    "otp",
    "ssn",
    "dob",
    "uid",
    "mac",
    "imei",
    "imsi",
    "md5",
    "sha1",
    "sha256",
})

_KEY_SEPARATORS = re.compile(r'[\s_-]+')
_LABEL_SEPARATORS = re.compile(r'[_-]+')
_CAMEL_BOUNDARY = re.compile(r'([a-z0-9])([A-Z])')
_WHITESPACE = re.compile(r'\s+')
_HAS_LETTER = re.compile(r'[a-z]', re.IGNORECASE)


def normalize_key(key: str) -> str:
    """Lowercase, trim, and collapse whitespace/underscore/hyphen runs to one space."""
    return _KEY_SEPARATORS.sub(' ', str(key).strip().lower())


def format_label(key: str) -> str:
    """
    Convert a raw payload key to a human readable label.

    Args:
        key: Raw field key (e.g., "ipAddress", "full_name", "leak-name")

    Returns:
        Display label (e.g., "IP Address", "Full Name", "Leak Name").
        "Value" when nothing printable is left.
    """
    cleaned = _LABEL_SEPARATORS.sub(' ', str(key))
    cleaned = _CAMEL_BOUNDARY.sub(r'\1 \2', cleaned)
    cleaned = _WHITESPACE.sub(' ', cleaned).strip()
    if not cleaned:
        return DEFAULT_LABEL

    return ' '.join(_format_word(word) for word in cleaned.split(' '))


def _format_word(word: str) -> str:
    lower = word.lower()
    if lower in ACRONYMS:
        return lower.upper()
    if len(lower) <= 2 and _HAS_LETTER.search(lower):
        return lower.upper()
    return lower[:1].upper() + lower[1:]
