# ==============================================
# Leakview: breach lookup results as readable cards
# ==============================================
#
# Package Structure:
#
# leakview/
# ├── normalization/    # Raw API payload → NormalizedSearchResults
# ├── results/          # Field lookups and plain-text export
# ├── client/           # Breach API client + search tracking webhook
# ├── persistence/      # Handoff of normalized results between commands
# ├── config.py         # Configuration management
# └── cli.py            # Command line entry point
#
# ==============================================

import logging

from leakview.normalization import (
    NormalizedSearchResults,
    ResultField,
    ResultRecord,
    format_label,
    has_meaningful_value,
    normalize_search_results,
    normalize_value,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "NormalizedSearchResults",
    "ResultField",
    "ResultRecord",
    "format_label",
    "has_meaningful_value",
    "normalize_search_results",
    "normalize_value",
]
