# ==============================================
# PERSISTENCE (handoff between commands)
# ==============================================
#
# This package keeps normalized results on disk so they can be
# reopened (show / export) without repeating the search.
#
# Modules:
# --------
# - handoff_store.py  → Save/load {query, normalized} per handoff id
#
# ==============================================

from .handoff_store import Handoff, HandoffStore

__all__ = ["Handoff", "HandoffStore"]
