import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from leakview.normalization.types import NormalizedSearchResults

log = logging.getLogger(__name__)


# ==============================================
# HandoffStore
# ==============================================
#
# PURPOSE:
#   Keep a normalized search result on disk so another command
#   (show, export) can reopen it without repeating the search.
#   Searches consume credits; re-running one just to print it
#   again costs the user.
#
# WHAT IS STORED (one file per handoff id):
#   {
#     "query": "john@example.com",
#     "normalized": {records, recordCount, fieldCount, hasMeaningfulData},
#     "saved_at": "2026-01-01T00:00:00+00:00"
#   }
#
# Missing or unreadable entries load as None: a stale handoff
# just means "search again".
#
@dataclass(frozen=True)
class Handoff:
    """A stored search: the query text and its normalized results."""
    query: str
    normalized: NormalizedSearchResults
    saved_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "query": self.query,
            "normalized": self.normalized.to_dict(),
            "saved_at": self.saved_at,
        }

    @staticmethod
    def from_dict(data: dict) -> 'Handoff':
        return Handoff(
            query=data.get("query", ""),
            normalized=NormalizedSearchResults.from_dict(data.get("normalized") or {}),
            saved_at=data.get("saved_at"),
        )


_HANDOFF_ID = re.compile(r'[A-Za-z0-9_-]+')


class HandoffStore:
    """
    Directory of handoff files.

    Files created:
    - <storage_dir>/<handoff_id>.json
    """

    def __init__(self, storage_dir: str = "handoff/"):
        """
        Initialize the handoff store.

        Args:
            storage_dir: Directory to store handoff files
        """
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, handoff_id: str) -> Path:
        """
        Resolve the file of a handoff id.

        Ids are used as file names unchanged, so two distinct ids
        never share a file.

        Raises:
            ValueError: If the id is empty or has characters outside
                letters, digits, "_" and "-"
        """
        handoff_id = str(handoff_id)
        if not _HANDOFF_ID.fullmatch(handoff_id):
            raise ValueError(
                f"Invalid handoff id: {handoff_id!r} "
                "(use letters, digits, '_' and '-')"
            )
        return self.storage_dir / f"{handoff_id}.json"

    def save(self, handoff_id: str, query: str, normalized: NormalizedSearchResults) -> Path:
        """
        Store a normalized result under `handoff_id`, replacing any previous entry.

        Returns:
            Path of the written file
        """
        path = self.path_for(handoff_id)
        handoff = Handoff(
            query=query,
            normalized=normalized,
            saved_at=datetime.now(timezone.utc).isoformat(),
        )

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(handoff.to_dict(), f, indent=2, ensure_ascii=False)

        log.info("Saved handoff %s (%d records) to %s", handoff_id, normalized.record_count, path)
        return path

    def load(self, handoff_id: str) -> Optional[Handoff]:
        """
        Load a stored handoff.

        Returns:
            The Handoff, or None if it is missing or unreadable
        """
        path = self.path_for(handoff_id)
        if not path.exists():
            log.debug("No handoff file at %s", path)
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return Handoff.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            log.warning("Ignoring unreadable handoff %s: %s", path, e)
            return None

    def exists(self, handoff_id: str) -> bool:
        return self.path_for(handoff_id).exists()

    def delete(self, handoff_id: str) -> bool:
        """Delete one handoff. Returns True if a file was removed."""
        path = self.path_for(handoff_id)
        if not path.exists():
            return False
        path.unlink()
        log.info("Deleted handoff %s", path)
        return True

    def clear(self) -> int:
        """
        Delete all handoff files.

        Returns:
            Number of files removed
        """
        removed = 0
        for path in self.storage_dir.glob("*.json"):
            path.unlink()
            removed += 1
        log.info("Cleared %d handoff(s) from %s", removed, self.storage_dir)
        return removed
