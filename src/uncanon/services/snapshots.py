"""Per-phase JSON snapshots of raw provider responses.

A fetch writes the full ``id -> response`` mapping for its phase; the
apply step reads it back. Re-running the apply step alone never touches
the network.
"""

import json
import logging
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Enrichment phases, one snapshot file each."""

    IMDB_SEARCH = "imdb_search"
    IMDB_TITLE = "imdb_title"
    WIKIPEDIA_SUMMARY = "wikipedia_summary"

    @property
    def filename(self) -> str:
        return f"{self.value}.json"


class SnapshotStore:
    """
    Snapshot files stored in the persistence directory.

    Args:
        directory: Directory holding one JSON file per phase
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path(self, phase: Phase) -> Path:
        return self.directory / phase.filename

    def write(self, phase: Phase, snapshot: dict[int, Any]) -> Path:
        """
        Replace the snapshot for *phase* with *snapshot*.

        The file is written under a temporary name and moved into place, so
        an interrupted run leaves the previous snapshot intact.

        Args:
            phase: Enrichment phase
            snapshot: Raw provider responses keyed by internal ID

        Returns:
            Path of the written file
        """
        path = self.path(phase)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {str(entity_id): raw for entity_id, raw in snapshot.items()}
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f".{phase.value}.", suffix=".tmp", delete=False
        ) as f:
            tmp_path = Path(f.name)
            try:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            except BaseException:
                f.close()
                tmp_path.unlink(missing_ok=True)
                raise
        tmp_path.replace(path)
        logger.info(f"Wrote {len(payload)} entries to {path}")
        return path

    def read(self, phase: Phase) -> dict[int, Any]:
        """
        Load the snapshot for *phase*.

        A missing or unreadable snapshot reads as empty.
        """
        path = self.path(phase)
        if not path.exists():
            logger.warning(f"No {phase.value} snapshot at {path}; nothing to apply")
            return {}
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(payload, dict):
                raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
            return {int(entity_id): raw for entity_id, raw in payload.items()}
        except ValueError as e:
            logger.error(f"Unreadable {phase.value} snapshot at {path}; nothing to apply: {e}")
            return {}
