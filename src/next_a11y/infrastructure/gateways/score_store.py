"""Previous-run score persistence - Infrastructure implementation of ScoreStoreProtocol."""

import json
import logging
from typing import Optional

from next_a11y.domain.entities import ScoreRecord
from next_a11y.domain.protocols import FileSystemProtocol, ScoreStoreProtocol

SCORE_FILE = "score.json"


class LocalScoreStore(ScoreStoreProtocol):
    """Stores ``{score, timestamp}`` as score.json under the cache directory."""

    def __init__(self, base_path: str, filesystem: FileSystemProtocol) -> None:
        self._base = base_path
        self._fs = filesystem

    def _path(self) -> str:
        return self._fs.join_path(self._base, SCORE_FILE)

    def read(self) -> Optional[ScoreRecord]:
        """Return the stored record, or None when absent or unreadable."""
        path = self._path()
        if not self._fs.exists(path):
            return None
        try:
            data = json.loads(self._fs.read_text(path))
            return ScoreRecord(score=int(data["score"]), timestamp=str(data.get("timestamp", "")))
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logging.warning("Ignoring unreadable score file %s: %s", path, exc)
            return None

    def write(self, record: ScoreRecord) -> None:
        self._fs.make_dirs(self._base, exist_ok=True)
        self._fs.write_text(self._path(), json.dumps(record.to_dict(), indent=2))
