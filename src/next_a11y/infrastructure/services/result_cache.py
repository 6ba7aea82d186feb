"""Content-addressed JSON cache of generated values."""

import hashlib
import json
import logging
from typing import Optional, Union

from next_a11y.domain.entities import CacheEntry, CacheStats
from next_a11y.domain.protocols import FileSystemProtocol, ResultCacheProtocol

CACHE_FILE = "cache.json"
KEY_LENGTH = 16

logger = logging.getLogger(__name__)


class ResultCache(ResultCacheProtocol):
    """
    ``<cache_dir>/cache.json`` mapping key to ``{value, model, locale, rule, generatedAt}``.

    The file is read lazily on first access and rewritten after every ``set``.
    A missing or corrupt file reads as an empty cache.
    """

    def __init__(self, cache_dir: str, filesystem: FileSystemProtocol) -> None:
        self._dir = cache_dir
        self._fs = filesystem
        self._entries: Optional[dict[str, CacheEntry]] = None

    @staticmethod
    def hash(content: Union[str, bytes]) -> str:
        """First 16 hex characters of the SHA-256 digest of ``content``."""
        data = content.encode("utf-8") if isinstance(content, str) else content
        return hashlib.sha256(data).hexdigest()[:KEY_LENGTH]

    @property
    def path(self) -> str:
        return self._fs.join_path(self._dir, CACHE_FILE)

    def _load(self) -> dict[str, CacheEntry]:
        if self._entries is not None:
            return self._entries
        entries: dict[str, CacheEntry] = {}
        if self._fs.exists(self.path):
            try:
                raw = json.loads(self._fs.read_text(self.path))
                if isinstance(raw, dict):
                    entries = {key: CacheEntry.from_dict(value)
                               for key, value in raw.items() if isinstance(value, dict)}
            except (OSError, ValueError) as exc:
                logger.warning("Cache file %s is unreadable, starting empty: %s", self.path, exc)
        self._entries = entries
        return entries

    def _save(self) -> None:
        entries = self._load()
        try:
            self._fs.make_dirs(self._dir, exist_ok=True)
            self._fs.write_text(
                self.path, json.dumps({key: entry.to_dict() for key, entry in entries.items()}, indent=2))
        except OSError as exc:
            logger.warning("Could not write cache file %s: %s", self.path, exc)

    def get(self, key: str) -> Optional[CacheEntry]:
        return self._load().get(key)

    def set(self, key: str, entry: CacheEntry) -> None:
        self._load()[key] = entry
        self._save()

    def clear(self) -> None:
        self._entries = {}
        self._fs.remove(self.path)

    def stats(self) -> CacheStats:
        size = self._fs.file_size(self.path) if self._fs.exists(self.path) else 0
        return CacheStats(entries=len(self._load()), size_bytes=size)

    @staticmethod
    def format_bytes(size: int) -> str:
        """Human-readable size: 0 B, 512.0 B, 1.5 KB, 2.0 MB."""
        if size <= 0:
            return "0 B"
        if size < 1024:
            return f"{size:.1f} B"
        value = float(size)
        for unit in ("KB", "MB", "GB"):
            value /= 1024
            if value < 1024 or unit == "GB":
                return f"{value:.1f} {unit}"
        return f"{value:.1f} GB"
