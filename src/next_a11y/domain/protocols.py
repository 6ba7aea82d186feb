from typing import TYPE_CHECKING, Optional, Protocol, Union

if TYPE_CHECKING:
    from next_a11y.domain.entities import (
        CacheEntry,
        CacheStats,
        GenerationRequest,
        GenerationResult,
        ScoreRecord,
        Violation,
    )
    from next_a11y.domain.source import JsxElement, SourceFile


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        ...

    def is_directory(self, path: str) -> bool:
        ...

    def exists(self, path: str) -> bool:
        """Return True if path exists (file or directory)."""
        ...

    def glob_source_files(self, root: str, include: list[str], exclude: list[str]) -> list[str]:
        """Files under root matching an include pattern and no exclude pattern, sorted."""
        ...

    def make_dirs(self, path: str, exist_ok: bool = True) -> None:
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def read_bytes(self, path: str) -> bytes:
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...

    def join_path(self, *paths: str) -> str:
        """Join path components into a single path string."""
        ...

    def file_size(self, path: str) -> int:
        ...

    def remove(self, path: str) -> None:
        """Delete a file if it exists."""
        ...


class SourceParserProtocol(Protocol):
    """Turns TSX/JSX text into a SourceFile."""

    def parse_text(self, path: str, text: str) -> Optional["SourceFile"]:
        """Parse text; None when the syntax tree contains errors."""
        ...

    def parse_file(self, path: str) -> Optional["SourceFile"]:
        ...


class SourceFixerProtocol(Protocol):
    """Applies violation fixes to one file's text in memory."""

    def apply(self, file: "SourceFile", violations: list["Violation"]) -> tuple[str, list["Violation"]]:
        """Return the rewritten text and the violations whose fix was applied."""
        ...


class TextGeneratorProtocol(Protocol):
    """The text-generation primitive behind every AI fix."""

    model: str

    async def generate(self, request: "GenerationRequest") -> "GenerationResult":
        """Generate text for request. Raises GenerationError when the backend fails."""
        ...

    async def aclose(self) -> None: ...


class ResultCacheProtocol(Protocol):
    """Content-addressed store of generated values."""

    def hash(self, content: Union[str, bytes]) -> str:
        """Cache key for ``content``."""
        ...

    def get(self, key: str) -> Optional["CacheEntry"]: ...
    def set(self, key: str, entry: "CacheEntry") -> None: ...
    def clear(self) -> None: ...
    def stats(self) -> "CacheStats": ...


class ScoreStoreProtocol(Protocol):
    """Key-value store for the score of the previous run."""

    def read(self) -> Optional["ScoreRecord"]: ...
    def write(self, record: "ScoreRecord") -> None: ...


class ImageSourceProtocol(Protocol):
    """Loads the bytes of the image an element renders."""

    async def load(self, element: "JsxElement", source: Optional[str]) -> Optional[bytes]:
        """Image bytes, or None when the source cannot be resolved, read or fetched."""
        ...

    async def aclose(self) -> None: ...
