"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

import re
from fnmatch import fnmatchcase
from pathlib import Path

from next_a11y.domain.protocols import FileSystemProtocol

_BRACES = re.compile(r"\{([^{}]*)\}")


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        return str(Path(path).resolve())

    def is_directory(self, path: str) -> bool:
        return Path(path).is_dir()

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    @staticmethod
    def expand_braces(pattern: str) -> list[str]:
        """'**/*.{tsx,jsx}' -> ['**/*.tsx', '**/*.jsx']."""
        match = _BRACES.search(pattern)
        if match is None:
            return [pattern]
        expanded: list[str] = []
        for option in match.group(1).split(","):
            expanded.extend(FileSystemGateway.expand_braces(
                pattern[:match.start()] + option + pattern[match.end():]))
        return expanded

    @classmethod
    def matches(cls, relative: str, patterns: list[str]) -> bool:
        """Glob match on a POSIX relative path; a leading '**/' also matches at the root."""
        for pattern in patterns:
            for candidate in cls.expand_braces(pattern):
                if fnmatchcase(relative, candidate):
                    return True
                if candidate.startswith("**/") and fnmatchcase(relative, candidate[3:]):
                    return True
        return False

    def glob_source_files(self, root: str, include: list[str], exclude: list[str]) -> list[str]:
        """Files under root matching an include pattern and no exclude pattern, sorted."""
        root_path = Path(root).resolve()
        if root_path.is_file():
            return [str(root_path)] if self.matches(root_path.name, include) else []
        found: list[str] = []
        for path in root_path.rglob("*"):
            if not path.is_file():
                continue
            relative = path.relative_to(root_path).as_posix()
            if self.matches(relative, include) and not self.matches(relative, exclude):
                found.append(str(path))
        return sorted(found)

    def make_dirs(self, path: str, exist_ok: bool = True) -> None:
        """Create directory and parent directories if needed."""
        Path(path).mkdir(parents=True, exist_ok=exist_ok)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return Path(path).read_text(encoding=encoding)

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        Path(path).write_text(content, encoding=encoding)

    def join_path(self, *paths: str) -> str:
        """Join path components into a single path string."""
        return str(Path(*paths))

    def file_size(self, path: str) -> int:
        return Path(path).stat().st_size

    def remove(self, path: str) -> None:
        Path(path).unlink(missing_ok=True)
