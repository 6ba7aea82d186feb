"""Load [tool.next-a11y] from pyproject.toml or a11y.config.json. Infrastructure I/O only."""

import json
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from next_a11y.domain.errors import ConfigError

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

JSON_CONFIG_FILE = "a11y.config.json"
PROJECT_MARKERS = ("package.json", "next.config.js", "next.config.mjs", "next.config.ts", "pyproject.toml")
ENV_FILES = (".env.local", ".env")


class ConfigFileLoader:
    """
    Loads file configuration for a scan root.

    Lookup walks up from the scan root: the first directory holding
    ``a11y.config.json`` or a ``pyproject.toml`` with a ``[tool.next-a11y]``
    table wins.
    """

    @staticmethod
    def find_project_root(start: str) -> Path:
        """Nearest ancestor holding a project marker; ``start`` itself when none does."""
        current = Path(start).resolve()
        if current.is_file():
            current = current.parent
        for candidate in (current, *current.parents):
            if any((candidate / marker).exists() for marker in PROJECT_MARKERS):
                return candidate
        return current

    @staticmethod
    def _read_json(path: Path) -> dict[str, Any]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigError(f"Cannot read {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a JSON object")
        return data

    @staticmethod
    def _read_pyproject(path: Path) -> Optional[dict[str, Any]]:
        try:
            with path.open("rb") as f:
                data = toml_lib.load(f)
        except OSError:
            return None
        except toml_lib.TOMLDecodeError as exc:
            raise ConfigError(f"Cannot parse {path}: {exc}") from exc
        section = (data.get("tool", {}) or {}).get("next-a11y")
        return dict(section) if isinstance(section, dict) else None

    @classmethod
    def load_config_from_fs(cls, start: str) -> dict[str, Any]:
        """Return the file configuration that applies to ``start``; empty when none exists."""
        current = Path(start).resolve()
        if current.is_file():
            current = current.parent
        for candidate in (current, *current.parents):
            json_file = candidate / JSON_CONFIG_FILE
            if json_file.exists():
                return cls._read_json(json_file)
            pyproject = candidate / "pyproject.toml"
            if pyproject.exists():
                section = cls._read_pyproject(pyproject)
                if section is not None:
                    return section
        return {}

    @staticmethod
    def load_env(start: str) -> None:
        """
        Load ``.env.local`` then ``.env`` without overriding the environment.

        Walks up from ``start`` and stops after the first directory holding
        ``package.json``.
        """
        current = Path(start).resolve()
        if current.is_file():
            current = current.parent
        for candidate in (current, *current.parents):
            for name in ENV_FILES:
                env_file = candidate / name
                if env_file.exists():
                    load_dotenv(env_file, override=False)
            if (candidate / "package.json").exists():
                break
