"""Unit tests for FileSystemGateway and ConfigFileLoader."""

import json
import os
from pathlib import Path

import pytest

from next_a11y.domain.config import DEFAULT_CONFIG
from next_a11y.domain.errors import ConfigError
from next_a11y.infrastructure.config_file_loader import ConfigFileLoader
from next_a11y.infrastructure.gateways.filesystem_gateway import FileSystemGateway


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestFileSystemGateway:
    """Test source discovery."""

    def test_expand_braces(self) -> None:
        """Test that brace alternatives are expanded."""
        assert FileSystemGateway.expand_braces("**/*.{tsx,jsx}") == ["**/*.tsx", "**/*.jsx"]
        assert FileSystemGateway.expand_braces("src/*.ts") == ["src/*.ts"]

    def test_glob_applies_include_and_exclude(self, tmp_path: Path) -> None:
        """Test that default patterns pick components and skip tests and node_modules."""
        page = _touch(tmp_path / "app" / "page.tsx")
        button = _touch(tmp_path / "components" / "Button.jsx")
        root = _touch(tmp_path / "Root.tsx")
        _touch(tmp_path / "components" / "Button.test.tsx")
        _touch(tmp_path / "components" / "Button.stories.tsx")
        _touch(tmp_path / "node_modules" / "pkg" / "index.jsx")
        _touch(tmp_path / "styles" / "globals.css")

        found = FileSystemGateway().glob_source_files(
            str(tmp_path), DEFAULT_CONFIG["scanner"]["include"], DEFAULT_CONFIG["scanner"]["exclude"])

        assert found == sorted(str(p.resolve()) for p in (page, button, root))

    def test_single_file_target(self, tmp_path: Path) -> None:
        """Test that a file path is scanned on its own."""
        page = _touch(tmp_path / "page.tsx")
        found = FileSystemGateway().glob_source_files(str(page), ["**/*.{tsx,jsx}"], [])
        assert found == [str(page.resolve())]

    def test_remove_missing_file_is_silent(self, tmp_path: Path) -> None:
        """Test that removing an absent file does not raise."""
        FileSystemGateway().remove(str(tmp_path / "absent.json"))


class TestConfigFileLoader:
    """Test configuration and environment file discovery."""

    def test_json_config(self, tmp_path: Path) -> None:
        """Test that a11y.config.json is read."""
        _touch(tmp_path / "a11y.config.json", json.dumps({"locale": "pl", "rules": {"img-alt": "warn"}}))
        _touch(tmp_path / "app" / "page.tsx")

        config = ConfigFileLoader.load_config_from_fs(str(tmp_path / "app"))
        assert config == {"locale": "pl", "rules": {"img-alt": "warn"}}

    def test_pyproject_table(self, tmp_path: Path) -> None:
        """Test that [tool.next-a11y] in pyproject.toml is read."""
        _touch(tmp_path / "pyproject.toml", '[tool.next-a11y]\nlocale = "de"\n\n[tool.next-a11y.rules]\nheading-order = "off"\n')

        config = ConfigFileLoader.load_config_from_fs(str(tmp_path))
        assert config == {"locale": "de", "rules": {"heading-order": "off"}}

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        """Test that a malformed config file is a configuration error."""
        _touch(tmp_path / "a11y.config.json", "{not json")
        with pytest.raises(ConfigError):
            ConfigFileLoader.load_config_from_fs(str(tmp_path))

    def test_find_project_root(self, tmp_path: Path) -> None:
        """Test that the nearest package.json marks the project root."""
        _touch(tmp_path / "package.json", "{}")
        nested = _touch(tmp_path / "src" / "app" / "page.tsx")

        assert ConfigFileLoader.find_project_root(str(nested)) == tmp_path.resolve()

    def test_env_local_wins_and_shell_is_kept(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that .env.local beats .env and neither overrides the shell."""
        monkeypatch.setenv("NEXT_A11Y_TEST_KEY", "placeholder")
        monkeypatch.delenv("NEXT_A11Y_TEST_KEY")
        monkeypatch.setenv("NEXT_A11Y_SHELL_KEY", "shell")
        _touch(tmp_path / "package.json", "{}")
        _touch(tmp_path / ".env", "NEXT_A11Y_TEST_KEY=from-env\nNEXT_A11Y_SHELL_KEY=from-env\n")
        _touch(tmp_path / ".env.local", "NEXT_A11Y_TEST_KEY=from-local\n")

        ConfigFileLoader.load_env(str(tmp_path / "app"))

        assert os.environ["NEXT_A11Y_TEST_KEY"] == "from-local"
        assert os.environ["NEXT_A11Y_SHELL_KEY"] == "shell"
