"""Unit tests for ScanProjectUseCase."""

import dataclasses
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

from next_a11y.domain.entities import ScoreRecord, TokenUsage
from next_a11y.domain.errors import FixWriteError, ScanPathError
from next_a11y.domain.rules.button_type import ButtonTypeRule
from next_a11y.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from next_a11y.infrastructure.gateways.source_fixer_gateway import SourceFixerGateway
from next_a11y.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from next_a11y.use_cases.resolve_ai_fixes import ResolveAiFixesUseCase
from next_a11y.use_cases.scan_project import ScanProjectUseCase

from tests.a11y_test_utils import parse_source, resolved_config
from tests.conftest import scan_use_case_deps

FOOTER = (
    "export function Footer() {\n"
    "  return (\n"
    "    <footer>\n"
    '      <a href="https://github.com/acme" target="_blank">GitHub</a>\n'
    "      <button onClick={() => window.scrollTo(0, 0)}>Back to top</button>\n"
    "    </footer>\n"
    "  );\n"
    "}\n"
)


def _real_deps(**overrides: object) -> dict[str, object]:
    filesystem = FileSystemGateway()
    parser = TreeSitterGateway(filesystem)
    score_store = MagicMock()
    score_store.read.return_value = None
    base = {
        "filesystem": filesystem,
        "parser": parser,
        "fixer": SourceFixerGateway(parser),
        "score_store": score_store,
    }
    base.update(overrides)
    return scan_use_case_deps(**base)


def _component(root: Path, name: str, source: str) -> Path:
    path = root / "components" / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    return path


class TestScanProjectUseCase:
    """Test scanning, fixing and scoring a project directory."""

    def test_scan_reports_and_scores(self, tmp_path: Path) -> None:
        """Test that violations are found and scored without touching files."""
        path = _component(tmp_path, "Footer.tsx", FOOTER)
        deps = _real_deps()

        result = ScanProjectUseCase(**deps).execute(str(tmp_path), resolved_config(no_ai=True))

        assert sorted(v.rule for v in result.violations) == ["button-type", "link-noopener"]
        assert result.files_scanned == 1
        assert result.elements_scanned == 3
        assert result.score == 99
        assert result.fixable_count == 2
        assert result.fixed_count == 0
        assert path.read_text(encoding="utf-8") == FOOTER
        deps["score_store"].write.assert_called_once()

    def test_fix_rewrites_and_rescans(self, tmp_path: Path) -> None:
        """Test that fixes are written once and the rescan is clean."""
        path = _component(tmp_path, "Footer.tsx", FOOTER)

        result = ScanProjectUseCase(**_real_deps()).execute(str(tmp_path), resolved_config(fix=True, no_ai=True))

        text = path.read_text(encoding="utf-8")
        assert result.fixed_count == 2
        assert result.violations == []
        assert result.score == 100
        assert 'rel="noopener noreferrer"' in text
        assert 'type="button"' in text

    def test_warn_level_rules_are_not_fixed(self, tmp_path: Path) -> None:
        """Test that only rules at the fix level are applied."""
        path = _component(tmp_path, "Footer.tsx", FOOTER)
        config = resolved_config({"rules": {"button-type": "warn"}}, fix=True, no_ai=True)

        result = ScanProjectUseCase(**_real_deps()).execute(str(tmp_path), config)

        assert result.fixed_count == 1
        assert [v.rule for v in result.violations] == ["button-type"]
        assert 'type="button"' not in path.read_text(encoding="utf-8")

    def test_previous_score_is_reported(self, tmp_path: Path) -> None:
        """Test that the stored score becomes previous_score."""
        _component(tmp_path, "Footer.tsx", FOOTER)
        deps = _real_deps()
        deps["score_store"].read.return_value = ScoreRecord(score=90, timestamp="2026-01-01T00:00:00+00:00")

        result = ScanProjectUseCase(**deps).execute(str(tmp_path), resolved_config(no_ai=True))

        assert result.previous_score == 90
        assert result.score_delta == 9
        assert deps["score_store"].write.call_args.args[0].score == 99

    def test_unparseable_file_is_skipped(self, tmp_path: Path) -> None:
        """Test that files with syntax errors are warned about and not scanned."""
        _component(tmp_path, "Broken.tsx", "export const A = () => <div>;\n")
        deps = _real_deps()

        result = ScanProjectUseCase(**deps).execute(str(tmp_path), resolved_config(no_ai=True))

        assert result.files_scanned == 0
        deps["telemetry"].warning.assert_called_once()

    def test_missing_target_raises(self, tmp_path: Path) -> None:
        """Test that a nonexistent path is a ScanPathError."""
        with pytest.raises(ScanPathError):
            ScanProjectUseCase(**_real_deps()).execute(str(tmp_path / "nope"), resolved_config())

    def test_write_failure_raises(self, tmp_path: Path) -> None:
        """Test that an unwritable file surfaces as FixWriteError."""
        _component(tmp_path, "Footer.tsx", FOOTER)
        filesystem = FileSystemGateway()
        parser = TreeSitterGateway(filesystem)
        broken_fs = MagicMock(wraps=filesystem)
        broken_fs.write_text.side_effect = PermissionError("read-only")
        deps = _real_deps(filesystem=broken_fs, parser=parser, fixer=SourceFixerGateway(parser))

        with pytest.raises(FixWriteError):
            ScanProjectUseCase(**deps).execute(str(tmp_path), resolved_config(fix=True, no_ai=True))


class TestCheckFiles:
    """Test rule execution over parsed files."""

    def test_failing_rule_is_skipped(self) -> None:
        """Test that one crashing rule does not hide the others."""
        broken = Mock()
        broken.id = "broken"
        broken.scan.side_effect = RuntimeError("boom")
        file = parse_source("export const B = () => <button>Go</button>;\n")

        violations = ScanProjectUseCase.check_files([file], [broken, ButtonTypeRule()])

        assert [v.rule for v in violations] == ["button-type"]


class TestAiResolution:
    """Test the hand-off to the AI resolver during --fix."""

    def test_deferred_fixes_go_through_resolver(self, tmp_path: Path) -> None:
        """Test that the resolver fills values, is closed and reports usage."""
        path = _component(tmp_path, "Nav.tsx", 'export const Nav = () => <button type="button"><MenuIcon /></button>;\n')

        async def fill(violations, files):
            return [dataclasses.replace(v, fix=v.fix.with_literal("Open menu")) for v in violations], TokenUsage(5, 2)

        resolver = Mock()
        resolver.needs_resolution = ResolveAiFixesUseCase.needs_resolution
        resolver.execute = AsyncMock(side_effect=fill)
        resolver.aclose = AsyncMock()
        use_case = ScanProjectUseCase(**_real_deps(ai_resolver=resolver))

        result = use_case.execute(str(tmp_path), resolved_config(fix=True))

        assert result.fixed_count == 1
        assert '<button aria-label="Open menu" type="button">' in path.read_text(encoding="utf-8")
        assert use_case.token_usage.total == 7
        resolver.aclose.assert_awaited_once()

    def test_resolver_not_called_without_deferred_fixes(self, tmp_path: Path) -> None:
        """Test that deterministic-only runs make no generation calls."""
        _component(tmp_path, "Footer.tsx", FOOTER)
        resolver = Mock()
        resolver.needs_resolution = ResolveAiFixesUseCase.needs_resolution
        resolver.execute = AsyncMock()
        resolver.aclose = AsyncMock()

        ScanProjectUseCase(**_real_deps(ai_resolver=resolver)).execute(str(tmp_path), resolved_config(fix=True))

        resolver.execute.assert_not_awaited()
        resolver.aclose.assert_not_awaited()
