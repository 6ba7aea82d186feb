"""Use Case: Scan a project for accessibility violations and optionally fix them."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from next_a11y.domain.config import ResolvedConfig
from next_a11y.domain.entities import RuleLevel, ScanResult, ScoreRecord, TokenUsage, Violation
from next_a11y.domain.errors import FixWriteError, ScanPathError
from next_a11y.domain.icon_labels import DEFAULT_ICON_CLASSIFIER, IconClassifier
from next_a11y.domain.protocols import (
    FileSystemProtocol,
    ScoreStoreProtocol,
    SourceFixerProtocol,
    SourceParserProtocol,
    TelemetryPort,
)
from next_a11y.domain.rules import BaseRule
from next_a11y.domain.rules.registry import RuleRegistry
from next_a11y.domain.scoring import ScoreCalculator
from next_a11y.domain.source import SourceFile
from next_a11y.use_cases.resolve_ai_fixes import ResolveAiFixesUseCase


class ScanProjectUseCase:
    """
    Orchestrate one run: discover, parse, check, resolve, fix, rescan and score.

    Fixes are applied in memory per file and each changed file is written
    once, after every fix of the run has been applied. Remaining violations
    come from a rescan of the rewritten text.
    """

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        parser: SourceParserProtocol,
        fixer: SourceFixerProtocol,
        score_store: ScoreStoreProtocol,
        telemetry: TelemetryPort,
        ai_resolver: Optional[ResolveAiFixesUseCase] = None,
        icon_classifier: IconClassifier = DEFAULT_ICON_CLASSIFIER,
    ) -> None:
        self.filesystem = filesystem
        self.parser = parser
        self.fixer = fixer
        self.score_store = score_store
        self.telemetry = telemetry
        self.ai_resolver = ai_resolver
        self.icon_classifier = icon_classifier
        self.token_usage = TokenUsage()

    def execute(self, target_path: str, config: ResolvedConfig) -> ScanResult:
        """Scan ``target_path``; with ``config.fix`` also rewrite files. Raises ScanPathError, FixWriteError."""
        if not self.filesystem.exists(target_path):
            raise ScanPathError(target_path)
        previous = self.score_store.read()
        paths = self.filesystem.glob_source_files(target_path, config.include, config.exclude)
        self.telemetry.step(f"🔍 Scanning {len(paths)} file(s) in {target_path}")
        rules = RuleRegistry.build(config, self.icon_classifier)

        files = self._parse(paths)
        violations = self.check_files(list(files.values()), rules)
        elements = sum(len(file.jsx_elements()) for file in files.values())

        fixed_count = 0
        if config.fix:
            fixable = [v for v in violations
                       if v.fix is not None and config.rule(v.rule).level is RuleLevel.FIX]
            if self.ai_resolver is not None and any(self.ai_resolver.needs_resolution(v) for v in fixable):
                fixable, self.token_usage = asyncio.run(self._resolve_ai(fixable, files))
                self.telemetry.step(f"🧮 Tokens used: {self.token_usage.total}")
            rewritten, fixed_count = self._apply_fixes(fixable, files)
            if rewritten:
                self._write(rewritten)
                violations = self._rescan(violations, rewritten, rules)
                self.telemetry.step(f"🛠️ Applied {fixed_count} fix(es) in {len(rewritten)} file(s)")

        score = ScoreCalculator.score(violations)
        self.score_store.write(ScoreRecord(score=score, timestamp=datetime.now(timezone.utc).isoformat()))
        return ScanResult(
            violations=violations,
            files_scanned=len(files),
            elements_scanned=elements,
            score=score,
            fixed_count=fixed_count,
            previous_score=previous.score if previous is not None else None,
        )

    def _parse(self, paths: list[str]) -> dict[str, SourceFile]:
        files: dict[str, SourceFile] = {}
        for path in paths:
            parsed = self.parser.parse_file(path)
            if parsed is None:
                self.telemetry.warning(f"Skipped {path}: could not be parsed")
                continue
            files[path] = parsed
        return files

    @staticmethod
    def check_files(files: list[SourceFile], rules: list[BaseRule]) -> list[Violation]:
        """Run every rule over every file; a failing rule is logged and skipped for that file."""
        violations: list[Violation] = []
        for file in files:
            for rule in rules:
                try:
                    violations.extend(rule.scan(file))
                except Exception as exc:
                    logging.warning("Rule %s failed on %s: %s", rule.id, file.path, exc)
        return violations

    async def _resolve_ai(
        self, violations: list[Violation], files: dict[str, SourceFile]
    ) -> tuple[list[Violation], TokenUsage]:
        resolver = self.ai_resolver
        if resolver is None:
            return violations, TokenUsage()
        try:
            return await resolver.execute(violations, files)
        finally:
            await resolver.aclose()

    def _apply_fixes(
        self, violations: list[Violation], files: dict[str, SourceFile]
    ) -> tuple[dict[str, str], int]:
        """New text per changed file and the number of fixes applied."""
        by_file: dict[str, list[Violation]] = {}
        for violation in violations:
            if violation.fix is not None:
                by_file.setdefault(violation.file_path, []).append(violation)
        rewritten: dict[str, str] = {}
        applied_count = 0
        for path, file_violations in by_file.items():
            file = files.get(path)
            if file is None:
                continue
            text, applied = self.fixer.apply(file, file_violations)
            if applied and text != file.text:
                rewritten[path] = text
                applied_count += len(applied)
        return rewritten, applied_count

    def _write(self, rewritten: dict[str, str]) -> None:
        for path, text in rewritten.items():
            try:
                self.filesystem.write_text(path, text)
            except OSError as exc:
                raise FixWriteError(path, exc) from exc

    def _rescan(
        self, violations: list[Violation], rewritten: dict[str, str], rules: list[BaseRule]
    ) -> list[Violation]:
        """Keep violations of untouched files; recheck the rewritten ones."""
        remaining = [v for v in violations if v.file_path not in rewritten]
        reparsed = [self.parser.parse_text(path, text) for path, text in rewritten.items()]
        remaining.extend(self.check_files([file for file in reparsed if file is not None], rules))
        remaining.sort(key=lambda v: v.file_path)
        return remaining
