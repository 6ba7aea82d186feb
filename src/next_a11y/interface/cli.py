"""CLI entry points for next-a11y - Thin Controller using Typer."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import typer
from rich.console import Console
from rich.table import Table

from next_a11y.domain.config import CLIFlags, ConfigResolver, ResolvedConfig
from next_a11y.domain.errors import A11yError
from next_a11y.domain.protocols import (
    FileSystemProtocol,
    ImageSourceProtocol,
    ResultCacheProtocol,
    ScoreStoreProtocol,
    SourceFixerProtocol,
    SourceParserProtocol,
    TelemetryPort,
    TextGeneratorProtocol,
)
from next_a11y.domain.rules.registry import RULE_CLASSES
from next_a11y.domain.scoring import ScoreCalculator
from next_a11y.interface.reporters import ScanReporter
from next_a11y.use_cases.resolve_ai_fixes import ResolveAiFixesUseCase
from next_a11y.use_cases.scan_project import ScanProjectUseCase

OUTPUT_FORMATS = ("text", "json")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    telemetry: TelemetryPort
    filesystem: FileSystemProtocol
    parser: SourceParserProtocol
    fixer: SourceFixerProtocol
    image_source: ImageSourceProtocol
    text_reporter: ScanReporter
    json_reporter: ScanReporter
    load_file_config: Callable[[str], dict[str, Any]]
    load_env: Callable[[str], None]
    find_project_root: Callable[[str], Path]
    cache_factory: Callable[[str], ResultCacheProtocol]
    score_store_factory: Callable[[str], ScoreStoreProtocol]
    generator_factory: Callable[[ResolvedConfig], TextGeneratorProtocol]
    format_bytes: Callable[[int], str]
    console: Console


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_config(deps: CLIDependencies, target: str, flags: CLIFlags) -> ResolvedConfig:
        deps.load_env(target)
        return ConfigResolver.resolve(deps.load_file_config(target), flags)

    @staticmethod
    def cache_dir(deps: CLIDependencies, target: str, config: ResolvedConfig) -> str:
        """Cache directory resolved against the project root of ``target``."""
        return deps.filesystem.join_path(str(deps.find_project_root(target)), config.cache_dir)

    @staticmethod
    def build_scan_use_case(deps: CLIDependencies, target: str, config: ResolvedConfig) -> ScanProjectUseCase:
        cache_dir = CLIAppFactory.cache_dir(deps, target, config)
        ai_resolver = None
        if config.ai_enabled:
            ai_resolver = ResolveAiFixesUseCase(
                generator=deps.generator_factory(config),
                cache=deps.cache_factory(cache_dir),
                image_source=deps.image_source,
                telemetry=deps.telemetry,
                locale=config.locale,
            )
        elif config.fix and not config.no_ai:
            deps.telemetry.warning("No AI provider configured; AI fixes use offline fallbacks")
        return ScanProjectUseCase(
            filesystem=deps.filesystem,
            parser=deps.parser,
            fixer=deps.fixer,
            score_store=deps.score_store_factory(cache_dir),
            telemetry=deps.telemetry,
            ai_resolver=ai_resolver,
        )

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="next-a11y",
            help="Accessibility linter and codemod for React and Next.js projects.",
            add_completion=False,
        )
        cache_app = typer.Typer(help="Inspect or clear the generated-text cache.")
        app.add_typer(cache_app, name="cache")

        @app.command()
        def scan(
            path: Path = typer.Argument(Path("."), help="File or directory to scan"),  # noqa: B008
            fix: bool = typer.Option(False, "--fix", help="Apply fixes and write files"),
            no_ai: bool = typer.Option(False, "--no-ai", help="Skip AI rules and text generation"),
            provider: Optional[str] = typer.Option(None, help="AI provider override"),
            model: Optional[str] = typer.Option(None, help="AI model override"),
            locale: Optional[str] = typer.Option(None, help="Locale for generated text"),
            min_score: Optional[int] = typer.Option(
                None, "--min-score", help="Exit with code 1 when the score is below this value"),
            output_format: str = typer.Option("text", "--format", help="Report format: text or json"),
        ) -> None:
            """Scan files for accessibility issues."""
            if output_format not in OUTPUT_FORMATS:
                deps.telemetry.error(f"Unknown format {output_format!r}; expected text or json")
                raise typer.Exit(code=1)
            deps.telemetry.handshake()
            target = str(path)
            flags = CLIFlags(fix=fix, no_ai=no_ai, provider=provider, model=model,
                             locale=locale, min_score=min_score)
            try:
                config = CLIAppFactory.resolve_config(deps, target, flags)
                use_case = CLIAppFactory.build_scan_use_case(deps, target, config)
                result = use_case.execute(target, config)
            except A11yError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=1) from exc

            reporter = deps.json_reporter if output_format == "json" else deps.text_reporter
            usage = use_case.token_usage if use_case.ai_resolver is not None else None
            reporter.report(result, usage)

            if config.min_score is not None and result.score < config.min_score:
                deps.telemetry.error(f"Score {result.score} is below minimum threshold {config.min_score}")
                raise typer.Exit(code=1)

        @app.command()
        def rules(
            path: Path = typer.Argument(Path("."), help="Project whose configuration applies"),  # noqa: B008
        ) -> None:
            """List every rule with its type, configured level and score weight."""
            try:
                config = CLIAppFactory.resolve_config(deps, str(path), CLIFlags())
            except A11yError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=1) from exc
            table = Table(title="Rules")
            table.add_column("Rule", style="cyan")
            table.add_column("Type")
            table.add_column("Level")
            table.add_column("Weight", justify="right")
            table.add_column("Description")
            for rule in RULE_CLASSES:
                table.add_row(rule.id, rule.type.value, config.rule(rule.id).level.value,
                              f"{ScoreCalculator.weight(rule.id):g}", rule.description)
            deps.console.print(table)

        @cache_app.command("stats")
        def cache_stats(
            path: Path = typer.Argument(Path("."), help="Project whose cache to inspect"),  # noqa: B008
        ) -> None:
            """Show the number of cached entries and the cache file size."""
            try:
                config = CLIAppFactory.resolve_config(deps, str(path), CLIFlags())
            except A11yError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=1) from exc
            cache_dir = CLIAppFactory.cache_dir(deps, str(path), config)
            stats = deps.cache_factory(cache_dir).stats()
            deps.console.print(f"Cache: {cache_dir}")
            deps.console.print(f"Entries: {stats.entries}")
            deps.console.print(f"Size: {deps.format_bytes(stats.size_bytes)}")

        @cache_app.command("clear")
        def cache_clear(
            path: Path = typer.Argument(Path("."), help="Project whose cache to clear"),  # noqa: B008
        ) -> None:
            """Delete every cached entry."""
            try:
                config = CLIAppFactory.resolve_config(deps, str(path), CLIFlags())
            except A11yError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=1) from exc
            cache_dir = CLIAppFactory.cache_dir(deps, str(path), config)
            deps.cache_factory(cache_dir).clear()
            deps.console.print(f"Cache cleared: {cache_dir}")

        return app
