"""Shared helpers for parsing TSX snippets in rule and fixer tests."""

from typing import Optional

from next_a11y.domain.config import CLIFlags, ConfigResolver, ResolvedConfig
from next_a11y.domain.entities import Violation
from next_a11y.domain.rules import BaseRule
from next_a11y.domain.source import SourceFile
from next_a11y.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from next_a11y.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway

_PARSER = TreeSitterGateway(FileSystemGateway())


def parse_source(source: str, path: str = "components/Example.tsx") -> SourceFile:
    """Parse ``source`` as TSX; fails the test when the snippet does not parse."""
    parsed = _PARSER.parse_text(path, source)
    if parsed is None:
        raise AssertionError(f"Test source for {path} did not parse:\n{source}")
    return parsed


def run_rule(
    rule: BaseRule, source: str, path: str = "components/Example.tsx"
) -> list[Violation]:
    """Run a single rule on ``source`` and return its violations."""
    return rule.scan(parse_source(source, path))


def resolved_config(file_config: Optional[dict] = None, **flags: object) -> ResolvedConfig:
    """Resolved configuration with no provider detected from the environment."""
    return ConfigResolver.resolve(file_config or {}, CLIFlags(**flags), environ={})  # type: ignore[arg-type]
