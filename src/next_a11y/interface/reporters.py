"""Interface for scan reporting."""

import json
import os
from typing import TYPE_CHECKING, Optional, Protocol

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from next_a11y.domain.entities import RuleType
from next_a11y.domain.rules.registry import RULES_BY_ID
from next_a11y.domain.scoring import ScoreCalculator

if TYPE_CHECKING:
    from next_a11y.domain.entities import ScanResult, TokenUsage, Violation

AI_GROUP = "AI fixes available"
AUTO_GROUP = "Auto fixes"
NEXT_GROUP = "Next.js-specific"
WARNING_GROUP = "Warnings (manual review needed)"
GROUP_ORDER = (AI_GROUP, AUTO_GROUP, NEXT_GROUP, WARNING_GROUP)

BADGE_STYLES = {"Good": "bold green", "Needs work": "bold yellow", "Poor": "bold red"}


class ScanReporter(Protocol):
    """Protocol for reporting scan results."""

    def report(self, result: "ScanResult", usage: Optional["TokenUsage"] = None) -> None:
        """Report scan results to the user."""
        ...


class ReportGrouping:
    """Assigns violations to the report sections."""

    @staticmethod
    def group_of(violation: "Violation") -> str:
        if violation.rule.startswith("next-"):
            return NEXT_GROUP
        if violation.fix is None:
            return WARNING_GROUP
        rule = RULES_BY_ID.get(violation.rule)
        if rule is not None and rule.type is RuleType.AI:
            return AI_GROUP
        return AUTO_GROUP

    @classmethod
    def group(cls, violations: list["Violation"]) -> dict[str, dict[str, list["Violation"]]]:
        """Section -> rule id -> violations, sections in display order."""
        grouped: dict[str, dict[str, list["Violation"]]] = {name: {} for name in GROUP_ORDER}
        for violation in violations:
            grouped[cls.group_of(violation)].setdefault(violation.rule, []).append(violation)
        return {name: rules for name, rules in grouped.items() if rules}

    @staticmethod
    def points(rule_id: str, count: int) -> str:
        cost = ScoreCalculator.weight(rule_id) * count
        return f"-{cost:g} pts"


class TerminalScanReporter:
    """Terminal reporter using rich for the grouped violation listing."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    @staticmethod
    def display_path(path: str) -> str:
        try:
            relative = os.path.relpath(path)
        except ValueError:
            return path
        return path if relative.startswith("..") else relative

    def report(self, result: "ScanResult", usage: Optional["TokenUsage"] = None) -> None:
        """Print the grouped violations, the summary line, the score and its delta."""
        self.console.print()
        self.console.rule("[bold blue]Accessibility Report")
        self.console.print(
            f"Scanned {result.files_scanned} file(s), {result.elements_scanned} JSX element(s)")

        for name, rules in ReportGrouping.group(result.violations).items():
            self.console.print()
            self.console.print(f"[bold]{name}[/]")
            table = Table(show_header=False, box=None, padding=(0, 1))
            table.add_column("Count", style="yellow", justify="right")
            table.add_column("Rule", style="cyan")
            table.add_column("Description")
            table.add_column("Cost", style="red", justify="right")
            for rule_id, violations in rules.items():
                rule = RULES_BY_ID.get(rule_id)
                description = rule.description if rule is not None else rule_id
                table.add_row(str(len(violations)), rule_id, escape(description),
                              ReportGrouping.points(rule_id, len(violations)))
            self.console.print(table)
            for violations in rules.values():
                for violation in violations:
                    location = f"{self.display_path(violation.file_path)}:{violation.line}:{violation.column}"
                    self.console.print(f"    [dim]{escape(location)}[/] {escape(violation.message)}")

        self.console.print()
        if not result.violations and not result.fixed_count:
            self.console.print("[bold green]✅ No accessibility issues found![/]")
        self.console.print(self.summary_line(result))
        if usage is not None and usage.total:
            self.console.print(f"Tokens used: {usage.total} ({usage.input_tokens} in, {usage.output_tokens} out)")
        badge = ScoreCalculator.badge(result.score)
        self.console.print(f"Score: [{BADGE_STYLES[badge]}]{result.score}/100 ({badge})[/]")
        delta = self.delta_line(result)
        if delta:
            self.console.print(delta)

    @staticmethod
    def summary_line(result: "ScanResult") -> str:
        if result.fixed_count:
            remaining = f" · {len(result.violations)} remaining" if result.violations else ""
            return f"{result.fixed_count} fixed{remaining}"
        parts = [f"{result.fixable_count} fixable", f"{result.warning_count} warnings"]
        if result.fixable_count:
            parts.append("Run --fix to apply")
        return " · ".join(parts)

    @staticmethod
    def delta_line(result: "ScanResult") -> Optional[str]:
        """'Score: 80 -> 92 (+12 pts)' when a previous score is known."""
        delta = result.score_delta
        if delta is None or result.previous_score is None:
            return None
        return f"Score: {result.previous_score} -> {result.score} ({delta:+d} pts)"


class JsonScanReporter:
    """Machine-readable report on stdout."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    @staticmethod
    def render(result: "ScanResult", usage: Optional["TokenUsage"] = None) -> str:
        data = result.to_dict()
        data["badge"] = ScoreCalculator.badge(result.score)
        if usage is not None:
            data["tokens"] = {"input": usage.input_tokens, "output": usage.output_tokens, "total": usage.total}
        return json.dumps(data, indent=2, ensure_ascii=False)

    def report(self, result: "ScanResult", usage: Optional["TokenUsage"] = None) -> None:
        self.console.print(self.render(result, usage), markup=False, highlight=False, soft_wrap=True)
