"""heading-order: heading levels should not skip."""

from next_a11y.domain.entities import RuleType, Violation
from next_a11y.domain.rules import BaseRule
from next_a11y.domain.source import SourceFile

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


class HeadingOrderRule(BaseRule):
    id = "heading-order"
    type = RuleType.DETECT
    description = "Heading levels should only increase by one"

    def scan(self, file: SourceFile) -> list[Violation]:
        headings = file.jsx_elements(*HEADING_TAGS)
        violations: list[Violation] = []
        for previous, current in zip(headings, headings[1:]):
            previous_level = int(previous.tag[1])
            current_level = int(current.tag[1])
            if current_level > previous_level + 1:
                violations.append(self.violation_at(
                    current,
                    f"Heading level skipped: expected h{previous_level + 1} but found {current.tag}",
                    snippet=f"<{current.tag}>",
                ))
        return violations
