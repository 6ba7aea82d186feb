"""no-div-interactive: clickable generic elements are invisible to keyboards."""

from next_a11y.domain.entities import RuleType, Violation
from next_a11y.domain.rules import BaseRule
from next_a11y.domain.source import SourceFile

INTERACTIVE_TAGS = ("div", "span")


class NoDivInteractiveRule(BaseRule):
    id = "no-div-interactive"
    type = RuleType.DETECT
    description = "Clickable <div>/<span> should be a <button> or have role and tabIndex"

    def scan(self, file: SourceFile) -> list[Violation]:
        return [
            self.violation_at(
                element,
                f"Interactive <{element.tag}> should be a <button> or have role and tabIndex",
                snippet=f"<{element.tag}>",
            )
            for element in file.jsx_elements(*INTERACTIVE_TAGS)
            if element.has_attribute("onClick")
            and not (element.has_attribute("role") and element.has_attribute("tabIndex"))
        ]
