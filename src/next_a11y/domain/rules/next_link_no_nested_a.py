"""next-link-no-nested-a: next/link renders its own anchor."""

from typing import Optional

from next_a11y.domain.entities import Fix, Literal, RuleType, Violation
from next_a11y.domain.rules import BaseRule, local_default_import
from next_a11y.domain.source import JsxElement, SourceFile

MESSAGE = (
    "<Link> from next/link should not contain a nested <a> element. "
    "Since Next.js 13, <Link> renders an <a> automatically."
)


class NextLinkNoNestedARule(BaseRule):
    id = "next-link-no-nested-a"
    type = RuleType.DETERMINISTIC
    description = "next/link <Link> must not wrap an <a>"

    @staticmethod
    def nested_anchor(link: JsxElement) -> Optional[JsxElement]:
        """First direct ``<a>`` child of ``link``."""
        for child in link.child_elements():
            if child.tag == "a":
                return child
        return None

    def scan(self, file: SourceFile) -> list[Violation]:
        link = local_default_import(file, "next/link", "Link")
        if link is None:
            return []
        return [
            self.violation_at(element, MESSAGE, Fix.remove_element(Literal("")), snippet=f"<{link}>")
            for element in file.jsx_elements(link)
            if self.nested_anchor(element) is not None
        ]
