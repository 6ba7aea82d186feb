"""link-noopener: ``target="_blank"`` links must not expose ``window.opener``."""

from next_a11y.domain.entities import Fix, Literal, RuleType, Violation
from next_a11y.domain.rules import BaseRule, local_default_import
from next_a11y.domain.source import SourceFile

REQUIRED_REL_TOKENS = ("noopener", "noreferrer")


class LinkNoopenerRule(BaseRule):
    id = "link-noopener"
    type = RuleType.DETERMINISTIC
    description = 'target="_blank" links need rel="noopener noreferrer"'

    @staticmethod
    def merge_rel(current: str) -> str:
        """Add the missing tokens to an existing ``rel`` value, keeping the others."""
        tokens = current.split()
        for token in REQUIRED_REL_TOKENS:
            if token not in tokens:
                tokens.append(token)
        return " ".join(tokens)

    def scan(self, file: SourceFile) -> list[Violation]:
        link = local_default_import(file, "next/link", "Link")
        tags = ("a", link) if link else ("a",)
        violations: list[Violation] = []
        for element in file.jsx_elements(*tags):
            target = element.attribute("target")
            if target is None or target.string_value() != "_blank":
                continue
            rel = element.attribute("rel")
            if rel is None:
                fix = Fix.insert_attr("rel", Literal("noopener noreferrer"))
            else:
                current = rel.string_value()
                if current is None:
                    # Dynamic rel values are left to the author.
                    continue
                if all(token in current.split() for token in REQUIRED_REL_TOKENS):
                    continue
                fix = Fix.replace_attr("rel", Literal(self.merge_rel(current)))
            message = f'<{element.tag} target="_blank"> is missing rel="noopener noreferrer". This is a security risk.'
            violations.append(self.violation_at(element, message, fix, snippet=element.opening_snippet()))
        return violations
