"""button-type: native buttons should declare their type."""

from next_a11y.domain.entities import Fix, Literal, RuleType, Violation
from next_a11y.domain.rules import BaseRule
from next_a11y.domain.source import SourceFile

NATIVE_MESSAGE = (
    'Native <button> elements should have an explicit "type" attribute to avoid unexpected form submissions.'
)


class ButtonTypeRule(BaseRule):
    """
    ``<button>`` defaults to ``type="submit"`` inside forms.

    Options:
        scanCustomComponents: also report PascalCase components whose name
            contains "button". They are reported without a fix since the
            component may not forward ``type``.
    """

    id = "button-type"
    type = RuleType.DETERMINISTIC
    description = "Buttons must have an explicit type"

    def scan(self, file: SourceFile) -> list[Violation]:
        scan_custom = self.option("scanCustomComponents", False)
        violations: list[Violation] = []
        for element in file.jsx_elements():
            tag = element.tag
            if element.has_attribute("type"):
                continue
            if tag == "button":
                violations.append(self.violation_at(
                    element, NATIVE_MESSAGE, Fix.insert_attr("type", Literal("button")), snippet="<button>"))
            elif scan_custom and tag[:1].isupper() and "button" in tag.lower():
                violations.append(self.violation_at(
                    element,
                    f'Custom component <{tag}> may render a <button> without an explicit "type" attribute. '
                    'Consider passing type="button".',
                    snippet=f"<{tag}>",
                ))
        return violations
