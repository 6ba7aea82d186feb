"""no-positive-tabindex: positive tabIndex values break the natural focus order."""

from typing import Optional

from next_a11y.domain.entities import Fix, Literal, RuleType, Violation
from next_a11y.domain.rules import BaseRule
from next_a11y.domain.source import JsxAttribute, SourceFile, unwrap_parentheses


class NoPositiveTabindexRule(BaseRule):
    id = "no-positive-tabindex"
    type = RuleType.DETERMINISTIC
    description = "Avoid positive tabIndex values"

    @staticmethod
    def literal_value(attr: JsxAttribute) -> Optional[int]:
        """Integer value of ``tabIndex={3}`` or ``tabIndex="3"``; None when dynamic."""
        expression = attr.expression
        if expression is not None:
            expression = unwrap_parentheses(expression)
            if expression.type != "number":
                return None
            text = attr.file.node_text(expression)
        else:
            text = attr.string_value()
        if text is None:
            return None
        try:
            return int(text)
        except ValueError:
            return None

    def scan(self, file: SourceFile) -> list[Violation]:
        violations: list[Violation] = []
        for element in file.jsx_elements():
            attr = element.attribute("tabIndex")
            if attr is None:
                continue
            value = self.literal_value(attr)
            if value is None or value <= 0:
                continue
            line, column = file.node_position(attr.node)
            violations.append(Violation(
                rule=self.id,
                file_path=file.path,
                line=line,
                column=column,
                element=element.tag,
                message=f"Avoid using positive tabIndex value ({value}). Use tabIndex={{0}} or tabIndex={{-1}} instead.",
                fix=Fix.replace_attr("tabIndex", Literal("0")),
                anchor=element.anchor,
                tag=element.tag,
            ))
        return violations
