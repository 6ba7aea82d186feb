"""Shared detection for controls that need an accessible name (buttons, links)."""

from typing import Optional

from next_a11y.domain.deferred import ICON_LABEL, DeferredResolver
from next_a11y.domain.entities import Fix, Literal, Violation
from next_a11y.domain.label_variable import LabelVariableFinder
from next_a11y.domain.rules import BaseRule, has_visible_content
from next_a11y.domain.source import JsxElement, SourceFile

VARIABLE_LABEL_MESSAGE = "Use variable in aria-label for better screen reader context"


class AccessibleNameRule(BaseRule):
    """
    Base for button-label and link-label.

    Subclasses provide ``tags(file)``, the generic ``term`` and the ``message``.
    """

    term: str = "Button"
    message: str = ""

    def tags(self, file: SourceFile) -> tuple[str, ...]:
        raise NotImplementedError

    def has_content(self, element: JsxElement) -> bool:
        return has_visible_content(element)

    def scan(self, file: SourceFile) -> list[Violation]:
        violations: list[Violation] = []
        for element in file.jsx_elements(*self.tags(file)):
            if element.has_attribute("aria-labelledby"):
                continue
            aria_label = element.attribute("aria-label")
            if aria_label is not None:
                rewrite = self._variable_rewrite(element)
                if rewrite is not None:
                    violations.append(rewrite)
                continue
            if not element.is_self_closing and self.has_content(element):
                continue
            violations.append(self.violation_at(element, self.message, self._label_fix(element)))
        return violations

    def _label_fix(self, element: JsxElement) -> Fix:
        value = DeferredResolver.deferred(
            ICON_LABEL,
            icon=self._icons.icon_name(element),
            term=self.term,
            locale=self._locale,
            variable=LabelVariableFinder.find(element),
        )
        return Fix.insert_attr("aria-label", value)

    def _variable_rewrite(self, element: JsxElement) -> Optional[Violation]:
        """A fixed literal label on a list item should mention the item it renders."""
        attr = element.attribute("aria-label")
        current = attr.string_value() if attr is not None and not attr.is_boolean else None
        if not current:
            return None
        variable = LabelVariableFinder.find(element, used_in_content=True)
        if variable is None:
            return None
        fix = Fix.replace_attr("aria-label", Literal(LabelVariableFinder.wrap(current, variable)))
        return self.violation_at(element, VARIABLE_LABEL_MESSAGE, fix)
