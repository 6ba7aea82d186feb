"""input-label: form controls need an associated label."""

from typing import Optional

from next_a11y.domain.deferred import INPUT_LABEL, DeferredResolver
from next_a11y.domain.entities import Fix, RuleType, Violation
from next_a11y.domain.rules import BaseRule
from next_a11y.domain.source import JsxElement, SourceFile

INPUT_TAGS = ("input", "select", "textarea")
UNLABELLED_INPUT_TYPES = frozenset({"hidden", "submit", "button", "reset", "image"})


class InputLabelRule(BaseRule):
    id = "input-label"
    type = RuleType.AI
    description = "Form inputs must have an associated label"

    def scan(self, file: SourceFile) -> list[Violation]:
        violations: list[Violation] = []
        label_targets = self._label_targets(file)
        for element in file.jsx_elements(*INPUT_TAGS):
            input_type = self._string_attribute(element, "type")
            if input_type is not None and input_type.lower() in UNLABELLED_INPUT_TYPES:
                continue
            if element.has_attribute("aria-label") or element.has_attribute("aria-labelledby"):
                continue
            element_id = self._string_attribute(element, "id")
            if element_id and element_id in label_targets:
                continue
            if any(ancestor.tag == "label" for ancestor in element.ancestors()):
                continue
            fix = Fix.insert_attr("aria-label", DeferredResolver.deferred(
                INPUT_LABEL,
                placeholder=self._string_attribute(element, "placeholder"),
                name=self._string_attribute(element, "name"),
                tag=element.tag,
            ))
            violations.append(self.violation_at(element, f"<{element.tag}> is missing an associated label", fix))
        return violations

    @classmethod
    def _label_targets(cls, file: SourceFile) -> set[str]:
        """Literal ``htmlFor`` values of every ``<label>`` in the file."""
        targets: set[str] = set()
        for label in file.jsx_elements("label"):
            target = cls._string_attribute(label, "htmlFor")
            if target:
                targets.add(target)
        return targets

    @staticmethod
    def _string_attribute(element: JsxElement, name: str) -> Optional[str]:
        attr = element.attribute(name)
        return attr.string_value() if attr is not None else None
