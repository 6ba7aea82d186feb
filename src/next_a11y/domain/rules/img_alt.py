"""img-alt: images need meaningful alternative text."""

from typing import Optional

from tree_sitter import Node

from next_a11y.domain.alt_text import AltClassification, AltTextClassifier
from next_a11y.domain.deferred import IMG_ALT, DeferredResolver
from next_a11y.domain.entities import Fix, RuleType, Violation
from next_a11y.domain.label_variable import LabelVariableFinder
from next_a11y.domain.rules import BaseRule, local_default_import
from next_a11y.domain.source import JsxElement, SourceFile, unwrap_parentheses

_COMPUTED_KINDS = ("call_expression", "ternary_expression", "template_string")


class ImgAltRule(BaseRule):
    """
    Flags ``<img>`` and next/image ``<Image>`` with missing, meaningless or
    unverifiable alt text.

    Options:
        fillAlt: also flag ``alt=""`` so decorative images get a description.
    """

    id = "img-alt"
    type = RuleType.AI
    description = "Images must have meaningful alt text"

    def scan(self, file: SourceFile) -> list[Violation]:
        image_tag = local_default_import(file, "next/image", "Image")
        tags = ("img", image_tag) if image_tag else ("img",)
        violations: list[Violation] = []
        for element in file.jsx_elements(*tags):
            violation = self._check(element)
            if violation is not None:
                violations.append(violation)
        return violations

    def _check(self, element: JsxElement) -> Optional[Violation]:
        alt_value, is_expression = self.alt_value(element)
        classification = AltTextClassifier.classify(alt_value, is_expression)
        fix_value = DeferredResolver.deferred(IMG_ALT, src=self.source_text(element))

        if classification is AltClassification.MISSING:
            return self.violation_at(element, "Image is missing alt text", Fix.insert_attr("alt", fix_value))
        if classification is AltClassification.MEANINGLESS:
            return self.violation_at(
                element,
                f'Image has meaningless alt text: "{alt_value}"',
                Fix.replace_attr("alt", fix_value),
            )
        if classification is AltClassification.DECORATIVE and self.option("fillAlt", True):
            return self.violation_at(element, "Image has empty alt text", Fix.replace_attr("alt", fix_value))
        if classification is AltClassification.DYNAMIC and not self._is_trusted_expression(element):
            return self.violation_at(
                element, f"Image alt is a dynamic value that cannot be verified: {{{alt_value}}}")
        return None

    @staticmethod
    def alt_value(element: JsxElement) -> tuple[Optional[str], bool]:
        """(value, is_expression); a bare ``alt`` and ``{""}`` both read as empty."""
        attr = element.attribute("alt")
        if attr is None:
            return None, False
        if attr.is_boolean:
            return "", False
        literal = attr.string_value()
        if literal is not None:
            return literal, False
        expression = attr.expression_text()
        if expression is None:
            return "", False
        return expression, True

    @staticmethod
    def source_text(element: JsxElement) -> Optional[str]:
        """Literal ``src`` or the source text of its expression."""
        attr = element.attribute("src")
        if attr is None:
            return None
        literal = attr.string_value()
        if literal is not None:
            return literal
        return attr.expression_text()

    @staticmethod
    def _is_trusted_expression(element: JsxElement) -> bool:
        """Alt expressions inside list callbacks, or computed ones, are assumed intentional."""
        if LabelVariableFinder.enclosing_iteration_callback(element.file, element.node) is not None:
            return True
        attr = element.attribute("alt")
        expression: Optional[Node] = attr.expression if attr is not None else None
        if expression is None:
            return False
        expression = unwrap_parentheses(expression)
        if expression.type in _COMPUTED_KINDS:
            return True
        return any(True for _ in element.file.descendants(*_COMPUTED_KINDS, node=expression))
