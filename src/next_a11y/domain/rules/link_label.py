"""link-label: links need an accessible name."""

from next_a11y.domain.entities import RuleType
from next_a11y.domain.rules import has_visible_content, local_default_import
from next_a11y.domain.rules.accessible_name import AccessibleNameRule
from next_a11y.domain.source import JsxElement, SourceFile


class LinkLabelRule(AccessibleNameRule):
    """``<a>`` and next/link ``<Link>`` without text, expression or described image."""

    id = "link-label"
    type = RuleType.AI
    description = "Links must have an accessible name"
    term = "Link"
    message = "Link has no accessible name"

    def tags(self, file: SourceFile) -> tuple[str, ...]:
        link = local_default_import(file, "next/link", "Link")
        return ("a", link) if link else ("a",)

    def has_content(self, element: JsxElement) -> bool:
        if has_visible_content(element):
            return True
        return any(self._has_alt(child) for child in element.descendant_elements()
                   if child.tag in ("img", "Image"))

    @staticmethod
    def _has_alt(image: JsxElement) -> bool:
        alt = image.attribute("alt")
        if alt is None or alt.is_boolean:
            return False
        literal = alt.string_value()
        if literal is not None:
            return bool(literal.strip())
        return True
