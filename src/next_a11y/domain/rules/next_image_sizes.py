"""next-image-sizes: ``<Image fill>`` needs ``sizes``."""

from next_a11y.domain.entities import RuleType, Violation
from next_a11y.domain.rules import BaseRule, local_default_import
from next_a11y.domain.source import JsxElement, SourceFile


class NextImageSizesRule(BaseRule):
    id = "next-image-sizes"
    type = RuleType.DETECT
    description = "<Image fill> should declare sizes"

    @staticmethod
    def is_fill(element: JsxElement) -> bool:
        attr = element.attribute("fill")
        if attr is None:
            return False
        return attr.is_boolean or attr.expression_text() == "true"

    def scan(self, file: SourceFile) -> list[Violation]:
        image = local_default_import(file, "next/image", "Image")
        if image is None:
            return []
        return [
            self.violation_at(
                element,
                "<Image fill> without sizes prop loads full-width image on all viewports",
                snippet=f"<{image}>",
            )
            for element in file.jsx_elements(image)
            if self.is_fill(element) and not element.has_attribute("sizes")
        ]
