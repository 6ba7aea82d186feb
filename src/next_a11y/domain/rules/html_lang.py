"""html-lang: the root ``<html>`` element must declare its language."""

from next_a11y.domain.entities import Fix, Literal, RuleType, Violation
from next_a11y.domain.icon_labels import IconLabels
from next_a11y.domain.rules import BaseRule
from next_a11y.domain.source import SourceFile

MESSAGE = "The <html> element must have a `lang` attribute for accessibility (WCAG 3.1.1)."


class HtmlLangRule(BaseRule):
    id = "html-lang"
    type = RuleType.DETERMINISTIC
    description = "<html> must have a lang attribute"

    @staticmethod
    def is_root_document(path: str) -> bool:
        normalized = path.replace("\\", "/")
        return "layout" in normalized or "_document" in normalized

    def scan(self, file: SourceFile) -> list[Violation]:
        if not self.is_root_document(file.path):
            return []
        lang = IconLabels.base_locale(self._locale) or "en"
        return [
            self.violation_at(element, MESSAGE, Fix.insert_attr("lang", Literal(lang)), snippet="<html>")
            for element in file.jsx_elements("html")
            if not element.has_attribute("lang")
        ]
