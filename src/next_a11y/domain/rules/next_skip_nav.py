"""next-skip-nav: root layouts should offer a skip link."""

import re

from next_a11y.domain.entities import RuleType, Violation
from next_a11y.domain.rules import BaseRule
from next_a11y.domain.source import SourceFile

LAYOUT_FILE_PATTERN = re.compile(r"\blayout\.(tsx|jsx)$")
_SKIP_TEXT = re.compile(r"skip", re.IGNORECASE)


class NextSkipNavRule(BaseRule):
    id = "next-skip-nav"
    type = RuleType.DETECT
    description = "Root layout should include a skip navigation link"

    def scan(self, file: SourceFile) -> list[Violation]:
        if not LAYOUT_FILE_PATTERN.search(file.posix_path):
            return []
        for anchor in file.jsx_elements("a"):
            href = anchor.attribute("href")
            if href is not None and href.string_value() == "#main-content":
                return []
            if not anchor.is_self_closing:
                rendered = " ".join(file.node_text(child) for child in anchor.children())
                if _SKIP_TEXT.search(rendered):
                    return []
        return [self.file_violation(file, "layout", "Root layout is missing a skip navigation link")]
