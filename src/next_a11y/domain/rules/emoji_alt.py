"""emoji-alt: emoji in JSX text need an accessible name."""

from tree_sitter import Node

from next_a11y.domain.emoji import EMOJI_PATTERN, EmojiNames
from next_a11y.domain.entities import Fix, Literal, RuleType, Violation
from next_a11y.domain.rules import BaseRule
from next_a11y.domain.source import JsxElement, SourceFile


class EmojiAltRule(BaseRule):
    """
    Each emoji sequence in a JSX text node becomes
    ``<span role="img" aria-label="name">emoji</span>``.
    """

    id = "emoji-alt"
    type = RuleType.DETERMINISTIC
    description = "Emoji must be wrapped with role=img and aria-label"

    def scan(self, file: SourceFile) -> list[Violation]:
        violations: list[Violation] = []
        for node in file.descendants("jsx_text"):
            if self._is_labelled_span(file, node):
                continue
            text = file.node_text(node)
            for match in EMOJI_PATTERN.finditer(text):
                emoji = match.group(0)
                offset = node.start_byte + len(text[:match.start()].encode("utf-8"))
                line, column = file.position(offset)
                name = EmojiNames.name(emoji)
                violations.append(Violation(
                    rule=self.id,
                    file_path=file.path,
                    line=line,
                    column=column,
                    element=emoji,
                    message=(
                        f'Emoji "{emoji}" is missing accessible labeling. Wrap it in '
                        f'<span role="img" aria-label="{name}">{emoji}</span> so screen readers '
                        "can announce its meaning."
                    ),
                    fix=Fix.wrap_element(Literal(name)),
                    anchor=offset,
                ))
        return violations

    @staticmethod
    def _is_labelled_span(file: SourceFile, text_node: Node) -> bool:
        parent = text_node.parent
        if parent is None or parent.type != "jsx_element":
            return False
        span = JsxElement(parent, file)
        if span.tag != "span":
            return False
        role = span.attribute("role")
        return role is not None and role.string_value() == "img" and span.has_attribute("aria-label")
