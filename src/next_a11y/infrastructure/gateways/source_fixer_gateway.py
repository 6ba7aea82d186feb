"""Tree-sitter based Fixer Gateway."""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from next_a11y.domain.deferred import DeferredResolver
from next_a11y.domain.entities import FixType, Violation
from next_a11y.domain.protocols import SourceFixerProtocol, SourceParserProtocol
from next_a11y.domain.rules.next_link_no_nested_a import NextLinkNoNestedARule
from next_a11y.domain.rules.next_metadata_title import NextMetadataTitleRule
from next_a11y.domain.rules.no_positive_tabindex import NoPositiveTabindexRule
from next_a11y.domain.source import JsxElement, SourceFile

logger = logging.getLogger(__name__)

OPENING_TAG = re.compile(r"<([A-Za-z][\w.:-]*)")


@dataclass(frozen=True)
class Splice:
    """Replace ``data[start:end]`` with ``text``."""
    start: int
    end: int
    text: str


Applier = Callable[[SourceFile, Violation, str], list[Splice]]


class SourceFixerGateway(SourceFixerProtocol):
    """
    Applies fixes to one file's text in memory.

    Fixes run in descending anchor order and the text is reparsed after every
    edit, so the anchors of the remaining fixes still point at their nodes.
    Nothing touches the disk here; the caller writes the result.
    """

    def __init__(self, parser: SourceParserProtocol) -> None:
        self._parser = parser
        self._generic: dict[FixType, Applier] = {
            FixType.INSERT_ATTR: self._insert_attr,
            FixType.REPLACE_ATTR: self._replace_attr,
            FixType.INSERT_METADATA: self._insert_metadata,
            FixType.INSERT_ELEMENT: self._insert_element,
            FixType.REMOVE_ELEMENT: self._remove_line,
            FixType.WRAP_ELEMENT: self._wrap_emoji,
        }
        self._bespoke: dict[str, Applier] = {
            "next-link-no-nested-a": self._unwrap_nested_anchor,
            "emoji-alt": self._wrap_emoji,
            "no-positive-tabindex": self._reset_tabindex,
        }

    def apply(self, file: SourceFile, violations: list[Violation]) -> tuple[str, list[Violation]]:
        """
        Apply every fix in ``violations`` that can be resolved and located.

        Returns:
            The rewritten text and the violations whose fix was applied.
        """
        fixable = [v for v in violations if v.fix is not None]
        ordered = sorted(fixable, key=lambda v: (v.anchor or 0, v.line, v.column), reverse=True)
        current = file
        applied: list[Violation] = []
        for violation in ordered:
            fix = violation.fix
            if fix is None:
                continue
            try:
                value = DeferredResolver.resolve(fix)
            except KeyError as exc:
                logger.warning("Skipping %s fix at %s: %s", violation.rule, violation.location, exc)
                continue
            if value is None:
                continue
            applier = self._bespoke.get(violation.rule) or self._generic.get(fix.type)
            if applier is None:
                continue
            splices = applier(current, violation, value)
            if not splices:
                continue
            text = self.splice(current.data, splices)
            reparsed = self._parser.parse_text(current.path, text)
            if reparsed is None:
                logger.warning("Fix for %s at %s produced invalid syntax; skipped",
                               violation.rule, violation.location)
                continue
            current = reparsed
            applied.append(violation)
        return current.text, applied

    @staticmethod
    def splice(data: bytes, splices: list[Splice]) -> str:
        """Apply non-overlapping splices, highest offset first."""
        for edit in sorted(splices, key=lambda s: s.start, reverse=True):
            data = data[:edit.start] + edit.text.encode("utf-8") + data[edit.end:]
        return data.decode("utf-8")

    @staticmethod
    def locate(file: SourceFile, violation: Violation, tags: Optional[tuple[str, ...]] = None) -> Optional[JsxElement]:
        """Element opening at the violation anchor, else the first candidate opening on its line."""
        if violation.anchor is not None:
            element = file.element_at_offset(violation.anchor)
            if element is not None and (tags is None or element.tag in tags):
                return element
        for element in file.jsx_elements(*(tags or ())):
            if element.line == violation.line:
                return element
        return None

    @staticmethod
    def _expected_tag(violation: Violation) -> Optional[tuple[str, ...]]:
        """Tag the violation was raised on, else the one named by a ``<button ...>`` snippet."""
        if violation.tag:
            return (violation.tag,)
        match = OPENING_TAG.match(violation.element)
        return (match.group(1),) if match else None

    def _element(self, file: SourceFile, violation: Violation) -> Optional[JsxElement]:
        return self.locate(file, violation, self._expected_tag(violation))

    @staticmethod
    def attribute_text(name: str, value: str) -> str:
        """``name="value"`` with quotes escaped, or ``name={...}`` for expression values."""
        if value.startswith("{"):
            return f"{name}={value}"
        return f'{name}="{value.replace(chr(34), "&quot;")}"'

    @staticmethod
    def _attribute(violation: Violation) -> Optional[str]:
        return violation.fix.attribute if violation.fix is not None else None

    def _insert_attr(self, file: SourceFile, violation: Violation, value: str) -> list[Splice]:
        name = self._attribute(violation)
        element = self._element(file, violation)
        if name is None or element is None or element.name_node is None or element.has_attribute(name):
            return []
        at = element.name_node.end_byte
        return [Splice(at, at, " " + self.attribute_text(name, value))]

    def _replace_attr(self, file: SourceFile, violation: Violation, value: str) -> list[Splice]:
        name = self._attribute(violation)
        element = self._element(file, violation)
        if name is None or element is None:
            return []
        attr = element.attribute(name)
        if attr is None:
            return self._insert_attr(file, violation, value)
        replacement = self.attribute_text(attr.name, value)
        return [Splice(attr.node.start_byte, attr.node.end_byte, replacement)]

    def _reset_tabindex(self, file: SourceFile, violation: Violation, value: str) -> list[Splice]:
        element = self.locate(file, violation, self._expected_tag(violation) or (violation.element,))
        attr = element.attribute("tabIndex") if element is not None else None
        if attr is None:
            return []
        current = NoPositiveTabindexRule.literal_value(attr)
        if current is None or current <= 0:
            return []
        if attr.expression is not None:
            return [Splice(attr.expression.start_byte, attr.expression.end_byte, value)]
        if attr.value_node is None:
            return []
        return [Splice(attr.value_node.start_byte, attr.value_node.end_byte, f"{{{value}}}")]

    @staticmethod
    def _escape_string(value: str) -> str:
        return value.replace("\\", "\\\\").replace('"', '\\"')

    def _insert_metadata(self, file: SourceFile, violation: Violation, value: str) -> list[Splice]:
        name = self._attribute(violation)
        if name is None:
            return []
        prop = f'{name}: "{self._escape_string(value)}"'
        metadata = NextMetadataTitleRule.metadata_object(file)
        if metadata is not None:
            for pair in metadata.named_children:
                key = pair.child_by_field_name("key") if pair.type == "pair" else None
                if key is not None and file.node_text(key).strip("'\"") == name:
                    return []
            at = metadata.start_byte + 1
            if not metadata.named_children:
                return [Splice(at, metadata.end_byte - 1, f" {prop} ")]
            separator = "\n  " if "\n" in file.node_text(metadata) else " "
            return [Splice(at, at, f"{separator}{prop},")]
        declaration = f"export const metadata = {{ {prop} }};"
        last_import = file.last_import()
        if last_import is not None:
            return [Splice(last_import.end_byte, last_import.end_byte, f"\n\n{declaration}")]
        return [Splice(0, 0, f"{declaration}\n\n")]

    @staticmethod
    def _line_span(file: SourceFile, line: int) -> Optional[tuple[int, int]]:
        """Byte span of a 1-indexed line, trailing newline included."""
        data = file.data
        start = 0
        for _ in range(line - 1):
            newline = data.find(b"\n", start)
            if newline < 0:
                return None
            start = newline + 1
        end = data.find(b"\n", start)
        return start, len(data) if end < 0 else end + 1

    def _insert_element(self, file: SourceFile, violation: Violation, value: str) -> list[Splice]:
        span = self._line_span(file, violation.line)
        if span is None:
            return []
        line = file.data[span[0]:span[1]].decode("utf-8")
        indent = line[:len(line) - len(line.lstrip())]
        return [Splice(span[0], span[0], f"{indent}{value}\n")]

    def _remove_line(self, file: SourceFile, violation: Violation, value: str) -> list[Splice]:
        span = self._line_span(file, violation.line)
        return [Splice(span[0], span[1], "")] if span is not None else []

    def _wrap_emoji(self, file: SourceFile, violation: Violation, value: str) -> list[Splice]:
        emoji = violation.element.encode("utf-8")
        start = violation.anchor
        if start is None or file.data[start:start + len(emoji)] != emoji:
            span = self._line_span(file, violation.line)
            found = file.data.find(emoji, *span) if span is not None else -1
            if found < 0:
                return []
            start = found
        wrapped = f'<span role="img" aria-label="{value.replace(chr(34), "&quot;")}">{violation.element}</span>'
        return [Splice(start, start + len(emoji), wrapped)]

    def _unwrap_nested_anchor(self, file: SourceFile, violation: Violation, value: str) -> list[Splice]:
        """Move the nested ``<a>``'s attributes (except href) onto the Link, then drop the ``<a>`` tags."""
        link = self._element(file, violation)
        anchor = NextLinkNoNestedARule.nested_anchor(link) if link is not None else None
        if link is None or anchor is None or link.name_node is None:
            return []
        hoisted = [
            file.node_text(attr.node)
            for attr in anchor.attributes()
            if attr.name != "href" and not link.has_attribute(attr.name)
        ]
        splices: list[Splice] = []
        if hoisted:
            at = link.name_node.end_byte
            splices.append(Splice(at, at, " " + " ".join(hoisted)))
        if anchor.is_self_closing:
            splices.append(Splice(anchor.node.start_byte, anchor.node.end_byte, ""))
        else:
            close_tag = anchor.node.child_by_field_name("close_tag")
            inner_end = close_tag.start_byte if close_tag is not None else anchor.node.end_byte
            inner = file.data[anchor.opening.end_byte:inner_end].decode("utf-8")
            splices.append(Splice(anchor.node.start_byte, anchor.node.end_byte, inner))
        return splices
