"""Rule contract and helpers shared by the accessibility rules."""

from typing import TYPE_CHECKING, Optional, Protocol

from tree_sitter import Node

from next_a11y.domain.entities import Fix, RuleType, Violation
from next_a11y.domain.icon_labels import DEFAULT_ICON_CLASSIFIER, IconClassifier
from next_a11y.domain.source import JsxElement, SourceFile

__all__ = [
    "BaseRule",
    "Rule",
    "content_expressions",
    "has_visible_content",
    "local_default_import",
]

if TYPE_CHECKING:
    from next_a11y.domain.config import RuleConfig


class Rule(Protocol):
    """A single accessibility check over one parsed file."""

    id: str
    type: RuleType
    description: str

    def scan(self, file: SourceFile) -> list[Violation]:
        """Return violations for ``file``. Must not mutate it."""
        ...


class BaseRule:
    """
    Common state for concrete rules.

    Subclasses set ``id``, ``type`` and ``description`` and implement ``scan``.
    Options come from the rule's resolved ``RuleConfig``; icon-shape questions
    go through the injected ``IconClassifier``.
    """

    id: str = ""
    type: RuleType = RuleType.DETECT
    description: str = ""

    def __init__(
        self,
        config: Optional["RuleConfig"] = None,
        locale: str = "en",
        icon_classifier: IconClassifier = DEFAULT_ICON_CLASSIFIER,
    ) -> None:
        self._config = config
        self._locale = locale
        self._icons = icon_classifier

    def option(self, name: str, default: bool = False) -> bool:
        if self._config is None:
            return default
        return self._config.option(name, default)

    def scan(self, file: SourceFile) -> list[Violation]:
        raise NotImplementedError

    def violation_at(
        self,
        element: JsxElement,
        message: str,
        fix: Optional[Fix] = None,
        snippet: Optional[str] = None,
    ) -> Violation:
        """Build a violation located at ``element`` and anchored to its start byte."""
        line, column = element.file.node_position(element.node)
        return Violation(
            rule=self.id,
            file_path=element.file.path,
            line=line,
            column=column,
            element=snippet if snippet is not None else element.text,
            message=message,
            fix=fix,
            anchor=element.anchor,
            tag=element.tag,
        )

    def file_violation(self, file: SourceFile, element: str, message: str, fix: Optional[Fix] = None) -> Violation:
        """Violation that concerns the file as a whole (line 1, column 1)."""
        return Violation(rule=self.id, file_path=file.path, line=1, column=1,
                         element=element, message=message, fix=fix, anchor=0)


def local_default_import(file: SourceFile, module: str, name: str) -> Optional[str]:
    """
    Local name bound to ``module``'s default export (or a named export ``name``).

    ``import Image from "next/image"`` returns "Image"; ``import Img from "next/image"``
    returns "Img"; no import returns None.
    """
    for binding in file.imports_from(module):
        if binding.imported in ("default", name):
            return binding.local
    return None


def content_expressions(element: JsxElement) -> list[Node]:
    """Non-empty ``{...}`` children rendered by ``element``, attribute values excluded."""
    found: list[Node] = []
    if element.is_self_closing:
        return found
    for node in element.file.descendants("jsx_expression", node=element.node):
        parent = node.parent
        if parent is not None and parent.type in ("jsx_attribute", "jsx_opening_element", "jsx_self_closing_element"):
            continue
        if any(child.type != "comment" for child in node.named_children):
            found.append(node)
    return found


def has_visible_content(element: JsxElement) -> bool:
    """True when ``element`` renders non-whitespace text or an expression child."""
    if element.text_content():
        return True
    return bool(content_expressions(element))
