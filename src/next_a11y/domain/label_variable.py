"""Loop-variable lookup for labels of elements rendered inside list callbacks."""

import re
from typing import Optional

from tree_sitter import Node

from next_a11y.domain.source import JsxElement, SourceFile

LABEL_PROPERTIES = ("label", "name", "title", "heading", "text")
FALLBACK_PROPERTY_PATTERN = re.compile(r"^(label|name|title|heading|text|id|placeholder)$", re.IGNORECASE)
ITERATION_METHODS = (".map", ".flatMap", ".forEach")


class LabelVariableFinder:
    """
    Finds a property of a list callback's parameter that can make a label unique.

    ``sections.map((section) => <a aria-label="Go to">{section.label}</a>)``
    yields ``section.label``.
    """

    @staticmethod
    def enclosing_iteration_callback(file: SourceFile, node: Node) -> Optional[Node]:
        """Nearest function that is passed directly to ``.map``/``.flatMap``/``.forEach``."""
        current = node.parent
        while current is not None:
            if current.type in ("arrow_function", "function_expression"):
                arguments = current.parent
                call = arguments.parent if arguments is not None and arguments.type == "arguments" else None
                if call is not None and call.type == "call_expression":
                    callee = call.child_by_field_name("function")
                    if callee is not None and file.node_text(callee).endswith(ITERATION_METHODS):
                        return current
            current = current.parent
        return None

    @staticmethod
    def first_parameter_name(file: SourceFile, function: Node) -> Optional[str]:
        """Name of the first parameter when it is a plain identifier."""
        single = function.child_by_field_name("parameter")
        if single is not None:
            return file.node_text(single) if single.type == "identifier" else None
        parameters = function.child_by_field_name("parameters")
        if parameters is None:
            return None
        for param in parameters.named_children:
            if param.type == "identifier":
                return file.node_text(param)
            if param.type in ("required_parameter", "optional_parameter"):
                pattern = param.child_by_field_name("pattern")
                if pattern is not None and pattern.type == "identifier":
                    return file.node_text(pattern)
                return None
            if param.type == "comment":
                continue
            return None
        return None

    @staticmethod
    def _property_accesses(file: SourceFile, root: Node, param: str) -> list[tuple[str, str]]:
        """(full text, property name) of ``param.prop`` accesses under ``root`` in document order."""
        found: list[tuple[str, str]] = []
        nodes = [root] if root.type == "member_expression" else []
        nodes.extend(file.descendants("member_expression", node=root))
        for node in nodes:
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is None or prop is None or obj.type != "identifier":
                continue
            if file.node_text(obj) != param:
                continue
            found.append((file.node_text(node), file.node_text(prop)))
        return found

    @classmethod
    def find(cls, element: JsxElement, used_in_content: bool = False) -> Optional[str]:
        """
        Return ``param.prop`` for the best label property in scope, or None.

        Args:
            element: the element that needs a label.
            used_in_content: only accept accesses that the element also renders
                in its children. Used when rewriting an existing literal label.
        """
        file = element.file
        callback = cls.enclosing_iteration_callback(file, element.node)
        if callback is None:
            return None
        param = cls.first_parameter_name(file, callback)
        if param is None:
            return None
        body = callback.child_by_field_name("body")
        if body is None:
            return None
        accesses = cls._property_accesses(file, body, param)

        if used_in_content:
            rendered: set[str] = set()
            for child in element.children():
                rendered.update(text for text, _ in cls._property_accesses(file, child, param))
            accesses = [(text, prop) for text, prop in accesses if text in rendered]

        for preferred in LABEL_PROPERTIES:
            for text, prop in accesses:
                if prop == preferred:
                    return text
        for text, prop in accesses:
            if FALLBACK_PROPERTY_PATTERN.match(prop):
                return text
        return None

    @staticmethod
    def escape_template(text: str) -> str:
        """``text`` with template-literal syntax escaped so it renders verbatim inside backticks."""
        return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")

    @classmethod
    def wrap(cls, base_label: str, variable: str) -> str:
        """JSX expression interpolating ``variable`` after ``base_label``."""
        return "{`" + cls.escape_template(base_label) + " ${" + variable + "}`}"

