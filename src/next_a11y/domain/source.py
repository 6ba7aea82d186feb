"""Parsed source files and JSX queries over tree-sitter nodes."""

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Iterator, Optional

from tree_sitter import Node, Tree

JSX_ELEMENT_KINDS = ("jsx_element", "jsx_self_closing_element")
FUNCTION_KINDS = (
    "function_declaration",
    "function_expression",
    "arrow_function",
    "generator_function_declaration",
    "method_definition",
)


@dataclass(frozen=True)
class ImportBinding:
    """One local name bound by an import statement."""
    module: str
    local: str
    imported: str
    """'default' for default imports, '*' for namespace imports, else the exported name."""


@dataclass
class SourceFile:
    """A parsed TSX/JSX file: path, text and syntax tree."""

    path: str
    text: str
    tree: Tree
    _data: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._data = self.text.encode("utf-8")

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def basename(self) -> str:
        return PurePath(self.path).name

    @property
    def posix_path(self) -> str:
        return self.path.replace("\\", "/")

    def node_text(self, node: Node) -> str:
        return self._data[node.start_byte:node.end_byte].decode("utf-8")

    def position(self, offset: int) -> tuple[int, int]:
        """1-indexed (line, column) of a byte offset, column counted in characters."""
        line = self._data.count(b"\n", 0, offset) + 1
        line_start = self._data.rfind(b"\n", 0, offset) + 1
        column = len(self._data[line_start:offset].decode("utf-8", errors="replace")) + 1
        return line, column

    def node_position(self, node: Node) -> tuple[int, int]:
        return self.position(node.start_byte)

    def descendants(self, *kinds: str, node: Optional[Node] = None) -> Iterator[Node]:
        """Yield descendants (document order) whose type is in ``kinds``; all when empty."""
        start = node if node is not None else self.root
        stack = list(reversed(start.children))
        while stack:
            current = stack.pop()
            if not kinds or current.type in kinds:
                yield current
            stack.extend(reversed(current.children))

    def count_descendants(self) -> int:
        return sum(1 for _ in self.descendants())

    def jsx_elements(self, *tags: str) -> list["JsxElement"]:
        """All JSX elements in document order, optionally filtered by tag name."""
        elements = [JsxElement(node, self) for node in self.descendants(*JSX_ELEMENT_KINDS)]
        if tags:
            return [el for el in elements if el.tag in tags]
        return elements

    def element_at(self, node: Node) -> "JsxElement":
        return JsxElement(node, self)

    def element_at_offset(self, offset: int) -> Optional["JsxElement"]:
        """Outermost JSX element starting exactly at ``offset``."""
        for node in self.descendants(*JSX_ELEMENT_KINDS):
            if node.start_byte == offset:
                return JsxElement(node, self)
            if node.start_byte > offset:
                break
        return None

    def imports(self) -> list[ImportBinding]:
        """Local bindings introduced by top-level import statements."""
        bindings: list[ImportBinding] = []
        for statement in self.root.named_children:
            if statement.type != "import_statement":
                continue
            source = statement.child_by_field_name("source")
            if source is None:
                continue
            module = string_literal_value(self, source) or ""
            for clause in statement.named_children:
                if clause.type != "import_clause":
                    continue
                for part in clause.named_children:
                    if part.type == "identifier":
                        bindings.append(ImportBinding(module, self.node_text(part), "default"))
                    elif part.type == "namespace_import":
                        for ident in part.named_children:
                            if ident.type == "identifier":
                                bindings.append(ImportBinding(module, self.node_text(ident), "*"))
                    elif part.type == "named_imports":
                        for spec in part.named_children:
                            if spec.type != "import_specifier":
                                continue
                            name = spec.child_by_field_name("name")
                            alias = spec.child_by_field_name("alias")
                            if name is None:
                                continue
                            imported = self.node_text(name).strip("'\"")
                            local = self.node_text(alias) if alias is not None else imported
                            bindings.append(ImportBinding(module, local, imported))
        return bindings

    def imports_from(self, module: str) -> list[ImportBinding]:
        return [b for b in self.imports() if b.module == module]

    def has_import_from(self, module: str) -> bool:
        return any(s.type == "import_statement" and _import_source(self, s) == module
                   for s in self.root.named_children)

    def last_import(self) -> Optional[Node]:
        last = None
        for statement in self.root.named_children:
            if statement.type == "import_statement":
                last = statement
        return last

    def exported_declarations(self) -> Iterator[Node]:
        """Declarations under top-level ``export`` statements."""
        for statement in self.root.named_children:
            if statement.type != "export_statement":
                continue
            declaration = statement.child_by_field_name("declaration")
            if declaration is not None:
                yield declaration


def _import_source(file: SourceFile, statement: Node) -> Optional[str]:
    source = statement.child_by_field_name("source")
    return string_literal_value(file, source) if source is not None else None


def string_literal_value(file: SourceFile, node: Node) -> Optional[str]:
    """Literal text of a string node, or a template literal without substitutions."""
    if node.type == "string":
        raw = file.node_text(node)
        return raw[1:-1] if len(raw) >= 2 else ""
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return None
        raw = file.node_text(node)
        return raw[1:-1]
    return None


def unwrap_parentheses(node: Node) -> Node:
    while node.type == "parenthesized_expression" and node.named_children:
        node = node.named_children[0]
    return node


@dataclass(frozen=True)
class JsxAttribute:
    """A ``name=value`` pair on a JSX opening tag."""

    node: Node
    file: SourceFile

    @property
    def name(self) -> str:
        return self.file.node_text(self.node.named_children[0])

    @property
    def value_node(self) -> Optional[Node]:
        named = self.node.named_children
        return named[1] if len(named) > 1 else None

    @property
    def is_boolean(self) -> bool:
        """True for a bare attribute such as ``<Image fill />``."""
        return self.value_node is None

    @property
    def is_string(self) -> bool:
        value = self.value_node
        return value is not None and value.type == "string"

    @property
    def expression(self) -> Optional[Node]:
        """Expression inside ``{...}``, or None when the value is not a JSX expression."""
        value = self.value_node
        if value is None or value.type != "jsx_expression":
            return None
        for child in value.named_children:
            if child.type != "comment":
                return child
        return None

    @property
    def is_expression(self) -> bool:
        value = self.value_node
        return value is not None and value.type == "jsx_expression"

    def string_value(self) -> Optional[str]:
        """Value of a quoted attribute or of ``{"..."}``; None for anything dynamic."""
        value = self.value_node
        if value is None:
            return None
        if value.type == "string":
            return string_literal_value(self.file, value)
        expr = self.expression
        if expr is not None:
            return string_literal_value(self.file, unwrap_parentheses(expr))
        return None

    def expression_text(self) -> Optional[str]:
        expr = self.expression
        return self.file.node_text(expr) if expr is not None else None

    @property
    def line(self) -> int:
        return self.file.node_position(self.node)[0]


@dataclass(frozen=True)
class JsxElement:
    """A JSX element or self-closing element."""

    node: Node
    file: SourceFile

    @property
    def is_self_closing(self) -> bool:
        return self.node.type == "jsx_self_closing_element"

    @property
    def opening(self) -> Node:
        if self.is_self_closing:
            return self.node
        open_tag = self.node.child_by_field_name("open_tag")
        return open_tag if open_tag is not None else self.node.named_children[0]

    @property
    def name_node(self) -> Optional[Node]:
        return self.opening.child_by_field_name("name")

    @property
    def tag(self) -> str:
        name = self.name_node
        return self.file.node_text(name) if name is not None else ""

    @property
    def anchor(self) -> int:
        return self.node.start_byte

    @property
    def line(self) -> int:
        return self.file.node_position(self.node)[0]

    @property
    def column(self) -> int:
        return self.file.node_position(self.node)[1]

    @property
    def text(self) -> str:
        return self.file.node_text(self.node)

    def attributes(self) -> list[JsxAttribute]:
        return [JsxAttribute(child, self.file)
                for child in self.opening.named_children if child.type == "jsx_attribute"]

    def attribute(self, name: str) -> Optional[JsxAttribute]:
        for attr in self.attributes():
            if attr.name == name:
                return attr
        return None

    def has_attribute(self, name: str) -> bool:
        return self.attribute(name) is not None

    def has_spread(self) -> bool:
        return any(child.type == "jsx_expression" for child in self.opening.named_children)

    def children(self) -> list[Node]:
        """Named child nodes between the opening and closing tags."""
        if self.is_self_closing:
            return []
        open_tag = self.opening
        close_tag = self.node.child_by_field_name("close_tag")
        return [child for child in self.node.named_children
                if child != open_tag and child != close_tag and child.type != "comment"]

    def child_elements(self) -> list["JsxElement"]:
        return [JsxElement(child, self.file) for child in self.children() if child.type in JSX_ELEMENT_KINDS]

    def descendant_elements(self) -> list["JsxElement"]:
        if self.is_self_closing:
            return []
        return [JsxElement(node, self.file)
                for node in self.file.descendants(*JSX_ELEMENT_KINDS, node=self.node)]

    def text_content(self) -> str:
        """Concatenated JSX text of every descendant text node."""
        if self.is_self_closing:
            return ""
        parts = [self.file.node_text(node) for node in self.file.descendants("jsx_text", node=self.node)]
        return " ".join(part.strip() for part in parts if part.strip())

    def direct_text(self) -> str:
        return "".join(self.file.node_text(child) for child in self.children() if child.type == "jsx_text")

    def parent_element(self) -> Optional["JsxElement"]:
        parent = self.node.parent
        while parent is not None:
            if parent.type == "jsx_element":
                return JsxElement(parent, self.file)
            if parent.type not in ("jsx_opening_element", "jsx_expression", "parenthesized_expression"):
                return None
            parent = parent.parent
        return None

    def ancestors(self) -> Iterator["JsxElement"]:
        parent = self.node.parent
        while parent is not None:
            if parent.type == "jsx_element":
                yield JsxElement(parent, self.file)
            parent = parent.parent

    def opening_snippet(self) -> str:
        return self.file.node_text(self.opening)
