"""next-metadata-title: App Router pages need a metadata title."""

import re
from typing import Optional

from tree_sitter import Node

from next_a11y.domain.context import ContextExtractor
from next_a11y.domain.deferred import PAGE_TITLE, DeferredResolver
from next_a11y.domain.entities import Fix, RuleType, Violation
from next_a11y.domain.rules import BaseRule
from next_a11y.domain.source import SourceFile

PAGE_FILE_PATTERN = re.compile(r"\bpage\.(tsx|jsx|ts|js)$")
_WRAPPER_KINDS = ("satisfies_expression", "as_expression", "parenthesized_expression")


class NextMetadataTitleRule(BaseRule):
    """
    Without ``metadata.title`` the Next.js route announcer has nothing to read
    when the page changes. ``generateMetadata`` is trusted to provide one.
    """

    id = "next-metadata-title"
    type = RuleType.AI
    description = "Pages must export metadata with a title"

    def scan(self, file: SourceFile) -> list[Violation]:
        if not PAGE_FILE_PATTERN.search(file.posix_path):
            return []
        if self._has_title(file):
            return []
        if self._exports_generate_metadata(file):
            return []
        context = ContextExtractor.extract(file)
        fix = Fix.insert_metadata("title", DeferredResolver.deferred(
            PAGE_TITLE, route=context.route, component=context.component_name))
        return [self.file_violation(
            file, "page", "Page is missing metadata.title; the Next.js route announcer will be silent", fix)]

    @staticmethod
    def metadata_object(file: SourceFile) -> Optional[Node]:
        """Object literal assigned to an exported ``metadata`` const, if any."""
        for declaration in file.exported_declarations():
            if declaration.type not in ("lexical_declaration", "variable_declaration"):
                continue
            for declarator in declaration.named_children:
                if declarator.type != "variable_declarator":
                    continue
                name = declarator.child_by_field_name("name")
                value = declarator.child_by_field_name("value")
                if name is None or value is None or file.node_text(name) != "metadata":
                    continue
                while value.type in _WRAPPER_KINDS and value.named_children:
                    value = value.named_children[0]
                if value.type == "object":
                    return value
        return None

    @classmethod
    def _has_title(cls, file: SourceFile) -> bool:
        metadata = cls.metadata_object(file)
        if metadata is None:
            return False
        for prop in metadata.named_children:
            if prop.type == "pair":
                key = prop.child_by_field_name("key")
                if key is not None and file.node_text(key).strip("'\"") == "title":
                    return True
            elif prop.type == "shorthand_property_identifier" and file.node_text(prop) == "title":
                return True
        return False

    @staticmethod
    def _exports_generate_metadata(file: SourceFile) -> bool:
        for declaration in file.exported_declarations():
            if declaration.type == "function_declaration":
                name = declaration.child_by_field_name("name")
                if name is not None and file.node_text(name) == "generateMetadata":
                    return True
            elif declaration.type in ("lexical_declaration", "variable_declaration"):
                for declarator in declaration.named_children:
                    name = declarator.child_by_field_name("name") if declarator.type == "variable_declarator" else None
                    if name is not None and file.node_text(name) == "generateMetadata":
                        return True
        return False
