"""Single-file page context used to build generation prompts."""

import re
from pathlib import PurePath
from typing import Optional

from next_a11y.domain.entities import PageContext
from next_a11y.domain.source import SourceFile

_APP_ROUTE = re.compile(r"(?:^|/)app/(.+?)/page\.[tj]sx?$")
_APP_ROOT = re.compile(r"(?:^|/)app/page\.[tj]sx?$")
_PAGES_ROUTE = re.compile(r"(?:^|/)pages/(.+?)\.[tj]sx?$")
_HEADING_TAG = re.compile(r"^h[1-6]$")


class ContextExtractor:
    """Derives component name, route and headings from one file."""

    @classmethod
    def extract(cls, file: SourceFile) -> PageContext:
        return PageContext(
            component_name=cls.component_name(file),
            route=cls.route(file.posix_path),
            nearby_headings=cls.headings(file),
        )

    @staticmethod
    def component_name(file: SourceFile) -> str:
        """Default export name, then the first exported function, then the first exported const."""
        exported_functions: list[str] = []
        exported_consts: list[str] = []
        for statement in file.root.named_children:
            if statement.type != "export_statement":
                continue
            is_default = any(child.type == "default" for child in statement.children)
            declaration = statement.child_by_field_name("declaration")
            value = statement.child_by_field_name("value")
            if is_default:
                target = declaration if declaration is not None else value
                if target is not None:
                    if target.type == "identifier":
                        return file.node_text(target)
                    name = target.child_by_field_name("name")
                    if name is not None:
                        return file.node_text(name)
                continue
            if declaration is None:
                continue
            if declaration.type in ("function_declaration", "generator_function_declaration"):
                name = declaration.child_by_field_name("name")
                if name is not None:
                    exported_functions.append(file.node_text(name))
            elif declaration.type in ("lexical_declaration", "variable_declaration"):
                for declarator in declaration.named_children:
                    if declarator.type == "variable_declarator":
                        name = declarator.child_by_field_name("name")
                        if name is not None:
                            exported_consts.append(file.node_text(name))
                        break
        if exported_functions:
            return exported_functions[0]
        if exported_consts:
            return exported_consts[0]
        stem = PurePath(file.path).stem
        return stem[:1].upper() + stem[1:]

    @staticmethod
    def route(path: str) -> Optional[str]:
        """App Router or Pages Router route a file renders, if any."""
        normalized = path.replace("\\", "/")
        app_match = _APP_ROUTE.search(normalized)
        if app_match:
            return f"/{app_match.group(1)}"
        if _APP_ROOT.search(normalized):
            return "/"
        pages_match = _PAGES_ROUTE.search(normalized)
        if pages_match:
            route = re.sub(r"(^|/)index$", "", pages_match.group(1))
            return f"/{route}"
        return None

    @staticmethod
    def headings(file: SourceFile) -> list[str]:
        """``"h2: text"`` entries for every heading in document order."""
        headings: list[str] = []
        for element in file.jsx_elements():
            tag = element.tag
            if not _HEADING_TAG.match(tag):
                continue
            text = element.text_content()
            if text:
                headings.append(f"{tag}: {text}")
        return headings
