"""Resolve the image an element renders to bytes: local files, static imports, remote URLs."""

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

import httpx
from tree_sitter import Node

from next_a11y.domain.alt_text import IMAGE_EXTENSIONS, AltTextClassifier
from next_a11y.domain.protocols import FileSystemProtocol, ImageSourceProtocol
from next_a11y.domain.source import FUNCTION_KINDS, JsxElement, SourceFile, string_literal_value

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024
FETCH_TIMEOUT = 10.0
ROOT_MARKERS = ("package.json", "next.config.js", "next.config.mjs", "next.config.ts")
MODULE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx") + IMAGE_EXTENSIONS
INDEX_FILES = ("index.ts", "index.tsx", "index.js", "index.jsx")

_LINE_COMMENT = re.compile(r"^\s*//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")


class StaticImportResolver:
    """
    Maps a ``src`` expression to an image path on disk.

    Handles ``img.src``, default and named imports of image files, one barrel
    re-export, ``obj[key]`` lookups (first value of the object), ``obj.prop``
    from a parameter default or a const object, and tsconfig path aliases.
    Calls are never resolved.
    """

    def __init__(self, filesystem: FileSystemProtocol) -> None:
        self._fs = filesystem

    def find_project_root(self, file_path: str) -> str:
        directory = Path(file_path).resolve().parent
        for candidate in (directory, *directory.parents):
            if any(self._fs.exists(str(candidate / marker)) for marker in ROOT_MARKERS):
                return str(candidate)
        return str(directory)

    def resolve(self, expression: str, file: SourceFile, project_root: str) -> Optional[str]:
        name = expression.strip()
        if name.endswith(".src"):
            name = name[:-4]
        if "(" in name:
            return None
        if "[" in name:
            base = name.split("[")[0]
            return self._first_object_value(base, file, project_root) if base else None
        if "." in name:
            parts = name.split(".")
            if len(parts) == 2 and all(parts):
                resolved = self._param_default(parts[0], parts[1], file) \
                    or self._const_property(parts[0], parts[1], file)
                if resolved:
                    return resolved
        for binding in file.imports():
            if binding.local != name:
                continue
            named = None if binding.imported in ("default", "*") else binding.imported
            return self.resolve_module_to_image(binding.module, file.path, project_root, named)
        return None

    def resolve_module_to_image(
        self, module: str, from_file: str, project_root: str, named_export: Optional[str] = None
    ) -> Optional[str]:
        if AltTextClassifier.is_image_path(module):
            return self.resolve_module_path(module, from_file, project_root)
        if named_export:
            barrel = self.resolve_module_path(module, from_file, project_root)
            if barrel:
                return self.follow_re_export(barrel, named_export)
        return None

    def resolve_module_path(self, module: str, from_file: str, project_root: str) -> Optional[str]:
        """Module specifier to an existing file: relative or aliased, probing extensions and index files."""
        if module.startswith("."):
            base: Optional[str] = str((Path(from_file).parent / module).resolve())
        else:
            base = self.resolve_path_alias(module, project_root)
        if base is None:
            return None
        if self._fs.exists(base) and not self._fs.is_directory(base):
            return base
        for extension in MODULE_EXTENSIONS:
            if self._fs.exists(base + extension):
                return base + extension
        for index in INDEX_FILES:
            candidate = self._fs.join_path(base, index)
            if self._fs.exists(candidate):
                return candidate
        return None

    def follow_re_export(self, barrel_path: str, export_name: str) -> Optional[str]:
        """``export { default as hero } from "./hero.jpg"`` in a barrel file."""
        try:
            content = self._fs.read_text(barrel_path)
        except (OSError, UnicodeDecodeError):
            return None
        pattern = re.compile(
            r"export\s*\{[^}]*\b(?:default\s+as\s+)?" + re.escape(export_name)
            + r"\b[^}]*\}\s*from\s*[\"']([^\"']+)[\"']"
        )
        match = pattern.search(content)
        if match and AltTextClassifier.is_image_path(match.group(1)):
            return str((Path(barrel_path).parent / match.group(1)).resolve())
        return None

    def tsconfig_paths(self, project_root: str) -> tuple[str, dict[str, list[str]]]:
        """(base directory, ``compilerOptions.paths``) from tsconfig.json."""
        tsconfig = self._fs.join_path(project_root, "tsconfig.json")
        if not self._fs.exists(tsconfig):
            return project_root, {}
        try:
            raw = self._fs.read_text(tsconfig)
            raw = _BLOCK_COMMENT.sub("", raw)
            raw = _LINE_COMMENT.sub("", raw)
            data: Any = json.loads(_TRAILING_COMMA.sub(r"\1", raw))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable %s: %s", tsconfig, exc)
            return project_root, {}
        options = data.get("compilerOptions") or {} if isinstance(data, dict) else {}
        base_url = options.get("baseUrl")
        base_dir = str((Path(project_root) / base_url).resolve()) if base_url else project_root
        paths = options.get("paths") or {}
        return base_dir, paths if isinstance(paths, dict) else {}

    def resolve_path_alias(self, module: str, project_root: str) -> Optional[str]:
        base_dir, paths = self.tsconfig_paths(project_root)
        for pattern, mappings in paths.items():
            if not mappings:
                continue
            if pattern.endswith("/*"):
                prefix = pattern[:-1]
                if module.startswith(prefix):
                    mapping = mappings[0]
                    mapping_base = mapping[:-1] if mapping.endswith("/*") else mapping
                    return str((Path(base_dir) / (mapping_base + module[len(prefix):])).resolve())
            elif pattern == module:
                return str((Path(base_dir) / mappings[0]).resolve())
        return None

    @staticmethod
    def _object_property(file: SourceFile, obj: Node, prop: str) -> Optional[str]:
        for pair in obj.named_children:
            if pair.type != "pair":
                continue
            key = pair.child_by_field_name("key")
            value = pair.child_by_field_name("value")
            if key is None or value is None or file.node_text(key).strip("'\"") != prop:
                continue
            return string_literal_value(file, value)
        return None

    @staticmethod
    def _declared_object(file: SourceFile, name: str) -> Optional[Node]:
        for declarator in file.descendants("variable_declarator"):
            ident = declarator.child_by_field_name("name")
            value = declarator.child_by_field_name("value")
            if ident is not None and value is not None and file.node_text(ident) == name and value.type == "object":
                return value
        return None

    def _const_property(self, name: str, prop: str, file: SourceFile) -> Optional[str]:
        obj = self._declared_object(file, name)
        return self._object_property(file, obj, prop) if obj is not None else None

    def _param_default(self, name: str, prop: str, file: SourceFile) -> Optional[str]:
        """``product.image`` when a parameter is declared ``product = { image: "/x.jpg" }``."""
        for function in file.descendants(*FUNCTION_KINDS):
            parameters = function.child_by_field_name("parameters")
            if parameters is None:
                continue
            for param in parameters.named_children:
                default = self._parameter_default(file, param, name)
                if default is not None and default.type == "object":
                    value = self._object_property(file, default, prop)
                    if value is not None:
                        return value
        return None

    @staticmethod
    def _parameter_default(file: SourceFile, param: Node, name: str) -> Optional[Node]:
        pattern = param.child_by_field_name("pattern")
        value = param.child_by_field_name("value")
        if pattern is None:
            return None
        if pattern.type == "identifier":
            return value if file.node_text(pattern) == name else None
        if pattern.type == "object_pattern":
            for element in pattern.named_children:
                if element.type != "object_assignment_pattern":
                    continue
                left = element.child_by_field_name("left")
                if left is not None and file.node_text(left) == name:
                    return element.child_by_field_name("right")
        return None

    def _first_object_value(self, name: str, file: SourceFile, project_root: str) -> Optional[str]:
        obj = self._declared_object(file, name)
        if obj is None:
            return None
        for pair in obj.named_children:
            value = pair.child_by_field_name("value") if pair.type == "pair" else None
            if value is None:
                continue
            resolved = self.resolve(file.node_text(value), file, project_root)
            if resolved:
                return resolved
        return None


class ImageSourceResolver(ImageSourceProtocol):
    """Infrastructure implementation of ImageSourceProtocol."""

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        client: Optional[httpx.AsyncClient] = None,
        max_bytes: int = MAX_IMAGE_BYTES,
    ) -> None:
        self._fs = filesystem
        self._client = client
        self._max_bytes = max_bytes
        self.imports = StaticImportResolver(filesystem)

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=FETCH_TIMEOUT, follow_redirects=True)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def source_path(self, element: JsxElement, project_root: str) -> Optional[str]:
        """Literal ``src``, else the statically resolved path of the ``src`` expression."""
        attr = element.attribute("src")
        if attr is None:
            return None
        literal = attr.string_value()
        if literal is not None:
            return literal
        expression = attr.expression_text()
        if expression is None:
            return None
        return self.imports.resolve(expression, element.file, project_root) or expression

    async def load(self, element: JsxElement, source: Optional[str] = None) -> Optional[bytes]:
        project_root = self.imports.find_project_root(element.file.path)
        src = self.source_path(element, project_root) or source
        if not src:
            return None
        return await self.read(src, element.file.path, project_root)

    async def read(self, src: str, file_path: str, project_root: str) -> Optional[bytes]:
        if src.startswith(("http://", "https://")):
            return await self.fetch(src)
        if Path(src).is_absolute() and AltTextClassifier.is_image_path(src) and self._fs.exists(src):
            return self._read_local(src)
        if src.startswith("/"):
            return self._read_local(self._fs.join_path(project_root, "public", src.lstrip("/")))
        if src.startswith("."):
            return self._read_local(str((Path(file_path).parent / src).resolve()))
        return None

    def _read_local(self, path: str) -> Optional[bytes]:
        try:
            data = self._fs.read_bytes(path)
        except OSError:
            logger.info("Image not found: %s", path)
            return None
        if len(data) > self._max_bytes:
            logger.info("Image too large (>5MB): %s", path)
            return None
        return data

    async def fetch(self, url: str) -> Optional[bytes]:
        """GET with redirects followed; None on error, timeout or when over the size cap."""
        chunks: list[bytes] = []
        size = 0
        try:
            async with self.client.stream("GET", url) as resp:
                resp.raise_for_status()
                async for chunk in resp.aiter_bytes():
                    size += len(chunk)
                    if size > self._max_bytes:
                        logger.info("Image too large (>5MB): %s", url)
                        return None
                    chunks.append(chunk)
        except httpx.HTTPError as exc:
            logger.info("Failed to fetch %s: %s", url, exc)
            return None
        return b"".join(chunks)
