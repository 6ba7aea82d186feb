"""Heuristic resolvers for deferred fix values."""

import re
from typing import Callable, Optional

from next_a11y.domain.entities import AI_PLACEHOLDER, Deferred, Fix, FixValue, Literal
from next_a11y.domain.icon_labels import IconLabels
from next_a11y.domain.label_variable import LabelVariableFinder

IMG_ALT = "img-alt"
ICON_LABEL = "icon-label"
INPUT_LABEL = "input-label"
PAGE_TITLE = "page-title"

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def _img_alt(params: dict[str, str]) -> str:
    return AI_PLACEHOLDER


def _icon_label(params: dict[str, str]) -> str:
    locale = params.get("locale", "en")
    icon = params.get("icon")
    base = IconLabels.label(icon, locale) if icon else IconLabels.generic(params.get("term", "Button"), locale)
    variable = params.get("variable")
    return LabelVariableFinder.wrap(base, variable) if variable else base


def _input_label(params: dict[str, str]) -> str:
    placeholder = params.get("placeholder")
    if placeholder:
        return placeholder
    name = params.get("name")
    if name:
        label = _CAMEL_BOUNDARY.sub(r"\1 \2", name)
        label = re.sub(r"[_-]", " ", label)
        return label[:1].upper() + label[1:]
    tag = params.get("tag", "input")
    if tag == "select":
        return "Select option"
    if tag == "textarea":
        return "Text input"
    return "Input"


def _page_title(params: dict[str, str]) -> str:
    route = params.get("route") or ""
    segments = [segment for segment in route.split("/") if segment]
    source = segments[-1] if segments else params.get("component", "")
    if not source:
        return "Page"
    return source[:1].upper() + source[1:]


RESOLVERS: dict[str, Callable[[dict[str, str]], str]] = {
    IMG_ALT: _img_alt,
    ICON_LABEL: _icon_label,
    INPUT_LABEL: _input_label,
    PAGE_TITLE: _page_title,
}


class DeferredResolver:
    """Resolves ``Deferred`` fix values to text without any external service."""

    @staticmethod
    def resolve_value(value: FixValue) -> str:
        if isinstance(value, Literal):
            return value.text
        resolver = RESOLVERS.get(value.resolver_id)
        if resolver is None:
            raise KeyError(f"No resolver registered for {value.resolver_id!r}")
        return resolver(value.params)

    @classmethod
    def resolve(cls, fix: Fix) -> Optional[str]:
        """Text to write for ``fix``; None when only the placeholder sentinel is available."""
        text = cls.resolve_value(fix.value)
        if text == AI_PLACEHOLDER:
            return None
        return text

    @staticmethod
    def deferred(resolver_id: str, **params: Optional[str]) -> Deferred:
        """Build a Deferred value, dropping params that are None or empty."""
        return Deferred(resolver_id, {key: value for key, value in params.items() if value})
