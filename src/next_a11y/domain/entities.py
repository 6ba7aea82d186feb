import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

ELEMENT_SNIPPET_LIMIT = 80

# Sentinel an unresolved img-alt fix carries; never written to source.
AI_PLACEHOLDER = "[AI-generated alt text placeholder]"


class RuleType(Enum):
    """How a rule's fix value is produced."""
    DETERMINISTIC = "deterministic"
    AI = "ai"
    DETECT = "detect"


class RuleLevel(Enum):
    """Per-rule setting from configuration."""
    FIX = "fix"
    WARN = "warn"
    OFF = "off"


class FixType(Enum):
    """Kinds of source edits the fix engine can apply."""
    INSERT_ATTR = "insert-attr"
    REPLACE_ATTR = "replace-attr"
    INSERT_ELEMENT = "insert-element"
    WRAP_ELEMENT = "wrap-element"
    REMOVE_ELEMENT = "remove-element"
    INSERT_METADATA = "insert-metadata"


@dataclass(frozen=True)
class Literal:
    """A fix value already known as text."""
    text: str

    def to_dict(self) -> dict[str, str]:
        return {"kind": "literal", "text": self.text}


@dataclass(frozen=True)
class Deferred:
    """
    A fix value that still needs resolving.

    ``resolver_id`` names a heuristic in ``next_a11y.domain.deferred``; ``params``
    holds the syntax facts captured at scan time. Nothing is computed until the
    AI pipeline or the fix engine asks for it.
    """
    resolver_id: str
    params: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "deferred", "resolver": self.resolver_id, "params": dict(self.params)}


FixValue = Union[Literal, Deferred]


@dataclass(frozen=True)
class Fix:
    """A prescribed edit that resolves a violation."""
    type: FixType
    value: FixValue
    attribute: Optional[str] = None

    @classmethod
    def insert_attr(cls, attribute: str, value: FixValue) -> "Fix":
        """Create a fix that adds an attribute to the flagged element."""
        return cls(type=FixType.INSERT_ATTR, attribute=attribute, value=value)

    @classmethod
    def replace_attr(cls, attribute: str, value: FixValue) -> "Fix":
        """Create a fix that overwrites an existing attribute value."""
        return cls(type=FixType.REPLACE_ATTR, attribute=attribute, value=value)

    @classmethod
    def wrap_element(cls, value: FixValue) -> "Fix":
        return cls(type=FixType.WRAP_ELEMENT, value=value)

    @classmethod
    def remove_element(cls, value: FixValue) -> "Fix":
        return cls(type=FixType.REMOVE_ELEMENT, value=value)

    @classmethod
    def insert_metadata(cls, attribute: str, value: FixValue) -> "Fix":
        """Create a fix that adds a property to the exported metadata object."""
        return cls(type=FixType.INSERT_METADATA, attribute=attribute, value=value)

    @property
    def is_deferred(self) -> bool:
        return isinstance(self.value, Deferred)

    def with_literal(self, text: str) -> "Fix":
        """Return a copy whose value is the given literal text."""
        return dataclasses.replace(self, value=Literal(text))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        data: dict[str, Any] = {"type": self.type.value, "value": self.value.to_dict()}
        if self.attribute is not None:
            data["attribute"] = self.attribute
        return data


@dataclass(frozen=True)
class Violation:
    """An accessibility defect at a specific source location."""
    rule: str
    file_path: str
    line: int
    column: int
    element: str
    message: str
    fix: Optional[Fix] = None
    anchor: Optional[int] = field(default=None, compare=False)
    """Byte offset of the flagged node at scan time. Used to relocate it when fixing."""
    tag: Optional[str] = field(default=None, compare=False)
    """JSX tag name of the flagged element, when the violation is tied to one."""

    def __post_init__(self) -> None:
        if len(self.element) > ELEMENT_SNIPPET_LIMIT:
            object.__setattr__(self, "element", self.element[:ELEMENT_SNIPPET_LIMIT])

    @property
    def location(self) -> str:
        return f"{self.file_path}:{self.line}:{self.column}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to the stable JSON shape used by reporters and CI."""
        data: dict[str, Any] = {
            "rule": self.rule,
            "filePath": self.file_path,
            "line": self.line,
            "column": self.column,
            "element": self.element,
            "message": self.message,
        }
        if self.fix is not None:
            data["fix"] = self.fix.to_dict()
        return data


@dataclass(frozen=True)
class ScanResult:
    """Aggregate outcome of one scan run."""
    violations: list[Violation]
    files_scanned: int
    elements_scanned: int
    score: int
    fixed_count: int = 0
    previous_score: Optional[int] = None

    @property
    def fixable_count(self) -> int:
        return sum(1 for v in self.violations if v.fix is not None)

    @property
    def warning_count(self) -> int:
        return sum(1 for v in self.violations if v.fix is None)

    @property
    def score_delta(self) -> Optional[int]:
        if self.previous_score is None:
            return None
        return self.score - self.previous_score

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {
            "violations": [v.to_dict() for v in self.violations],
            "filesScanned": self.files_scanned,
            "elementsScanned": self.elements_scanned,
            "score": self.score,
            "fixedCount": self.fixed_count,
        }
        if self.previous_score is not None:
            data["previousScore"] = self.previous_score
        return data


@dataclass(frozen=True)
class CacheEntry:
    """A generated text stored in the result cache."""
    value: str
    model: str
    locale: str
    rule: str
    generated_at: str

    def to_dict(self) -> dict[str, str]:
        return {
            "value": self.value,
            "model": self.model,
            "locale": self.locale,
            "rule": self.rule,
            "generatedAt": self.generated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CacheEntry":
        return cls(
            value=str(data.get("value", "")),
            model=str(data.get("model", "")),
            locale=str(data.get("locale", "")),
            rule=str(data.get("rule", "")),
            generated_at=str(data.get("generatedAt", "")),
        )


@dataclass(frozen=True)
class CacheStats:
    entries: int
    size_bytes: int


@dataclass(frozen=True)
class ScoreRecord:
    """Score persisted between runs."""
    score: int
    timestamp: str

    def to_dict(self) -> dict[str, Union[int, str]]:
        return {"score": self.score, "timestamp": self.timestamp}


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total(self) -> int:
        return self.input_tokens + self.output_tokens

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
        )


@dataclass(frozen=True)
class GenerationRequest:
    """Input of the text-generation primitive."""
    system: str
    prompt: str
    image: Optional[bytes] = None


@dataclass(frozen=True)
class GenerationResult:
    """Output of the text-generation primitive."""
    text: str
    usage: TokenUsage = field(default_factory=TokenUsage)


@dataclass(frozen=True)
class PageContext:
    """Single-file context handed to prompt builders."""
    component_name: str
    route: Optional[str] = None
    nearby_headings: list[str] = field(default_factory=list)
