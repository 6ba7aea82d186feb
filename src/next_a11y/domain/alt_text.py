"""Image alt-text classification and filename-based fallback."""

import re
from enum import Enum
from pathlib import PurePosixPath
from typing import Optional

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".gif", ".svg", ".avif")

MEANINGLESS_PATTERNS = (
    re.compile(r"^image$", re.IGNORECASE),
    re.compile(r"^photo$", re.IGNORECASE),
    re.compile(r"^picture$", re.IGNORECASE),
    re.compile(r"^img$", re.IGNORECASE),
    re.compile(r"^banner$", re.IGNORECASE),
    re.compile(r"^hero$", re.IGNORECASE),
    re.compile(r"^thumbnail$", re.IGNORECASE),
    re.compile(r"^untitled$", re.IGNORECASE),
    re.compile(r"^placeholder$", re.IGNORECASE),
    re.compile(r"^screenshot$", re.IGNORECASE),
    re.compile(r"^IMG_\d+", re.IGNORECASE),
    re.compile(r"^DSC_?\d+", re.IGNORECASE),
    re.compile(r"^DCIM", re.IGNORECASE),
    re.compile(r"^\d+$"),
    re.compile(r"\.(jpg|jpeg|png|gif|webp|svg|avif)$", re.IGNORECASE),
)

_HEURISTIC_EXTENSION = re.compile(r"\.(jpg|jpeg|png|webp|gif|svg|avif)$", re.IGNORECASE)


class AltClassification(Enum):
    MISSING = "missing"
    DECORATIVE = "decorative"
    DYNAMIC = "dynamic"
    MEANINGLESS = "meaningless"
    VALID = "valid"


class AltTextClassifier:
    """Pure classification of an alt attribute value."""

    @staticmethod
    def is_meaningless(text: str) -> bool:
        return any(pattern.search(text) for pattern in MEANINGLESS_PATTERNS)

    @classmethod
    def classify(cls, alt_value: Optional[str], is_expression: bool) -> AltClassification:
        """
        Classify an alt value.

        Args:
            alt_value: literal text, expression text, or None when the attribute is absent.
            is_expression: True when ``alt_value`` is the source of a JSX expression.
        """
        if alt_value is None:
            return AltClassification.MISSING
        if alt_value == "":
            return AltClassification.DECORATIVE
        if is_expression:
            return AltClassification.DYNAMIC
        trimmed = alt_value.strip()
        if cls.is_meaningless(trimmed):
            return AltClassification.MEANINGLESS
        words = trimmed.split()
        # Single words pass only when they are not a generic term.
        if len(words) == 1 and cls.is_meaningless(words[0]):
            return AltClassification.MEANINGLESS
        return AltClassification.VALID

    @staticmethod
    def is_image_path(path: str) -> bool:
        return path.lower().endswith(IMAGE_EXTENSIONS)

    @staticmethod
    def filename_alt(source: str) -> Optional[str]:
        """'/images/team-photo_2024.jpg' -> 'Team Photo 2024 image'; None without a usable name."""
        if not source:
            return None
        name = PurePosixPath(source.split("?")[0].split("#")[0].replace("\\", "/")).name
        name = _HEURISTIC_EXTENSION.sub("", name)
        words = re.sub(r"[-_]+", " ", name).split()
        if not words:
            return None
        title = " ".join(word[:1].upper() + word[1:] for word in words)
        return f"{title} image"
