"""Use Case: Resolve deferred fix values with generated text."""

import dataclasses
import logging
from datetime import datetime, timezone
from typing import Optional

from next_a11y.domain.alt_text import AltTextClassifier
from next_a11y.domain.context import ContextExtractor
from next_a11y.domain.deferred import DeferredResolver
from next_a11y.domain.entities import (
    CacheEntry,
    Deferred,
    Fix,
    GenerationRequest,
    PageContext,
    TokenUsage,
    Violation,
)
from next_a11y.domain.errors import GenerationError
from next_a11y.domain.icon_labels import IconLabels
from next_a11y.domain.label_variable import LabelVariableFinder
from next_a11y.domain.prompts import (
    ARIA_LABEL_SYSTEM_PROMPT,
    IMG_ALT_SYSTEM_PROMPT,
    METADATA_TITLE_SYSTEM_PROMPT,
    PromptBuilder,
)
from next_a11y.domain.protocols import (
    ImageSourceProtocol,
    ResultCacheProtocol,
    TelemetryPort,
    TextGeneratorProtocol,
)
from next_a11y.domain.source import SourceFile

logger = logging.getLogger(__name__)

IMG_ALT_RULE = "img-alt"
TITLE_RULE = "next-metadata-title"
LABEL_RULES = ("button-label", "link-label", "input-label")
CURATED_ICON_RULES = ("button-label", "link-label")
AI_RULES = (IMG_ALT_RULE, TITLE_RULE) + LABEL_RULES


class ResolveAiFixesUseCase:
    """
    Turns deferred fix values of AI rules into literal text.

    Violations are resolved one at a time, so at most one generation request
    is in flight. Each value is looked up in the cache first; known icons on
    buttons and links use the curated table without calling the generator.
    On failure images fall back to a filename-derived description and the
    other rules to their offline heuristic.
    """

    def __init__(
        self,
        generator: TextGeneratorProtocol,
        cache: ResultCacheProtocol,
        image_source: ImageSourceProtocol,
        telemetry: TelemetryPort,
        locale: str = "en",
    ) -> None:
        self.generator = generator
        self.cache = cache
        self.image_source = image_source
        self.telemetry = telemetry
        self.locale = locale

    async def execute(
        self, violations: list[Violation], files: dict[str, SourceFile]
    ) -> tuple[list[Violation], TokenUsage]:
        """Return the violations with resolved fixes and the summed token usage."""
        usage = TokenUsage()
        resolved: list[Violation] = []
        pending = [v for v in violations if self.needs_resolution(v)]
        if pending:
            self.telemetry.step(f"🤖 Generating text for {len(pending)} fix(es) with {self.generator.model}")
        for violation in violations:
            file = files.get(violation.file_path)
            if not self.needs_resolution(violation) or file is None:
                resolved.append(violation)
                continue
            fix, spent = await self._resolve(violation, file)
            usage = usage + spent
            resolved.append(dataclasses.replace(violation, fix=fix))
        return resolved, usage

    async def aclose(self) -> None:
        """Release the network clients of the generator and the image source."""
        await self.generator.aclose()
        await self.image_source.aclose()

    @staticmethod
    def needs_resolution(violation: Violation) -> bool:
        return violation.rule in AI_RULES and violation.fix is not None and violation.fix.is_deferred

    async def _resolve(self, violation: Violation, file: SourceFile) -> tuple[Optional[Fix], TokenUsage]:
        fix = violation.fix
        if fix is None or not isinstance(fix.value, Deferred):
            return fix, TokenUsage()
        params = fix.value.params
        context = ContextExtractor.extract(file)
        try:
            if violation.rule == IMG_ALT_RULE:
                text, usage = await self._image_alt(violation, file, context, params.get("src"))
            elif violation.rule == TITLE_RULE:
                text, usage = await self._title(context)
            else:
                text, usage = await self._label(violation, context, params.get("icon"))
        except GenerationError as exc:
            self.telemetry.warning(f"{violation.location} {violation.rule}: {exc}; using fallback")
            return self._fallback(violation, file), TokenUsage()
        if not text:
            return self._fallback(violation, file), usage
        variable = params.get("variable")
        if violation.rule in LABEL_RULES and variable:
            text = LabelVariableFinder.wrap(text, variable)
        return fix.with_literal(text), usage

    def _fallback(self, violation: Violation, file: SourceFile) -> Optional[Fix]:
        """Offline value for a violation whose generation failed or came back empty; None drops the fix."""
        fix = violation.fix
        if fix is None:
            return None
        if violation.rule == IMG_ALT_RULE:
            element = file.element_at_offset(violation.anchor) if violation.anchor is not None else None
            src = element.attribute("src") if element is not None else None
            literal = src.string_value() if src is not None else None
            heuristic = AltTextClassifier.filename_alt(literal) if literal else None
            return fix.with_literal(heuristic) if heuristic else None
        text = DeferredResolver.resolve(fix)
        return fix.with_literal(text) if text else None

    def _cached(self, key: str) -> Optional[str]:
        entry = self.cache.get(key)
        if entry is not None and entry.locale == self.locale and entry.value:
            logger.debug("Cache hit %s", key)
            return entry.value
        return None

    def _store(self, key: str, rule: str, value: str) -> None:
        self.cache.set(key, CacheEntry(
            value=value,
            model=self.generator.model,
            locale=self.locale,
            rule=rule,
            generated_at=datetime.now(timezone.utc).isoformat(),
        ))

    async def _generate(self, system: str, prompt: str, image: Optional[bytes] = None) -> tuple[str, TokenUsage]:
        result = await self.generator.generate(GenerationRequest(system=system, prompt=prompt, image=image))
        return result.text, result.usage

    async def _image_alt(
        self, violation: Violation, file: SourceFile, context: PageContext, source: Optional[str]
    ) -> tuple[str, TokenUsage]:
        element = file.element_at_offset(violation.anchor) if violation.anchor is not None else None
        image = await self.image_source.load(element, source) if element is not None else None
        if image is None:
            key = self.cache.hash(
                f"{IMG_ALT_RULE}:{source or 'unknown'}:{violation.element}:{context.component_name}:{self.locale}")
        else:
            key = self.cache.hash(image + b":" + self.locale.encode("utf-8"))
        cached = self._cached(key)
        if cached is not None:
            return cached, TokenUsage()
        if image is None:
            prompt = PromptBuilder.img_alt_without_image(context, self.locale, source or "unknown")
            text, usage = await self._generate(IMG_ALT_SYSTEM_PROMPT, prompt)
        else:
            prompt = PromptBuilder.img_alt(context, self.locale)
            text, usage = await self._generate(IMG_ALT_SYSTEM_PROMPT, prompt, image)
        if text:
            self._store(key, IMG_ALT_RULE, text)
        return text, usage

    async def _label(
        self, violation: Violation, context: PageContext, icon: Optional[str]
    ) -> tuple[str, TokenUsage]:
        key = self.cache.hash(
            f"{violation.rule}:{icon or 'unknown'}:{violation.element}:{context.component_name}:{self.locale}")
        cached = self._cached(key)
        if cached is not None:
            return cached, TokenUsage()
        if icon and violation.rule in CURATED_ICON_RULES:
            curated = IconLabels.curated(icon, self.locale)
            if curated:
                return curated, TokenUsage()
        prompt = PromptBuilder.aria_label(violation.rule, violation.element, context, self.locale, icon)
        text, usage = await self._generate(ARIA_LABEL_SYSTEM_PROMPT, prompt)
        if text:
            self._store(key, violation.rule, text)
        return text, usage

    async def _title(self, context: PageContext) -> tuple[str, TokenUsage]:
        headings = "|".join(context.nearby_headings)
        key = self.cache.hash(
            f"{TITLE_RULE}:{context.component_name}:{context.route or ''}:{headings}:{self.locale}")
        cached = self._cached(key)
        if cached is not None:
            return cached, TokenUsage()
        text, usage = await self._generate(METADATA_TITLE_SYSTEM_PROMPT, PromptBuilder.metadata_title(context, self.locale))
        if text:
            self._store(key, TITLE_RULE, text)
        return text, usage
