"""Configuration defaults and resolution for next-a11y."""

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from next_a11y.domain.entities import RuleLevel, RuleType
from next_a11y.domain.errors import ConfigError

PROVIDER_DEFAULTS: dict[str, str] = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-haiku-4-5-20251001",
    "google": "gemini-2.0-flash-lite",
    "ollama": "llava",
    "openrouter": "openai/gpt-4o-mini",
}

PROVIDER_ENV: dict[str, Optional[str]] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "google": "GOOGLE_GENERATIVE_AI_API_KEY",
    "ollama": None,
    "openrouter": "OPENROUTER_API_KEY",
}

FALLBACK_MODEL = "gpt-4.1-nano"

DEFAULT_RULES: dict[str, str] = {
    "img-alt": "fix",
    "button-label": "fix",
    "link-label": "fix",
    "input-label": "fix",
    "html-lang": "fix",
    "emoji-alt": "fix",
    "no-positive-tabindex": "fix",
    "button-type": "fix",
    "link-noopener": "fix",
    "next-metadata-title": "warn",
    "next-image-sizes": "warn",
    "next-link-no-nested-a": "fix",
    "next-skip-nav": "warn",
    "heading-order": "warn",
    "no-div-interactive": "warn",
}

RULE_OPTION_DEFAULTS: dict[str, dict[str, bool]] = {
    "button-type": {"scanCustomComponents": False},
    "img-alt": {"fillAlt": True},
}

DEFAULT_CONFIG: dict[str, Any] = {
    "locale": "en",
    "cache": ".a11y-cache",
    "scanner": {
        "include": ["**/*.{tsx,jsx}"],
        "exclude": ["**/*.test.*", "**/*.spec.*", "**/*.stories.*", "**/node_modules/**"],
    },
    "rules": dict(DEFAULT_RULES),
}


@dataclass(frozen=True)
class RuleConfig:
    """Resolved level and options of one rule."""
    level: RuleLevel
    options: dict[str, bool] = field(default_factory=dict)

    def option(self, name: str, default: bool = False) -> bool:
        return bool(self.options.get(name, default))


@dataclass(frozen=True)
class CLIFlags:
    """Values given on the command line; None means "not given"."""
    fix: bool = False
    no_ai: bool = False
    provider: Optional[str] = None
    model: Optional[str] = None
    locale: Optional[str] = None
    min_score: Optional[int] = None


@dataclass(frozen=True)
class ResolvedConfig:
    """Configuration after defaults, file values and flags are merged."""
    provider: Optional[str]
    model: str
    locale: str
    cache_dir: str
    include: list[str]
    exclude: list[str]
    rules: dict[str, RuleConfig]
    fix: bool = False
    no_ai: bool = False
    min_score: Optional[int] = None

    def rule(self, rule_id: str) -> RuleConfig:
        return self.rules.get(rule_id) or ConfigResolver.resolve_rule_config(rule_id, None)

    def is_enabled(self, rule_id: str, rule_type: RuleType) -> bool:
        """Rules set to off never run; AI rules are skipped entirely with --no-ai."""
        if self.rule(rule_id).level is RuleLevel.OFF:
            return False
        if self.no_ai and rule_type is RuleType.AI:
            return False
        return True

    @property
    def ai_enabled(self) -> bool:
        return self.fix and not self.no_ai and self.provider is not None


class ConfigResolver:
    """Merges default, file and command-line configuration."""

    @staticmethod
    def resolve_rule_config(rule_id: str, raw: Any) -> RuleConfig:
        """Resolve a shorthand level string or a ``{level, ...options}`` table."""
        value = raw if raw is not None else DEFAULT_RULES.get(rule_id, "warn")
        options: dict[str, bool] = dict(RULE_OPTION_DEFAULTS.get(rule_id, {}))
        if isinstance(value, str):
            level_name = value
        elif isinstance(value, Mapping):
            level_name = str(value.get("level", DEFAULT_RULES.get(rule_id, "warn")))
            for key, option in value.items():
                if key != "level":
                    options[key] = bool(option)
        else:
            raise ConfigError(f"Invalid setting for rule {rule_id!r}: {value!r}")
        try:
            level = RuleLevel(level_name)
        except ValueError as exc:
            raise ConfigError(
                f"Invalid level {level_name!r} for rule {rule_id!r}; expected fix, warn or off"
            ) from exc
        return RuleConfig(level=level, options=options)

    @staticmethod
    def merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
        """Shallow per-key merge: nested tables merge one level deep, everything else replaces."""
        result = dict(base)
        for key, value in override.items():
            if value is None:
                continue
            current = result.get(key)
            if isinstance(value, Mapping) and isinstance(current, Mapping):
                result[key] = {**current, **value}
            else:
                result[key] = value
        return result

    @staticmethod
    def detect_provider(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
        """First provider whose API key variable is set."""
        env = os.environ if environ is None else environ
        for name, variable in PROVIDER_ENV.items():
            if variable and env.get(variable):
                return name
        return None

    @classmethod
    def resolve(
        cls,
        file_config: Mapping[str, Any],
        flags: Optional[CLIFlags] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> ResolvedConfig:
        """Build the resolved configuration for one run."""
        flags = flags or CLIFlags()
        merged = cls.merge(DEFAULT_CONFIG, file_config)

        provider = flags.provider or merged.get("provider") or cls.detect_provider(environ)
        if provider is not None and provider not in PROVIDER_DEFAULTS:
            raise ConfigError(
                f"Unknown provider {provider!r}; expected one of {', '.join(PROVIDER_DEFAULTS)}"
            )
        model = flags.model or merged.get("model") or (
            PROVIDER_DEFAULTS[provider] if provider else FALLBACK_MODEL)

        scanner = merged.get("scanner") or {}
        raw_rules = merged.get("rules") or {}
        rules = {
            rule_id: cls.resolve_rule_config(rule_id, raw_rules.get(rule_id))
            for rule_id in {**DEFAULT_RULES, **raw_rules}
        }
        return ResolvedConfig(
            provider=provider,
            model=str(model),
            locale=str(flags.locale or merged.get("locale") or "en"),
            cache_dir=str(merged.get("cache") or ".a11y-cache"),
            include=list(scanner.get("include") or DEFAULT_CONFIG["scanner"]["include"]),
            exclude=list(scanner.get("exclude") or DEFAULT_CONFIG["scanner"]["exclude"]),
            rules=rules,
            fix=flags.fix,
            no_ai=flags.no_ai,
            min_score=flags.min_score,
        )
