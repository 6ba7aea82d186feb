"""
Text-generation providers over ``httpx.AsyncClient``.

- One provider class per wire format: OpenAI-compatible chat completions
  (openai, openrouter), Anthropic messages, Google ``generateContent`` and
  Ollama ``/api/chat``.
- ``RetryingGenerator`` adds tenacity retries with linear backoff and trims output.
"""

import asyncio
import base64
import logging
import os
from typing import Any, Awaitable, Callable, Mapping, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from next_a11y.domain.config import PROVIDER_ENV, ResolvedConfig
from next_a11y.domain.entities import GenerationRequest, GenerationResult, TokenUsage
from next_a11y.domain.errors import GenerationError, ProviderConfigurationError
from next_a11y.domain.protocols import TextGeneratorProtocol

logger = logging.getLogger(__name__)

MAX_OUTPUT_TOKENS = 300
REQUEST_TIMEOUT = 30.0

OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
GOOGLE_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
OLLAMA_BASE_URL = "http://localhost:11434"


def media_type(image: bytes) -> str:
    """MIME type from the leading magic bytes; PNG when unrecognized."""
    if image.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image.startswith(b"GIF8"):
        return "image/gif"
    if image[:4] == b"RIFF" and image[8:12] == b"WEBP":
        return "image/webp"
    head = image[:256].lstrip()
    if head.startswith(b"<svg") or head.startswith(b"<?xml"):
        return "image/svg+xml"
    return "image/png"


class HttpProvider:
    """Base for providers: holds the model, credentials and a lazily created client."""

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.model = model
        self._api_key = api_key
        self._base_url = base_url
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the httpx.AsyncClient."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=REQUEST_TIMEOUT)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _post(self, url: str, body: dict[str, Any], headers: Optional[dict[str, str]] = None) -> dict[str, Any]:
        try:
            resp = await self.client.post(url, json=body, headers=headers or {})
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error("HTTP error during generation call: %s", e.response.text)
            raise GenerationError(f"Generation request failed with status {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise GenerationError(f"Generation request failed: {e}") from e
        if not isinstance(data, dict):
            raise GenerationError("Unexpected generation response shape")
        return data

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        raise NotImplementedError


class OpenAICompatibleProvider(HttpProvider):
    """Chat completions API shared by OpenAI and OpenRouter."""

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        if request.image is not None:
            encoded = base64.b64encode(request.image).decode("ascii")
            content: Any = [
                {"type": "image_url", "image_url": {"url": f"data:{media_type(request.image)};base64,{encoded}"}},
                {"type": "text", "text": request.prompt},
            ]
        else:
            content = request.prompt
        body = {
            "model": self.model,
            "max_tokens": MAX_OUTPUT_TOKENS,
            "messages": [
                {"role": "system", "content": request.system},
                {"role": "user", "content": content},
            ],
        }
        base_url = (self._base_url or OPENAI_BASE_URL).rstrip("/")
        data = await self._post(f"{base_url}/chat/completions", body,
                                {"Authorization": f"Bearer {self._api_key}"})
        choices = data.get("choices") or []
        if not choices:
            raise GenerationError("No choices in completion response")
        text = (choices[0].get("message") or {}).get("content") or ""
        usage = data.get("usage") or {}
        return GenerationResult(
            text=str(text),
            usage=TokenUsage(int(usage.get("prompt_tokens", 0)), int(usage.get("completion_tokens", 0))),
        )


class AnthropicProvider(HttpProvider):
    async def generate(self, request: GenerationRequest) -> GenerationResult:
        content: list[dict[str, Any]] = []
        if request.image is not None:
            content.append({
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": media_type(request.image),
                    "data": base64.b64encode(request.image).decode("ascii"),
                },
            })
        content.append({"type": "text", "text": request.prompt})
        body = {
            "model": self.model,
            "max_tokens": MAX_OUTPUT_TOKENS,
            "system": request.system,
            "messages": [{"role": "user", "content": content}],
        }
        headers = {"x-api-key": self._api_key or "", "anthropic-version": ANTHROPIC_VERSION}
        data = await self._post(self._base_url or ANTHROPIC_URL, body, headers)
        text = "".join(block.get("text", "") for block in data.get("content") or [] if block.get("type") == "text")
        usage = data.get("usage") or {}
        return GenerationResult(
            text=text,
            usage=TokenUsage(int(usage.get("input_tokens", 0)), int(usage.get("output_tokens", 0))),
        )


class GoogleProvider(HttpProvider):
    async def generate(self, request: GenerationRequest) -> GenerationResult:
        parts: list[dict[str, Any]] = []
        if request.image is not None:
            parts.append({"inline_data": {
                "mime_type": media_type(request.image),
                "data": base64.b64encode(request.image).decode("ascii"),
            }})
        parts.append({"text": request.prompt})
        body = {
            "systemInstruction": {"parts": [{"text": request.system}]},
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {"maxOutputTokens": MAX_OUTPUT_TOKENS},
        }
        base_url = (self._base_url or GOOGLE_BASE_URL).rstrip("/")
        data = await self._post(f"{base_url}/models/{self.model}:generateContent", body,
                                {"x-goog-api-key": self._api_key or ""})
        candidates = data.get("candidates") or []
        if not candidates:
            raise GenerationError("No candidates in generateContent response")
        response_parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in response_parts)
        usage = data.get("usageMetadata") or {}
        return GenerationResult(
            text=text,
            usage=TokenUsage(int(usage.get("promptTokenCount", 0)), int(usage.get("candidatesTokenCount", 0))),
        )


class OllamaProvider(HttpProvider):
    async def generate(self, request: GenerationRequest) -> GenerationResult:
        user: dict[str, Any] = {"role": "user", "content": request.prompt}
        if request.image is not None:
            user["images"] = [base64.b64encode(request.image).decode("ascii")]
        body = {
            "model": self.model,
            "stream": False,
            "messages": [{"role": "system", "content": request.system}, user],
        }
        base_url = (self._base_url or OLLAMA_BASE_URL).rstrip("/")
        data = await self._post(f"{base_url}/api/chat", body)
        text = (data.get("message") or {}).get("content") or ""
        return GenerationResult(
            text=str(text),
            usage=TokenUsage(int(data.get("prompt_eval_count", 0)), int(data.get("eval_count", 0))),
        )


class RetryingGenerator(TextGeneratorProtocol):
    """
    Retries a provider with linear backoff (1s, 2s, ...) and trims its output.

    Only ``GenerationError`` is retried; anything else propagates at once.

    Args:
        provider: the wire-format provider.
        max_retries: retries after the first attempt.
        sleep: awaitable sleep, replaceable in tests.
    """

    def __init__(
        self,
        provider: HttpProvider,
        max_retries: int = 2,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._provider = provider
        self._max_retries = max_retries
        self._sleep = sleep
        self.model = provider.model

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            sleep=self._sleep,
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_incrementing(start=1, increment=1),
            retry=retry_if_exception_type(GenerationError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        attempts = self._max_retries + 1
        try:
            async for attempt in self._retrying():
                with attempt:
                    result = await self._provider.generate(request)
        except GenerationError as exc:
            raise GenerationError(f"Generation failed after {attempts} attempts: {exc}", attempts=attempts) from exc
        return GenerationResult(text=result.text.strip(), usage=result.usage)

    async def aclose(self) -> None:
        await self._provider.aclose()


PROVIDER_CLASSES: dict[str, type[HttpProvider]] = {
    "openai": OpenAICompatibleProvider,
    "openrouter": OpenAICompatibleProvider,
    "anthropic": AnthropicProvider,
    "google": GoogleProvider,
    "ollama": OllamaProvider,
}

PROVIDER_BASE_URLS: dict[str, Optional[str]] = {
    "openai": OPENAI_BASE_URL,
    "openrouter": OPENROUTER_BASE_URL,
    "anthropic": None,
    "google": None,
    "ollama": None,
}


class ProviderFactory:
    """Builds the configured generator."""

    @staticmethod
    def create(
        config: ResolvedConfig,
        environ: Optional[Mapping[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> RetryingGenerator:
        """Raises ProviderConfigurationError when no provider is set or its API key is missing."""
        env = os.environ if environ is None else environ
        provider = config.provider
        if provider is None or provider not in PROVIDER_CLASSES:
            raise ProviderConfigurationError(
                "No AI provider configured. Set OPENAI_API_KEY, ANTHROPIC_API_KEY, "
                "GOOGLE_GENERATIVE_AI_API_KEY or OPENROUTER_API_KEY, pass --provider, or use --no-ai."
            )
        variable = PROVIDER_ENV.get(provider)
        api_key = env.get(variable) if variable else None
        if variable and not api_key:
            raise ProviderConfigurationError(f"Provider {provider!r} requires {variable} to be set")
        base_url = env.get("OLLAMA_BASE_URL") if provider == "ollama" else PROVIDER_BASE_URLS[provider]
        return RetryingGenerator(PROVIDER_CLASSES[provider](config.model, api_key, base_url, client))
