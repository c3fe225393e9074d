from dataclasses import dataclass

import httpx
import structlog

from core.config import Settings
from core.exceptions import ConfigurationError, UpstreamError

logger = structlog.get_logger(__name__)


@dataclass
class Completion:
    content: str
    total_tokens: int | None = None


class LLMClient:
    """OpenAI-compatible chat completions over OpenRouter."""

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str,
        app_url: str,
        app_title: str,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        timeout: float | None = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.app_url = app_url
        self.app_title = app_title
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> "LLMClient":
        return cls(
            api_key=settings.OPENROUTER_API_KEY,
            base_url=settings.OPENROUTER_BASE_URL,
            app_url=settings.APP_URL,
            app_title=settings.APP_TITLE,
            temperature=settings.LLM_TEMPERATURE,
            max_tokens=settings.LLM_MAX_TOKENS,
            timeout=settings.LLM_TIMEOUT_SECONDS,
            transport=transport,
        )

    def ensure_configured(self) -> None:
        if not self.api_key:
            raise ConfigurationError(
                "OpenRouter API key not configured. Please set OPENROUTER_API_KEY in .env file."
            )

    async def complete(self, *, model: str, prompt: str, image_urls: list[str]) -> Completion:
        self.ensure_configured()

        content = [{"type": "text", "text": prompt}]
        content.extend({"type": "image_url", "image_url": {"url": url}} for url in image_urls)
        body = {
            "model": model,
            "messages": [{"role": "user", "content": content}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "response_format": {"type": "json_object"},
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.app_url,
            "X-Title": self.app_title,
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                r = await client.post(f"{self.base_url}/chat/completions", headers=headers, json=body)
                r.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.warning("llm_request_rejected", model=model, status=exc.response.status_code)
                raise UpstreamError(
                    f"LLM request failed with status {exc.response.status_code}: {_error_message(exc.response)}"
                ) from exc
            except httpx.HTTPError as exc:
                logger.warning("llm_request_failed", model=model, error=str(exc))
                raise UpstreamError(f"LLM request failed: {exc}") from exc

        try:
            data = r.json()
        except ValueError as exc:
            raise UpstreamError("LLM provider returned a non-JSON body") from exc

        if not isinstance(data, dict):
            raise UpstreamError("LLM provider returned an unexpected body")
        choices = data.get("choices") or []
        message = (choices[0].get("message") or {}) if choices else {}
        text = message.get("content")
        if not text:
            raise UpstreamError("No response from LLM")

        usage = data.get("usage") or {}
        return Completion(content=text, total_tokens=usage.get("total_tokens"))


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return error.get("message") or str(error)
    return str(error) if error else response.reason_phrase
