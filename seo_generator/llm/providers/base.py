"""Abstract interface shared by every LLM provider client."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Any, Callable

import httpx

from ...config import GenerationConfig, LoggingConfig
from ...core.types import ProviderDescriptor
from ...errors import ProviderCallError, UnavailableProviderError
from ...utils.logging import log_event, redact_text, truncate_text
from ..tracing import provider_span, record_span_error, set_span_output


class ProviderClient(ABC):
    """Uniform "generate text for prompt" contract over one provider.

    Subclasses build the provider-specific request and pull the text out of
    the provider-specific response. No retries are attempted here.
    """

    def __init__(
        self,
        descriptor: ProviderDescriptor,
        generation_cfg: GenerationConfig,
        log_cfg: LoggingConfig | None = None,
        llm_logger: logging.Logger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not descriptor.available:
            raise UnavailableProviderError(
                f"{descriptor.display_name} API key not configured"
            )
        self.descriptor = descriptor
        self.generation_cfg = generation_cfg
        self.log_cfg = log_cfg or LoggingConfig()
        self.llm_logger = llm_logger
        self._transport = transport

    @property
    def name(self) -> str:
        return self.descriptor.tag.value

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Return the raw provider text for a prompt."""
        raise NotImplementedError

    async def _call(
        self,
        prompt: str,
        url: str,
        payload: dict[str, Any],
        extract: Callable[[dict[str, Any]], str | None],
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """POST a request, extract its text and log the exchange."""
        with provider_span(self.descriptor, prompt) as span:
            try:
                data = await self._post_json(url, payload, params=params, headers=headers)
            except (httpx.HTTPError, ValueError) as exc:
                record_span_error(span, exc)
                self._log_llm_response("provider_error", prompt, _describe_http_error(exc))
                raise ProviderCallError(
                    f"{self.descriptor.display_name} request failed: {_describe_http_error(exc)}",
                    provider=self.name,
                ) from exc

            text = extract(data)
            if text is None:
                error = ProviderCallError(
                    f"{self.descriptor.display_name} response contained no text",
                    provider=self.name,
                )
                record_span_error(span, error)
                self._log_llm_response("empty_response", prompt, str(data))
                raise error

            set_span_output(span, text)
            self._log_llm_response("ok", prompt, text)
            return text

    async def _post_json(
        self,
        url: str,
        payload: dict[str, Any],
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=self.descriptor.timeout_seconds, transport=self._transport
        ) as client:
            resp = await client.post(url, params=params, headers=headers, json=payload)
            resp.raise_for_status()
            return resp.json()

    def _log_llm_response(self, status: str, prompt: str, content: str) -> None:
        if self.llm_logger is None:
            return
        redaction = self.log_cfg.llm_log_redaction
        payload = {
            "event": "llm_response",
            "status": status,
            "provider": self.name,
            "model": self.descriptor.model,
            "raw_response": truncate_text(redact_text(content, redaction)),
        }
        if self.log_cfg.llm_log_detail == "prompt_response":
            payload["raw_prompt"] = truncate_text(redact_text(prompt, redaction))
        log_event(self.llm_logger, "LLM response", **payload)


def _describe_http_error(exc: Exception) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code} from {exc.request.url.host}"
    if isinstance(exc, httpx.TimeoutException):
        return f"request timed out ({type(exc).__name__})"
    return f"{type(exc).__name__}: {exc}"
