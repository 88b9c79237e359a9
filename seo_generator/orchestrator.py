"""
Generation orchestration across interchangeable LLM providers.

The orchestrator is the entry point for every generation kind:
1. Resolve the active provider from the injected selector
2. Build the kind-specific prompt
3. Call the provider client
4. Normalize the raw text into the kind's structured type

``generate_all`` runs the four single-kind generations concurrently and
joins on all of them; any branch failure fails the whole call.

Each generation reads the selector once, before its first suspension
point. A provider switch that lands while ``generate_all`` is in flight
can therefore produce an aggregate built from two providers.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable

from .config import GenerationConfig, LoggingConfig
from .core.types import (
    AggregatedResult,
    GenerationKind,
    GenerationOutcome,
    GenerationRequest,
    KeywordItem,
    MetaDescription,
    ProviderDescriptor,
    ProviderTag,
)
from .errors import AggregateGenerationError
from .llm.normalizer import normalize
from .llm.prompts import build_prompt
from .llm.providers.base import ProviderClient
from .llm.providers.factory import create_client
from .llm.registry import ProviderSelector
from .llm.tracing import generation_span, record_span_error, set_span_output

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., ProviderClient]

SINGLE_KINDS = (
    GenerationKind.KEYWORDS,
    GenerationKind.TITLE,
    GenerationKind.META,
    GenerationKind.CONTENT,
)


class GenerationOrchestrator:
    """Builds prompts, calls the active provider and normalizes its output.

    Args:
        selector: Holder of the active provider
        generation_cfg: Prompt and sampling settings
        client_factory: Callable building a ProviderClient for a descriptor
        log_cfg: Logging settings forwarded to provider clients
        llm_logger: Optional logger receiving prompt/response events
    """

    def __init__(
        self,
        selector: ProviderSelector,
        generation_cfg: GenerationConfig | None = None,
        client_factory: ClientFactory = create_client,
        log_cfg: LoggingConfig | None = None,
        llm_logger: logging.Logger | None = None,
    ):
        self.selector = selector
        self.generation_cfg = generation_cfg or GenerationConfig()
        self._client_factory = client_factory
        self.log_cfg = log_cfg or LoggingConfig()
        self.llm_logger = llm_logger

    async def generate_keywords(self, topic: str) -> list[KeywordItem]:
        result, _ = await self._generate(GenerationKind.KEYWORDS, topic)
        return result

    async def generate_title(self, topic: str) -> list[str]:
        result, _ = await self._generate(GenerationKind.TITLE, topic)
        return result

    async def generate_meta(self, topic: str) -> MetaDescription:
        result, _ = await self._generate(GenerationKind.META, topic)
        return result

    async def generate_content(self, topic: str) -> str:
        result, _ = await self._generate(GenerationKind.CONTENT, topic)
        return result

    async def generate_all(
        self,
        topic: str,
        selected_keywords: Iterable[str] | None = None,
    ) -> AggregatedResult:
        """Generate every artifact concurrently and merge the results.

        Args:
            topic: Topic to generate content for
            selected_keywords: Optional allow-list; when non-empty only keywords
                whose text is an exact member are kept

        Returns:
            AggregatedResult with all four artifacts

        Raises:
            AggregateGenerationError: If any branch fails, wrapping the branch
                that failed first. No partial result is returned and
                unfinished branches are cancelled.
        """
        result, _ = await self._generate_all(topic, selected_keywords)
        return result

    async def generate(
        self,
        kind: GenerationKind | str,
        topic: str,
        selected_keywords: Iterable[str] | None = None,
    ) -> Any:
        """Dispatch a generation by kind."""
        outcome = await self.run(GenerationRequest(topic, GenerationKind(kind), selected_keywords))
        return outcome.result

    async def run(self, request: GenerationRequest) -> GenerationOutcome:
        """Execute a caller request, reporting which providers served it."""
        kind = GenerationKind(request.kind)
        if kind is GenerationKind.ALL:
            result, providers = await self._generate_all(request.topic, request.selected_keywords)
        else:
            result, tag = await self._generate(kind, request.topic)
            providers = (tag,)
        return GenerationOutcome(result=result, providers=providers)

    def switch_provider(self, name: str) -> str:
        return self.selector.set_active(name)

    async def _generate_all(
        self,
        topic: str,
        selected_keywords: Iterable[str] | None,
    ) -> tuple[AggregatedResult, tuple[ProviderTag, ...]]:
        _require_topic(topic)
        selected = set(selected_keywords or [])

        with generation_span(GenerationKind.ALL.value, topic) as span:
            # Branches are appended here in the order they fail.
            failures: list[asyncio.Task] = []

            def _note_failure(task: asyncio.Task) -> None:
                if not task.cancelled() and task.exception() is not None:
                    failures.append(task)

            tasks: dict[asyncio.Task, GenerationKind] = {}
            for kind in SINGLE_KINDS:
                task = asyncio.create_task(
                    self._generate(kind, topic), name=f"generate-{kind.value}"
                )
                task.add_done_callback(_note_failure)
                tasks[task] = kind

            try:
                _, pending = await asyncio.wait(list(tasks), return_when=asyncio.FIRST_EXCEPTION)
            except asyncio.CancelledError:
                await _cancel_all(tasks)
                raise

            if failures:
                await _cancel_all(pending)
                first = failures[0]
                kind = tasks[first]
                exc = first.exception()
                logger.warning("Aggregate generation failed in %s branch: %s", kind.value, exc)
                error = AggregateGenerationError(kind.value, exc)
                record_span_error(span, error)
                raise error from exc

            results: dict[GenerationKind, Any] = {}
            providers: dict[GenerationKind, ProviderTag] = {}
            for task, kind in tasks.items():
                results[kind], providers[kind] = task.result()

            keywords = results[GenerationKind.KEYWORDS]
            if selected:
                keywords = [item for item in keywords if item.keyword in selected]

            aggregated = AggregatedResult(
                keywords=keywords,
                titles=results[GenerationKind.TITLE],
                meta=results[GenerationKind.META],
                content=results[GenerationKind.CONTENT],
            )
            set_span_output(span, aggregated.to_dict())
            return aggregated, tuple(providers[kind] for kind in SINGLE_KINDS)

    async def _generate(self, kind: GenerationKind, topic: str) -> tuple[Any, ProviderTag]:
        _require_topic(topic)
        state = "idle"
        descriptor: ProviderDescriptor | None = None
        try:
            descriptor = self.selector.get_active()
            state = "provider_resolved"
            with generation_span(kind.value, topic, descriptor) as span:
                try:
                    prompt = build_prompt(kind, topic, self.generation_cfg)
                    state = "prompt_built"
                    client = self._client_factory(
                        descriptor, self.generation_cfg, self.log_cfg, self.llm_logger
                    )
                    raw = await client.generate(prompt)
                    state = "requested"
                    result = normalize(kind, raw)
                    state = "normalized"
                except Exception as exc:
                    record_span_error(span, exc)
                    raise
                set_span_output(span, raw)
        except Exception as exc:
            logger.debug(
                "Generation %s failed after %s (provider=%s): %s",
                kind.value,
                state,
                descriptor.tag.value if descriptor else None,
                exc,
            )
            raise
        logger.debug("Generation %s done (provider=%s)", kind.value, descriptor.tag.value)
        return result, descriptor.tag


def _require_topic(topic: str) -> None:
    if not isinstance(topic, str) or not topic.strip():
        raise ValueError("Topic must be a non-empty string")


async def _cancel_all(tasks: Iterable[asyncio.Task]) -> None:
    pending = [task for task in tasks if not task.done()]
    for task in pending:
        task.cancel()
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)
