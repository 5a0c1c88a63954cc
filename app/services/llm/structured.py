"""Structured generation capability.

Given a system prompt, a user prompt and a pydantic output schema, return the
parsed and validated object or a typed failure. Provider errors, timeouts and
schema violations never escape as exceptions; callers decide how to degrade.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from loguru import logger
from pydantic import BaseModel
from pydantic_ai import Agent
from pydantic_ai.models import Model

from app.config.settings import Settings
from app.services.llm.model import get_model

OutputT = TypeVar("OutputT", bound=BaseModel)


@dataclass(frozen=True)
class GenerationResult(Generic[OutputT]):
    """Parsed output, or the reason there is none."""

    output: OutputT | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.output is not None


class StructuredGenerator:
    """Runs schema-constrained model calls.

    Constructed once per process with an explicit model handle. When no model
    is configured every call fails fast with a typed failure.
    """

    def __init__(self, model: Model | None, *, timeout_seconds: float = 60.0) -> None:
        self._model = model
        self._timeout_seconds = timeout_seconds

    @property
    def configured(self) -> bool:
        return self._model is not None

    async def generate(
        self,
        *,
        name: str,
        system_prompt: str,
        user_prompt: str,
        output_type: type[OutputT],
        builtin_tools: Sequence[Any] = (),
    ) -> GenerationResult[OutputT]:
        """Run one structured call.

        Args:
            name: Short call name used in logs (e.g. "health_facts")
            system_prompt: System instructions
            user_prompt: User message
            output_type: Pydantic model the output must validate against
            builtin_tools: Provider-side tools (e.g. web search)

        Returns:
            GenerationResult with ``output`` set on success, ``error`` otherwise
        """
        if self._model is None:
            logger.warning(f"[{name}] model provider not configured")
            return GenerationResult(output=None, error="model provider not configured")

        agent_kwargs: dict[str, Any] = {}
        if builtin_tools:
            agent_kwargs["builtin_tools"] = list(builtin_tools)

        logger.debug(f"LLM Prompt: {name}", system_prompt=system_prompt, user_prompt=user_prompt)
        try:
            agent = Agent(
                model=self._model,
                system_prompt=system_prompt,
                output_type=output_type,
                retries=0,
                **agent_kwargs,
            )
            result = await asyncio.wait_for(agent.run(user_prompt), timeout=self._timeout_seconds)
        except TimeoutError:
            logger.error(f"[{name}] model call timed out after {self._timeout_seconds}s")
            return GenerationResult(output=None, error="timeout")
        except Exception as e:
            logger.error(f"[{name}] model call failed: {type(e).__name__}: {e}")
            return GenerationResult(output=None, error=f"{type(e).__name__}: {e}")

        if result.output is None:
            logger.warning(f"[{name}] missing model output")
            return GenerationResult(output=None, error="missing output")

        logger.info(f"[{name}] structured output received")
        return GenerationResult(output=result.output)


def build_structured_generator(settings: Settings) -> StructuredGenerator:
    """Construct the process-wide generator from settings."""
    if not settings.openai_api_key:
        return StructuredGenerator(None, timeout_seconds=settings.llm_timeout_seconds)
    model = get_model("openai", settings.llm_model, settings.openai_api_key)
    return StructuredGenerator(model, timeout_seconds=settings.llm_timeout_seconds)
