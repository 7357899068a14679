"""Comment synthesis backed by the OpenAI chat completions API.

Each file gets its own ``OpenAICommentSynthesizer``. It first asks the model
for research notes on the file's terminology, then asks for the comments
themselves through a forced function call whose parameters are the JSON
schema of ``CommentBatch``.
"""

from __future__ import annotations

import logging
from typing import Any

from openai import AsyncOpenAI

from docsplice.context import AnnotationContext
from docsplice.models import CommentBatch, CommentRecord
from docsplice.settings import DocspliceSettings
from docsplice.synthesis.prompts import (
    COMMENT_FUNCTION_DESCRIPTION,
    COMMENT_FUNCTION_NAME,
    COMMENT_GENERATION_EXAMPLES,
    COMMENT_GENERATION_HUMAN_TEMPLATE,
    COMMENT_GENERATION_SYSTEM_TEMPLATE,
    RESEARCH_HUMAN_TEMPLATE,
    RESEARCH_SYSTEM_TEMPLATE,
)

logger = logging.getLogger(__name__)


class SynthesisError(RuntimeError):
    """The model answered without the expected function call."""


def comment_tool() -> dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": COMMENT_FUNCTION_NAME,
            "description": COMMENT_FUNCTION_DESCRIPTION,
            "parameters": CommentBatch.model_json_schema(),
        },
    }


class OpenAICommentSynthesizer:
    def __init__(self, client: AsyncOpenAI, settings: DocspliceSettings) -> None:
        self._client = client
        self._settings = settings
        self._research_history: list[dict[str, str]] = []

    @classmethod
    def from_context(cls, context: AnnotationContext) -> OpenAICommentSynthesizer:
        return cls(context.client, context.settings)

    async def research(self, source: str) -> str:
        """Return high-level notes on the terms used in *source*.

        The conversation only grows by answered turns. When the last answered
        turn was about the same source (a retried synthesis), its notes are
        reused instead of sending the file again.
        """
        question = {"role": "user", "content": RESEARCH_HUMAN_TEMPLATE.format(input=source)}
        if self._research_history[-2:-1] == [question]:
            logger.debug("Reusing research notes for a repeated source")
            return self._research_history[-1]["content"]

        messages = list(self._research_history) or [
            {
                "role": "system",
                "content": RESEARCH_SYSTEM_TEMPLATE.format(project_name=self._settings.project_name),
            }
        ]
        messages.append(question)
        response = await self._client.chat.completions.create(
            model=self._settings.model,
            temperature=self._settings.temperature,
            messages=messages,  # type: ignore[arg-type]
        )
        notes = response.choices[0].message.content or ""
        self._research_history = [*messages, {"role": "assistant", "content": notes}]
        logger.debug("Research notes: %d characters", len(notes))
        return notes

    async def synthesize(self, source: str) -> list[CommentRecord]:
        context = await self.research(source)
        system = COMMENT_GENERATION_SYSTEM_TEMPLATE.format(
            project_name=self._settings.project_name,
            examples=COMMENT_GENERATION_EXAMPLES,
        )
        human = COMMENT_GENERATION_HUMAN_TEMPLATE.format(context=context, input=source)
        response = await self._client.chat.completions.create(
            model=self._settings.model,
            temperature=self._settings.temperature,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": human},
            ],
            tools=[comment_tool()],  # type: ignore[list-item]
            tool_choice={"type": "function", "function": {"name": COMMENT_FUNCTION_NAME}},
        )
        tool_calls = response.choices[0].message.tool_calls or []
        for call in tool_calls:
            function = getattr(call, "function", None)
            if function is not None and function.name == COMMENT_FUNCTION_NAME:
                batch = CommentBatch.model_validate_json(function.arguments)
                logger.debug("Synthesized %d comment record(s)", len(batch.ts_doc_comments))
                return batch.ts_doc_comments
        raise SynthesisError(f"Model response did not call {COMMENT_FUNCTION_NAME}")
