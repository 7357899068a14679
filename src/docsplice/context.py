from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from openai import AsyncOpenAI

from docsplice.settings import DocspliceSettings

logger = logging.getLogger(__name__)


@dataclass
class AnnotationContext:
    """Process-wide state shared by every file of one run."""

    settings: DocspliceSettings
    client: AsyncOpenAI

    async def dispose(self) -> None:
        await self.client.close()


def create_context(settings: DocspliceSettings) -> AnnotationContext:
    client = AsyncOpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
    return AnnotationContext(settings=settings, client=client)


@asynccontextmanager
async def annotation_context(settings: DocspliceSettings) -> AsyncIterator[AnnotationContext]:
    context = create_context(settings)
    logger.debug("Created annotation context (model: %s)", settings.model)
    try:
        yield context
    finally:
        await context.dispose()
