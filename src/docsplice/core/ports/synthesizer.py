from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from docsplice.models import CommentRecord

if TYPE_CHECKING:
    from docsplice.context import AnnotationContext


class CommentSynthesizer(Protocol):
    async def synthesize(self, source: str) -> list[CommentRecord]: ...


SynthesizerFactory = Callable[["AnnotationContext"], CommentSynthesizer]
