import logging
from pathlib import Path

from tenacity import AsyncRetrying, before_sleep_log, stop_after_attempt, wait_exponential

from docsplice.context import AnnotationContext
from docsplice.core.formatter import format_comment_block
from docsplice.core.languages import detect_language_from_path
from docsplice.core.locator import locate_declaration
from docsplice.core.ports.synthesizer import CommentSynthesizer, SynthesizerFactory
from docsplice.core.scanner import scan_source_files
from docsplice.core.splicer import splice_comment
from docsplice.models import CommentRecord, FileAnnotation, SourceBuffer

logger = logging.getLogger(__name__)

_MAX_BACKOFF_SECONDS = 30.0


def apply_comment_records(
    buffer: SourceBuffer,
    records: list[CommentRecord],
    language: str = "typescript",
) -> tuple[SourceBuffer, list[str], list[str]]:
    """Splice one comment per record into *buffer*, re-parsing before every insertion.

    Returns (final buffer, inserted names, skipped names). A record is skipped
    when no eligible declaration with its name and kind remains.
    """
    inserted: list[str] = []
    skipped: list[str] = []
    for record in records:
        logger.info("Searching for %s in %s", record.name, buffer.path)
        node = locate_declaration(buffer.content, record.name, record.kind, language)
        if node is None:
            skipped.append(record.name)
            continue
        logger.info("Splicing comment for %s in %s", node.name, buffer.path)
        buffer = splice_comment(buffer, node, format_comment_block(record))
        inserted.append(node.name)
    return buffer, inserted, skipped


async def _synthesize(
    synthesizer: CommentSynthesizer, source: str, attempts: int, backoff: float
) -> list[CommentRecord]:
    retrying = AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=backoff, max=_MAX_BACKOFF_SECONDS),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    records: list[CommentRecord] = []
    async for attempt in retrying:
        with attempt:
            records = await synthesizer.synthesize(source)
    return records


async def annotate_file(
    path: str | Path,
    synthesizer: CommentSynthesizer,
    attempts: int = 1,
    backoff: float = 0.0,
) -> FileAnnotation:
    """Document one file in place.

    Comments are synthesized once from the original text; each record is then
    located against the current buffer so earlier insertions never leave stale
    offsets behind. The final buffer always overwrites *path*.
    """
    file_path = Path(path)
    logger.info("Adding comments for %s", file_path)
    language = detect_language_from_path(file_path)
    buffer = SourceBuffer(path=file_path, content=file_path.read_bytes())

    records = await _synthesize(synthesizer, buffer.text, attempts, backoff)
    buffer, inserted, skipped = apply_comment_records(buffer, records, language)

    file_path.write_bytes(buffer.content)
    return FileAnnotation(path=str(file_path), inserted=inserted, skipped=skipped)


async def annotate_tree(
    root: str | Path,
    context: AnnotationContext,
    synthesizer_factory: SynthesizerFactory,
) -> list[FileAnnotation]:
    """Scan *root* and annotate each selected file in order.

    A fresh synthesizer is built per file. Any error aborts the run; files
    already written stay written.
    """
    settings = context.settings
    paths = scan_source_files(root, settings.source_suffix, settings.excluded_suffix)
    results: list[FileAnnotation] = []
    for path in paths:
        synthesizer = synthesizer_factory(context)
        results.append(
            await annotate_file(
                path,
                synthesizer,
                attempts=settings.synthesis_attempts,
                backoff=settings.synthesis_backoff,
            )
        )
    return results
