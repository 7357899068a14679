from dataclasses import replace

from docsplice.models import DeclarationNode, SourceBuffer


def splice_comment(buffer: SourceBuffer, node: DeclarationNode, block: str) -> SourceBuffer:
    """Return a new buffer with ``block`` and a newline inserted at *node*'s start.

    *node* must come from parsing *buffer*; its offsets are stale for the
    returned buffer.
    """
    offset = node.start_byte
    if not 0 <= offset <= len(buffer.content):
        raise ValueError(f"Offset {offset} is outside the buffer for {buffer.path} ({len(buffer.content)} bytes)")
    inserted = (block + "\n").encode("utf-8")
    return replace(buffer, content=buffer.content[:offset] + inserted + buffer.content[offset:])
