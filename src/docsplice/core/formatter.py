from docsplice.models import CommentRecord

WRAP_WIDTH = 70


def wrap_description(text: str) -> list[str]:
    """Greedily wrap *text* into lines of roughly ``WRAP_WIDTH`` characters.

    A new line starts only when the current line plus the next word exceeds
    the width; the joining space is not counted, so a line can reach
    ``WRAP_WIDTH + 1`` characters. Words longer than the width are never split.
    """
    lines: list[str] = []
    for word in text.split():
        if not lines or len(lines[-1]) + len(word) > WRAP_WIDTH:
            lines.append(word)
        else:
            lines[-1] = f"{lines[-1]} {word}"
    return lines


def _tag_lines(record: CommentRecord) -> list[str]:
    if record.kind != "method":
        return []
    tags = [f"@param {param.name} {param.description}" for param in record.params]
    if record.returns:
        tags.append(f"@returns {record.returns}")
    return tags


def format_comment_block(record: CommentRecord) -> str:
    """Render *record* as a ``/** ... */`` block without a trailing newline."""
    lines = ["/**", *wrap_description(record.text), *_tag_lines(record)]
    return "\n * ".join(lines) + "\n */"
