from functools import lru_cache
from typing import cast

from tree_sitter import Node, Parser, Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

from docsplice.core.languages import normalize_language


@lru_cache(maxsize=None)
def _parser_for(language: str) -> Parser:
    return get_parser(cast(SupportedLanguage, language))


def parse_source(source_bytes: bytes, language: str = "typescript") -> Tree:
    """Parse *source_bytes* with the tree-sitter grammar for *language*.

    Syntax errors never raise; tree-sitter recovers and marks the damaged
    region with ``ERROR`` nodes.
    """
    return _parser_for(normalize_language(language)).parse(source_bytes)


def node_text(node: Node) -> str:
    return (node.text or b"").decode("utf-8", errors="replace")
