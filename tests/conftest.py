"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from docsplice.models import CommentRecord
from docsplice.settings import DocspliceSettings

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


class FakeSynthesizer:
    """Returns canned records and counts calls; optionally fails first."""

    def __init__(self, records: list[CommentRecord], failures: int = 0, error: Exception | None = None) -> None:
        self.records = records
        self.failures = failures
        self.error = error or RuntimeError("synthesis failed")
        self.calls: list[str] = []

    async def synthesize(self, source: str) -> list[CommentRecord]:
        self.calls.append(source)
        if len(self.calls) <= self.failures:
            raise self.error
        return list(self.records)


@pytest.fixture
def make_synthesizer() -> type[FakeSynthesizer]:
    """Return the fake synthesizer class so tests can build instances with their own records."""
    return FakeSynthesizer


@pytest.fixture
def typescript_parser() -> Parser:
    """Return a tree-sitter parser for TypeScript."""
    return get_parser("typescript")


@pytest.fixture
def settings() -> DocspliceSettings:
    return DocspliceSettings(openai_api_key="test-key", synthesis_attempts=3, synthesis_backoff=0.0)


@pytest.fixture
def add_source() -> str:
    return "export function add(a: number, b: number): number {\n  return a + b;\n}\n"


@pytest.fixture
def add_record() -> CommentRecord:
    return CommentRecord.model_validate(
        {
            "name": "add",
            "type": "function",
            "text": "Adds two numbers together.",
            "params": [{"name": "a", "description": "first operand"}],
            "returns": "the sum",
        }
    )
