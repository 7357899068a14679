"""Unit tests for Pydantic models and language helpers."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from docsplice.core.languages import detect_language_from_path, normalize_language
from docsplice.models import CommentBatch, CommentRecord, SourceBuffer


class TestCommentRecordModel:
    """Tests for the CommentRecord model."""

    def test_validates_wire_payload(self) -> None:
        record = CommentRecord.model_validate(
            {"name": "run", "type": "method", "text": "Runs.", "params": [{"name": "x", "description": "input"}]}
        )
        assert record.kind == "method"
        assert record.params[0].description == "input"
        assert record.returns is None

    def test_accepts_field_name(self) -> None:
        record = CommentRecord(name="Box", kind="class", text="A box.")
        assert record.params == []

    def test_rejects_unknown_kind(self) -> None:
        with pytest.raises(ValidationError):
            CommentRecord.model_validate({"name": "x", "type": "variable", "text": "X."})

    def test_requires_name(self) -> None:
        with pytest.raises(ValidationError):
            CommentRecord.model_validate({"type": "class", "text": "X."})

    def test_dumps_with_wire_names(self) -> None:
        record = CommentRecord(name="Box", kind="class", text="A box.")
        assert record.model_dump(by_alias=True)["type"] == "class"

    def test_batch_from_json(self) -> None:
        batch = CommentBatch.model_validate_json('{"ts_doc_comments": [{"name": "T", "type": "type", "text": "T."}]}')
        assert batch.ts_doc_comments[0].kind == "type"


class TestSourceBuffer:
    def test_text_decodes_utf8(self) -> None:
        buffer = SourceBuffer(path=Path("a.ts"), content="const é = 1;".encode())
        assert buffer.text == "const é = 1;"

    def test_is_immutable(self) -> None:
        buffer = SourceBuffer(path=Path("a.ts"), content=b"")
        with pytest.raises(AttributeError):
            buffer.content = b"x"  # type: ignore[misc]


class TestLanguages:
    @pytest.mark.parametrize(("alias", "expected"), [("ts", "typescript"), (" TypeScript ", "typescript"), ("tsx", "tsx")])
    def test_normalize_language(self, alias: str, expected: str) -> None:
        assert normalize_language(alias) == expected

    def test_normalize_rejects_unsupported(self) -> None:
        with pytest.raises(ValueError, match="Unsupported language"):
            normalize_language("python")

    @pytest.mark.parametrize(
        ("name", "expected"), [("a.ts", "typescript"), ("a.mts", "typescript"), ("b.tsx", "tsx"), ("c.d.ts", "typescript")]
    )
    def test_detect_language_from_path(self, name: str, expected: str) -> None:
        assert detect_language_from_path(Path(name)) == expected

    def test_detect_rejects_unknown_extension(self) -> None:
        with pytest.raises(ValueError, match="Unsupported file extension"):
            detect_language_from_path(Path("main.go"))
