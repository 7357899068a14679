from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CommentKind = Literal["method", "class", "type", "interface", "function"]


class DeclarationKind(str, Enum):
    METHOD = "method"
    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE_ALIAS = "type"


@dataclass(frozen=True)
class SourceBuffer:
    """One version of a file's bytes. Mutations produce a new buffer.

    ``text`` decodes leniently; splicing always works on the untouched bytes.
    """

    path: Path
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class DeclarationNode:
    """A declaration found in one specific ``SourceBuffer``.

    Offsets are byte offsets into the buffer the node was parsed from and are
    stale as soon as that buffer is spliced.
    """

    kind: DeclarationKind
    name: str
    start_byte: int
    end_byte: int
    leading_start_byte: int
    start_row: int = 0


class CommentParam(BaseModel):
    name: str = Field(description="The name of the param")
    description: str = Field(description="A description of the parameter")


class CommentRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(description="The full TSDoc text, including newlines")
    name: str = Field(description="The method or class name")
    kind: CommentKind = Field(alias="type")
    params: list[CommentParam] = Field(
        default_factory=list,
        description=(
            "For methods, a list of parameters the method takes. Should contain all information "
            "to render as an @param declaration. Should be empty for non-methods"
        ),
    )
    returns: str | None = Field(default=None, description="For methods, information on what the method returns")


class CommentBatch(BaseModel):
    ts_doc_comments: list[CommentRecord]


class FileAnnotation(BaseModel):
    path: str
    inserted: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
