"""
Caller-facing result schemas.

Flat success/error shapes returned by the chat, note and mind map operations.
Internal message and summary structures never appear here.

Dependencies: pydantic, vaultmind.core.exceptions
System role: Pipeline result contracts
"""

from langchain_core.messages import BaseMessage
from pydantic import BaseModel, ConfigDict, Field

from vaultmind.core.agentic_system.summarizer.mind_map_schema import MindMap
from vaultmind.core.exceptions import ErrorKind, VaultMindException


class ChatResult(BaseModel):
    """Outcome of one conversational turn."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool = Field(description="Whether the turn produced an answer")
    answer: str | None = Field(default=None, description="Final AI answer")
    error_kind: ErrorKind | None = Field(default=None, description="Error category on failure")
    error: str | None = Field(default=None, description="User-facing error message")
    messages: list[BaseMessage] = Field(
        default_factory=list,
        exclude=True,
        description="Conversation after the turn, for callers that persist history",
    )

    @classmethod
    def ok(cls, answer: str, messages: list[BaseMessage] | None = None) -> "ChatResult":
        return cls(success=True, answer=answer, messages=messages or [])

    @classmethod
    def failure(cls, exc: VaultMindException, message: str | None = None) -> "ChatResult":
        return cls(success=False, error_kind=exc.error_kind, error=message or exc.message)


class NoteResult(BaseModel):
    """Outcome of one note generation run."""

    success: bool = Field(description="Whether a note was generated and stored")
    notes: str | None = Field(default=None, description="Consolidated summary text")
    error_kind: ErrorKind | None = Field(default=None, description="Error category on failure")
    error: str | None = Field(default=None, description="User-facing error message")

    @classmethod
    def ok(cls, notes: str) -> "NoteResult":
        return cls(success=True, notes=notes)

    @classmethod
    def failure(cls, exc: VaultMindException, message: str | None = None) -> "NoteResult":
        return cls(success=False, error_kind=exc.error_kind, error=message or exc.message)


class MindMapResult(BaseModel):
    """Outcome of one mind map generation."""

    success: bool = Field(description="Whether a mind map was generated")
    mind_map: MindMap | None = Field(default=None, description="Validated mind map")
    error_kind: ErrorKind | None = Field(default=None, description="Error category on failure")
    error: str | None = Field(default=None, description="User-facing error message")

    @classmethod
    def ok(cls, mind_map: MindMap) -> "MindMapResult":
        return cls(success=True, mind_map=mind_map)

    @classmethod
    def failure(cls, exc: VaultMindException, message: str | None = None) -> "MindMapResult":
        return cls(success=False, error_kind=exc.error_kind, error=message or exc.message)

    @classmethod
    def from_note_failure(cls, note: NoteResult) -> "MindMapResult":
        return cls(success=False, error_kind=note.error_kind, error=note.error)
