"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, scripted language model gateways,
FAISS index over deterministic fake embeddings, source file helpers
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.tools import BaseTool

from vaultmind.boundary.llm.gateway import BaseLanguageModelGateway, message_text


class StubGateway(BaseLanguageModelGateway):
    """
    Scripted gateway that records every call.

    `responder` receives the messages and tools of each call and returns
    the AIMessage to hand back (or raises). Token counts default to the
    number of whitespace-separated words.
    """

    def __init__(
        self,
        responder: Callable[[list[BaseMessage], list[BaseTool]], AIMessage],
        token_counter: Callable[[str], int] | None = None,
    ) -> None:
        self._responder = responder
        self._token_counter = token_counter or (lambda text: len(text.split()))
        self.calls: list[dict] = []
        self.token_calls: list[str] = []

    async def complete(
        self,
        messages: Sequence[BaseMessage],
        tools: Sequence[BaseTool] | None = None,
    ) -> AIMessage:
        call = {"messages": list(messages), "tools": list(tools or [])}
        self.calls.append(call)
        return self._responder(call["messages"], call["tools"])

    async def count_tokens(self, text: str) -> int:
        self.token_calls.append(text)
        return self._token_counter(text)

    def prompts(self) -> list[str]:
        """Text of the last message of every call."""
        return [message_text(call["messages"][-1]) for call in self.calls]


class ScriptedGateway(StubGateway):
    """Gateway returning queued replies in order."""

    def __init__(self, replies: Sequence[AIMessage | Exception], **kwargs) -> None:
        self._replies = list(replies)
        super().__init__(self._next_reply, **kwargs)

    def _next_reply(self, messages: list[BaseMessage], tools: list[BaseTool]) -> AIMessage:
        if not self._replies:
            raise AssertionError("ScriptedGateway ran out of replies")
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def tool_call_message(query: str, call_id: str = "call_1") -> AIMessage:
    """AI message requesting one retrieve call."""
    return AIMessage(
        content="",
        tool_calls=[{"name": "retrieve", "args": {"query": query}, "id": call_id}],
    )


@pytest.fixture
def fake_embeddings() -> DeterministicFakeEmbedding:
    """Deterministic embeddings: identical text always maps to the same vector."""
    return DeterministicFakeEmbedding(size=32)


@pytest.fixture
def vector_store(fake_embeddings):
    """Empty in-memory FAISS index."""
    from vaultmind.boundary.vdb.faiss_vectors_store import FAISSVectorsStore

    return FAISSVectorsStore(embeddings=fake_embeddings, index_name="test-index")


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Directory with one markdown and one plain-text source."""
    (tmp_path / "biology.md").write_text(
        "# Cells\n\nThe mitochondria is the powerhouse of the cell.\n"
        "Ribosomes synthesize proteins from amino acids.\n",
        encoding="utf-8",
    )
    (tmp_path / "history.txt").write_text(
        "The Roman Republic was founded in 509 BC after the overthrow of the monarchy.\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from vaultmind.boundary.db import models  # noqa: F401
    from vaultmind.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()
