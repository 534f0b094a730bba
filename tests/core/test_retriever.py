"""Tests for vault-scoped retrieval and its tool wrapper.

Dependencies: pytest, langchain_core
System role: Retriever formatting and filtering verification
"""

import pytest

from vaultmind.boundary.vdb.vector_schemas import VectorMetadata, VectorSearchResult
from vaultmind.core.agentic_system.agent.rag_agent_tool import RETRIEVE_TOOL_NAME, create_retrieve_tool
from vaultmind.core.retriever import Retriever, format_results


def hit(content: str, source_ref: str = "") -> VectorSearchResult:
    return VectorSearchResult(
        chunk_id=content[:8],
        content=content,
        metadata=VectorMetadata(vault_id=1, source_ref=source_ref),
        score=0.1,
    )


@pytest.fixture
def populated_store(vector_store):
    vector_store.upsert(
        ids=[f"v1-{i}" for i in range(7)] + ["v2-0"],
        texts=[f"vault one passage number {i}" for i in range(7)] + ["vault two passage"],
        metadatas=[{"vault_id": 1, "source_ref": "one.md", "chunk_id": f"v1-{i}"} for i in range(7)]
        + [{"vault_id": 2, "source_ref": "two.md", "chunk_id": "v2-0"}],
    )
    return vector_store


class TestFormatResults:
    """Test the text the model sees."""

    def test_blocks_joined_by_blank_line(self) -> None:
        """Each hit renders as Source/Content and hits are blank-line separated."""
        formatted = format_results([hit("First passage", "a.pdf"), hit("Second passage", "b.md")])

        assert formatted == (
            "Source: a.pdf\nContent: First passage\n\n"
            "Source: b.md\nContent: Second passage"
        )

    def test_missing_source_falls_back(self) -> None:
        """Hits without a source reference are labelled 'Undefined Source'."""
        assert format_results([hit("Orphan text")]) == "Source: Undefined Source\nContent: Orphan text"

    def test_no_hits_is_empty_string(self) -> None:
        """No results render as an empty string."""
        assert format_results([]) == ""


class TestRetriever:
    """Test Retriever against a FAISS index."""

    @pytest.mark.asyncio
    async def test_empty_index_is_successful_and_empty(self, vector_store) -> None:
        """An empty index yields '' and no results, without raising."""
        result = await Retriever(vector_store).retrieve("anything", vault_id=1)

        assert result.formatted_text == ""
        assert result.results == []

    @pytest.mark.asyncio
    async def test_returns_top_k_from_one_vault(self, populated_store) -> None:
        """At most k hits, all from the requested vault."""
        result = await Retriever(populated_store, top_k=5).retrieve("vault passage", vault_id=1)

        assert len(result.results) == 5
        assert all(r.metadata.vault_id == 1 for r in result.results)
        assert result.formatted_text.count("Source: one.md") == 5
        assert "two.md" not in result.formatted_text

    def test_default_top_k_is_five(self, vector_store) -> None:
        """Default k matches the retrieval policy."""
        assert Retriever(vector_store).top_k == 5


class TestRetrieveTool:
    """Test the LangChain tool wrapping the retriever."""

    @pytest.mark.asyncio
    async def test_tool_returns_content_and_artifact(self, populated_store) -> None:
        """A tool call yields a ToolMessage whose artifact holds the raw hits."""
        tool = create_retrieve_tool(Retriever(populated_store, top_k=2), vault_id=2)

        message = await tool.ainvoke(
            {"name": RETRIEVE_TOOL_NAME, "args": {"query": "vault two"}, "id": "call_9", "type": "tool_call"}
        )

        assert message.tool_call_id == "call_9"
        assert message.content == "Source: two.md\nContent: vault two passage"
        assert [r.chunk_id for r in message.artifact] == ["v2-0"]

    def test_tool_schema(self, vector_store) -> None:
        """The model sees a 'retrieve' tool taking a single query string."""
        tool = create_retrieve_tool(Retriever(vector_store), vault_id=1)

        assert tool.name == "retrieve"
        assert list(tool.args) == ["query"]
        assert tool.description
