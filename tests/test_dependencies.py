"""
Test suite for dependency construction.

Builds every service from explicit Settings with a stub gateway and an
in-memory index, so no network or API key is needed.

System role: Verification of dependency wiring
"""

from unittest.mock import AsyncMock

import pytest
from langchain_core.messages import AIMessage
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import ScriptedGateway
from vaultmind.application.services import ChatService, IngestionService, MindMapService, NoteService
from vaultmind.configs import Settings
from vaultmind.configs.pipeline import ChunkingSettings, SummarizerSettings
from vaultmind.configs.vector_store import VectorStoreSettings
from vaultmind.core.agentic_system.agent.rag_agent import RAGAgent
from vaultmind.dependencies import (
    build_chat_service,
    build_chunk_loader,
    build_ingestion_service,
    build_mind_map_service,
    build_note_service,
    build_rag_agent,
    build_summarizer,
)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        chunking=ChunkingSettings(chunk_size=200, chunk_overlap=20, unit="character"),
        summarizer=SummarizerSettings(token_max=500, max_collapse_iterations=4, map_concurrency=2),
        vector_store=VectorStoreSettings(top_k=3),
        sources_directory=str(tmp_path),
    )


@pytest.fixture
def mock_db_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


class TestBuilders:
    """Test factory functions."""

    def test_chunk_loader_uses_chunking_settings(self, settings: Settings) -> None:
        """Loader chunking follows the configured size and unit."""
        loader = build_chunk_loader(settings)

        assert loader._chunking_task.unit == "character"
        assert loader._chunking_task._chunk_size == 200

    def test_rag_agent_uses_configured_top_k(self, settings: Settings, vector_store) -> None:
        """The agent's retriever returns at most top_k passages."""
        agent = build_rag_agent(ScriptedGateway([]), vector_store, settings)

        assert isinstance(agent, RAGAgent)
        assert agent._retriever._top_k == 3

    def test_summarizer_uses_configured_bounds(self, settings: Settings) -> None:
        """Summarizer bounds come from SummarizerSettings."""
        summarizer = build_summarizer(ScriptedGateway([]), settings)

        assert summarizer._token_max == 500
        assert summarizer._max_collapse_iterations == 4
        assert summarizer._map_concurrency == 2

    @pytest.mark.asyncio
    async def test_chat_service_with_explicit_dependencies(self, settings: Settings, vector_store) -> None:
        """A chat service built from a stub gateway answers a turn."""
        service = build_chat_service(
            gateway=ScriptedGateway([AIMessage(content="Hello")]),
            vector_store=vector_store,
            settings=settings,
        )

        result = await service.ask(1, "hi")

        assert isinstance(service, ChatService)
        assert result.answer == "Hello"

    def test_note_and_ingestion_services(self, settings: Settings, mock_db_session, vector_store) -> None:
        """Session-scoped services share the caller's session."""
        note_service = build_note_service(mock_db_session, gateway=ScriptedGateway([]), settings=settings)
        ingestion_service = build_ingestion_service(mock_db_session, vector_store=vector_store, settings=settings)

        assert isinstance(note_service, NoteService)
        assert isinstance(ingestion_service, IngestionService)
        assert note_service.db is mock_db_session
        assert ingestion_service.db is mock_db_session

    def test_mind_map_service_shares_gateway(self, settings: Settings, mock_db_session) -> None:
        """The mind map call and its note service use the same gateway and session."""
        gateway = ScriptedGateway([])

        service = build_mind_map_service(mock_db_session, gateway=gateway, settings=settings)

        assert isinstance(service, MindMapService)
        assert service.gateway is gateway
        assert service.note_service.db is mock_db_session
        assert service.note_service.summarizer._gateway is gateway
