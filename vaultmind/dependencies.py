"""
Dependency construction.

Factory functions that build the gateway, vector index, pipelines and
services from Settings. Nothing here is cached at module level: the
caller (a request handler or a script) owns what it builds and passes it on.

Dependencies: vaultmind.configs, vaultmind.application, vaultmind.boundary, vaultmind.core
System role: Explicit dependency wiring
"""

from sqlalchemy.ext.asyncio import AsyncSession

from vaultmind.application.services import ChatService, IngestionService, MindMapService, NoteService
from vaultmind.boundary.llm.gateway import BaseLanguageModelGateway
from vaultmind.boundary.llm.model_factory import get_gateway
from vaultmind.boundary.vdb.faiss_vectors_store import FAISSVectorsStore
from vaultmind.boundary.vdb.vector_store_factory import get_vector_store
from vaultmind.configs import Settings, get_settings
from vaultmind.core.agentic_system.agent.rag_agent import RAGAgent
from vaultmind.core.agentic_system.summarizer.map_reduce_summarizer import MapReduceSummarizer
from vaultmind.core.document_processing.entrypoint import IngestionPipeline, SourceChunkLoader
from vaultmind.core.document_processing.tasks import ChunkingTask, ParsingTask
from vaultmind.core.retriever import Retriever


def build_chunk_loader(settings: Settings | None = None) -> SourceChunkLoader:
    """
    Build the source loader with the configured chunking policy.

    Args:
        settings: Application settings (uses get_settings() if None)

    Returns:
        SourceChunkLoader: Loader used by ingestion and note generation
    """
    settings = settings or get_settings()
    chunking = settings.chunking
    return SourceChunkLoader(
        parsing_task=ParsingTask(base_directory=settings.sources_directory),
        chunking_task=ChunkingTask(
            chunk_size=chunking.chunk_size,
            chunk_overlap=chunking.chunk_overlap,
            unit=chunking.unit,
            min_chunk_length=chunking.min_chunk_length,
            encoding_name=chunking.encoding_name,
        ),
    )


def build_rag_agent(
    gateway: BaseLanguageModelGateway,
    vector_store: FAISSVectorsStore,
    settings: Settings | None = None,
) -> RAGAgent:
    """Build the RAG agent over an existing gateway and vector index."""
    settings = settings or get_settings()
    retriever = Retriever(vector_store, top_k=settings.vector_store.top_k)
    return RAGAgent(gateway=gateway, retriever=retriever)


def build_summarizer(
    gateway: BaseLanguageModelGateway,
    settings: Settings | None = None,
) -> MapReduceSummarizer:
    """Build the map-reduce summarizer with the configured bounds."""
    config = (settings or get_settings()).summarizer
    return MapReduceSummarizer(
        gateway=gateway,
        token_max=config.token_max,
        max_collapse_iterations=config.max_collapse_iterations,
        map_concurrency=config.map_concurrency,
    )


def build_chat_service(
    gateway: BaseLanguageModelGateway | None = None,
    vector_store: FAISSVectorsStore | None = None,
    settings: Settings | None = None,
) -> ChatService:
    """
    Build the chat service.

    Args:
        gateway: Language model gateway (Gemini gateway if None)
        vector_store: Vector index (FAISS index from settings if None)
        settings: Application settings (uses get_settings() if None)

    Returns:
        ChatService: Service ready to answer chat turns
    """
    settings = settings or get_settings()
    gateway = gateway or get_gateway(settings)
    vector_store = vector_store or get_vector_store(settings)
    return ChatService(rag_agent=build_rag_agent(gateway, vector_store, settings))


def build_note_service(
    db: AsyncSession,
    gateway: BaseLanguageModelGateway | None = None,
    settings: Settings | None = None,
) -> NoteService:
    """
    Build the note service for one database session.

    Args:
        db: AsyncSession owned by the caller
        gateway: Language model gateway (Gemini gateway if None)
        settings: Application settings (uses get_settings() if None)

    Returns:
        NoteService: Service ready to generate notes
    """
    settings = settings or get_settings()
    gateway = gateway or get_gateway(settings)
    return NoteService(
        db=db,
        summarizer=build_summarizer(gateway, settings),
        loader=build_chunk_loader(settings),
    )


def build_ingestion_service(
    db: AsyncSession,
    vector_store: FAISSVectorsStore | None = None,
    settings: Settings | None = None,
) -> IngestionService:
    """Build the ingestion service for one database session."""
    settings = settings or get_settings()
    vector_store = vector_store or get_vector_store(settings)
    pipeline = IngestionPipeline(vector_store=vector_store, loader=build_chunk_loader(settings))
    return IngestionService(db=db, pipeline=pipeline)


def build_mind_map_service(
    db: AsyncSession,
    gateway: BaseLanguageModelGateway | None = None,
    settings: Settings | None = None,
) -> MindMapService:
    """
    Build the mind map service for one database session.

    The note service and the mind map call share one gateway.

    Args:
        db: AsyncSession owned by the caller
        gateway: Language model gateway (Gemini gateway if None)
        settings: Application settings (uses get_settings() if None)

    Returns:
        MindMapService: Service ready to generate mind maps
    """
    settings = settings or get_settings()
    gateway = gateway or get_gateway(settings)
    return MindMapService(
        note_service=build_note_service(db, gateway=gateway, settings=settings),
        gateway=gateway,
    )
