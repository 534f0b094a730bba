"""
Document loading task using LangChain document loaders.

Converts stored source files (PDF, plain text, markdown) into LangChain
Documents with page metadata.

Dependencies: langchain_community.document_loaders
System role: First stage of document ingestion pipeline
"""

import logging
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader, TextLoader
from langchain_core.documents import Document

from vaultmind.core.exceptions import DocumentLoadError
from vaultmind.models.source import SourceReference

logger = logging.getLogger(__name__)

PDF_EXTENSIONS = frozenset({".pdf"})
TEXT_EXTENSIONS = frozenset({".txt", ".md"})


class ParsingTask:
    """Load source files into LangChain Documents."""

    def __init__(self, base_directory: str | Path | None = None) -> None:
        """
        Initialize parsing task.

        Args:
            base_directory: Directory that relative source URLs resolve against
        """
        self._base_directory = Path(base_directory) if base_directory else None

    def resolve_path(self, source: SourceReference) -> Path:
        """
        Resolve a source URL to a local file path.

        Args:
            source: Source reference

        Returns:
            Path: Absolute or base-relative file path
        """
        path = Path(source.url)
        if self._base_directory is None:
            return path
        if not path.is_absolute():
            return self._base_directory / path
        # Web-style URLs ("/uploads/x.pdf") live under the base directory
        if not path.exists():
            return self._base_directory / source.url.lstrip("/")
        return path

    def parse(self, source: SourceReference) -> list[Document]:
        """
        Load one source file into Documents.

        PDF pages carry a 1-based "page" entry so 0 keeps meaning "unknown".

        Args:
            source: Source to load

        Returns:
            list[Document]: Loaded documents with content and metadata

        Raises:
            DocumentLoadError: When the file is missing, unsupported or unreadable
        """
        path = self.resolve_path(source)
        if not path.exists():
            raise DocumentLoadError(f"File not found: {path}", source_ref=source.name)

        extension = path.suffix.lower()
        if extension in PDF_EXTENSIONS:
            loader = PyPDFLoader(str(path))
        elif extension in TEXT_EXTENSIONS:
            loader = TextLoader(str(path), encoding="utf-8")
        else:
            raise DocumentLoadError(
                f"Unsupported file type: {extension} for {source.name}",
                source_ref=source.name,
            )

        try:
            documents = loader.load()
        except Exception as e:
            raise DocumentLoadError(
                f"Failed to load {source.name}: {e}",
                source_ref=source.name,
            ) from e

        for doc in documents:
            if extension in PDF_EXTENSIONS and isinstance(doc.metadata.get("page"), int):
                doc.metadata["page"] = doc.metadata["page"] + 1
            doc.metadata["source_ref"] = source.name
            doc.metadata["source_id"] = source.id

        logger.info(
            f"{__name__}:parse - Loaded {len(documents)} documents from {source.name}"
        )
        return documents
