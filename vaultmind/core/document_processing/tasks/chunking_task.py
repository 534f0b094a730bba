"""
Text chunking task with an exact sliding window.

Splits text into bounded segments measured in tokens (tiktoken) or
characters. Consecutive segments overlap by exactly chunk_overlap units,
segments below min_chunk_length units are dropped, and loader page
metadata is carried onto every resulting Chunk.

Dependencies: langchain_text_splitters, tiktoken, langchain_core
System role: Second stage of document ingestion pipeline
"""

import hashlib
import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Literal

import tiktoken
from langchain_core.documents import Document
from langchain_text_splitters import TextSplitter

from vaultmind.core.document_processing.models import Chunk, ChunkPosition

logger = logging.getLogger(__name__)

ChunkUnit = Literal["token", "character"]


@dataclass(frozen=True)
class TextSegment:
    """One window of a source text. start/end are unit offsets."""

    text: str
    start: int
    end: int
    line_from: int = 0
    line_to: int = 0

    @property
    def length(self) -> int:
        return self.end - self.start


class ChunkingTask(TextSplitter):
    """Split documents into overlapping, size-bounded chunks."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 0,
        unit: ChunkUnit = "token",
        min_chunk_length: int = 10,
        encoding_name: str = "cl100k_base",
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in units
            chunk_overlap: Overlap between consecutive chunks in units
            unit: "token" (tiktoken encoding) or "character"
            min_chunk_length: Segments shorter than this are dropped
            encoding_name: tiktoken encoding for token mode

        Raises:
            ValueError: When sizes are inconsistent or unit is unknown
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be in [0, chunk_size={chunk_size})"
            )
        if unit not in ("token", "character"):
            raise ValueError(f"Unknown chunk unit: {unit}")
        if min_chunk_length > chunk_size:
            raise ValueError(
                f"min_chunk_length ({min_chunk_length}) must not exceed chunk_size ({chunk_size})"
            )

        self._unit = unit
        self._min_chunk_length = min_chunk_length
        self._encoding = tiktoken.get_encoding(encoding_name) if unit == "token" else None

        super().__init__(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=self.count_units,
        )

    @property
    def unit(self) -> ChunkUnit:
        return self._unit

    def count_units(self, text: str) -> int:
        """Length of text in the configured unit."""
        return len(self._encode(text))

    def _encode(self, text: str) -> Sequence[int] | str:
        if self._encoding is None:
            return text
        return self._encoding.encode(text, disallowed_special=())

    def _decode(self, units: Sequence[int] | str) -> str:
        if self._encoding is None:
            return units  # type: ignore[return-value]
        return self._encoding.decode(list(units))

    def _windows(self, length: int) -> Iterator[tuple[int, int]]:
        step = self._chunk_size - self._chunk_overlap
        start = 0
        while start < length:
            end = min(start + self._chunk_size, length)
            yield start, end
            if end == length:
                return
            start += step

    def split(self, text: str) -> list[TextSegment]:
        """
        Split text into sliding-window segments with line ranges.

        Args:
            text: Raw text

        Returns:
            list[TextSegment]: Segments in source order
        """
        units = self._encode(text)
        segments: list[TextSegment] = []
        search_from = 0

        for start, end in self._windows(len(units)):
            if end - start < self._min_chunk_length:
                logger.debug(
                    f"{__name__}:split - Dropping short segment ({end - start} {self._unit}s)"
                )
                continue

            segment_text = self._decode(units[start:end])
            line_from = line_to = 0

            char_start = start if self._encoding is None else text.find(segment_text, search_from)
            if char_start >= 0:
                search_from = char_start
                line_from = text.count("\n", 0, char_start) + 1
                line_to = line_from + segment_text.count("\n")

            segments.append(
                TextSegment(
                    text=segment_text,
                    start=start,
                    end=end,
                    line_from=line_from,
                    line_to=line_to,
                )
            )

        return segments

    def split_text(self, text: str) -> list[str]:
        """Split text into chunk strings (TextSplitter interface)."""
        return [segment.text for segment in self.split(text)]

    @staticmethod
    def _generate_chunk_id(
        vault_id: int,
        source_ref: str,
        page: int,
        start: int,
        content: str,
    ) -> str:
        """
        Generate deterministic chunk ID from content and position.

        Returns:
            str: SHA-256 hash prefix (16 chars)
        """
        hash_input = f"{vault_id}:{source_ref}:{page}:{start}:{content}"
        return hashlib.sha256(hash_input.encode()).hexdigest()[:16]

    def chunk(
        self,
        documents: list[Document],
        vault_id: int,
        source_ref: str | None = None,
    ) -> list[Chunk]:
        """
        Split documents into vault-scoped Chunks.

        Page and line metadata supplied by the loader win over computed
        line ranges; anything missing defaults to 0.

        Args:
            documents: LangChain Documents to split
            vault_id: Vault partition key
            source_ref: Source name (defaults to each document's metadata)

        Returns:
            list[Chunk]: Chunks with preserved positional metadata

        Raises:
            ValueError: When documents list is empty
        """
        if not documents:
            raise ValueError("No documents to chunk")

        chunks: list[Chunk] = []
        for doc in documents:
            metadata = doc.metadata or {}
            ref = source_ref or metadata.get("source_ref") or metadata.get("source") or "unknown"
            page = int(metadata.get("page") or 0)
            source_id = metadata.get("source_id")

            for segment in self.split(doc.page_content):
                position = ChunkPosition(
                    page=page,
                    line_from=int(metadata.get("line_from") or segment.line_from),
                    line_to=int(metadata.get("line_to") or segment.line_to),
                )
                chunks.append(
                    Chunk(
                        id=self._generate_chunk_id(vault_id, ref, page, segment.start, segment.text),
                        text=segment.text,
                        source_ref=ref,
                        vault_id=vault_id,
                        position=position,
                        source_id=str(source_id) if source_id is not None else None,
                        chunk_index=len(chunks),
                    )
                )

        logger.info(
            f"{__name__}:chunk - Split {len(documents)} documents into {len(chunks)} chunks "
            f"(vault_id={vault_id}, unit={self._unit})"
        )
        return chunks
