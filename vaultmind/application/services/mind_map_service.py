"""
Mind map service.

Turns a vault's note into a hierarchical mind map. The note is read through
NoteService, so a vault without a stored note gets one generated first;
the model reply is parsed into a validated MindMap.

Dependencies: vaultmind.application.services.note_service, vaultmind.boundary.llm
System role: Mind map orchestration layer
"""

import logging
from typing import Any

from langchain_core.messages import HumanMessage

from vaultmind.application.services.note_service import NoteService
from vaultmind.boundary.llm.gateway import BaseLanguageModelGateway, message_text
from vaultmind.core.agentic_system.summarizer.mind_map_prompt import build_mind_map_prompt
from vaultmind.core.agentic_system.summarizer.mind_map_schema import parse_mind_map
from vaultmind.core.exceptions import (
    RATE_LIMIT_MESSAGE,
    ErrorKind,
    classify_exception,
)
from vaultmind.core.validators import validate_vault_id
from vaultmind.models.results import MindMapResult
from vaultmind.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

MIND_MAP_FAILURE_MESSAGE = "Failed to generate mind map"


class MindMapService:
    """Mind map generation over a vault's note."""

    def __init__(self, note_service: NoteService, gateway: BaseLanguageModelGateway) -> None:
        """
        Initialize mind map service.

        Args:
            note_service: Note service used to read or generate the note
            gateway: Language model gateway for the mind map call
        """
        self.note_service = note_service
        self.gateway = gateway

    async def generate_mind_map(self, vault_id: Any) -> MindMapResult:
        """
        Build a mind map from the vault's note.

        Args:
            vault_id: Vault identifier (int or decimal string)

        Returns:
            MindMapResult: Validated mind map, or a flat error
        """
        try:
            vault = validate_vault_id(vault_id)
            logger.info(f"{__name__}:generate_mind_map - START vault_id={vault}")

            note = await self.note_service.get_or_generate_note(vault)
            if not note.success:
                logger.warning(
                    f"{__name__}:generate_mind_map - Note unavailable vault_id={vault}, "
                    f"error_kind={note.error_kind.value if note.error_kind else None}"
                )
                return MindMapResult.from_note_failure(note)

            response = await self.gateway.complete(
                [HumanMessage(content=build_mind_map_prompt(note.notes or ""))]
            )
            mind_map = parse_mind_map(message_text(response))

            logger.info(
                f"{__name__}:generate_mind_map - END vault_id={vault}, "
                f"nodes={sum(1 for _ in mind_map.data.iter_nodes())}"
            )
            return MindMapResult.ok(mind_map)

        except Exception as e:
            error = classify_exception(e)
            log_exception_with_context(
                logger,
                f"{__name__}:generate_mind_map - FAILED",
                e,
                vault_id=vault_id,
                error_kind=error.error_kind.value,
            )
            if error.error_kind is ErrorKind.RATE_LIMITED:
                return MindMapResult.failure(error, RATE_LIMIT_MESSAGE)
            if error.error_kind is ErrorKind.UPSTREAM_FAILURE:
                return MindMapResult.failure(error, MIND_MAP_FAILURE_MESSAGE)
            return MindMapResult.failure(error)
