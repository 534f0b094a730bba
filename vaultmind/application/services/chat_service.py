"""
Chat service for conversational Q&A with RAG.

Runs one agent turn per call and maps every failure onto a flat
ChatResult; rate limits get their own user-facing message.

Dependencies: vaultmind.core.agentic_system, langchain_core.messages
System role: Chat service orchestration layer
"""

import logging
from collections.abc import Sequence
from typing import Any

from langchain_core.messages import BaseMessage, HumanMessage, convert_to_messages

from vaultmind.boundary.llm.gateway import message_text
from vaultmind.core.agentic_system.agent.rag_agent import RAGAgent
from vaultmind.core.agentic_system.agent.rag_agent_schema import final_answer
from vaultmind.core.exceptions import (
    RATE_LIMIT_MESSAGE,
    ErrorKind,
    ValidationError,
    classify_exception,
)
from vaultmind.core.validators import validate_vault_id
from vaultmind.models.results import ChatResult
from vaultmind.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

CHAT_FAILURE_MESSAGE = "Failed to process chat message. Please try again."


class ChatService:
    """
    Chat service for conversational Q&A.

    Validates input locally, runs the RAG agent, and never lets an
    exception escape to the caller.
    """

    def __init__(self, rag_agent: RAGAgent) -> None:
        """
        Initialize chat service.

        Args:
            rag_agent: RAG agent instance for Q&A
        """
        self.rag_agent = rag_agent

    async def chat(
        self,
        vault_id: Any,
        conversation_history: Sequence[BaseMessage | dict | tuple | str],
    ) -> ChatResult:
        """
        Answer the last message of a conversation.

        Args:
            vault_id: Vault to retrieve from (int or decimal string)
            conversation_history: Messages ending with the user's question;
                LangChain messages or role/content dicts

        Returns:
            ChatResult: Answer and updated messages, or a flat error
        """
        try:
            vault = validate_vault_id(vault_id)
            messages = self._to_messages(conversation_history)

            logger.info(f"{__name__}:chat - START vault_id={vault}, history_len={len(messages)}")
            state = await self.rag_agent.run(messages, vault)
            answer = message_text(final_answer(state))

            logger.info(f"{__name__}:chat - END vault_id={vault}, answer_len={len(answer)}")
            return ChatResult.ok(answer, messages=state.messages)

        except Exception as e:
            error = classify_exception(e)
            log_exception_with_context(
                logger,
                f"{__name__}:chat - FAILED",
                e,
                vault_id=vault_id,
                error_kind=error.error_kind.value,
            )
            if error.error_kind is ErrorKind.RATE_LIMITED:
                return ChatResult.failure(error, RATE_LIMIT_MESSAGE)
            if error.error_kind is ErrorKind.UPSTREAM_FAILURE:
                return ChatResult.failure(error, CHAT_FAILURE_MESSAGE)
            return ChatResult.failure(error)

    async def ask(
        self,
        vault_id: Any,
        message: str,
        history: Sequence[BaseMessage | dict | tuple | str] | None = None,
    ) -> ChatResult:
        """
        Append a user message to the history and answer it.

        Args:
            vault_id: Vault to retrieve from
            message: User's message
            history: Prior conversation (empty if None)

        Returns:
            ChatResult: Answer or flat error
        """
        if not message or not message.strip():
            return ChatResult.failure(ValidationError("Message cannot be empty", field="message"))

        conversation = [*(history or []), HumanMessage(content=message)]
        return await self.chat(vault_id, conversation)

    @staticmethod
    def _to_messages(conversation_history: Sequence[Any]) -> list[BaseMessage]:
        if not conversation_history:
            raise ValidationError("Conversation history cannot be empty", field="conversation_history")
        try:
            messages = convert_to_messages(list(conversation_history))
        except (ValueError, NotImplementedError) as e:
            raise ValidationError(f"Invalid conversation history: {e}", field="conversation_history") from e

        last = messages[-1]
        if last.type != "human":
            raise ValidationError("Conversation must end with a user message", field="conversation_history")
        if not message_text(last).strip():
            raise ValidationError("Message cannot be empty", field="message")
        return messages
