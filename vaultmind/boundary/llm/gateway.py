"""
Language model gateway.

Single abstraction used by the conversational agent and the summarizer:
complete(messages, tools) -> AIMessage and count_tokens(text) -> int.
ChatModelGateway adapts any LangChain chat model to it.

Dependencies: langchain_core, fastapi.concurrency
System role: Language model boundary
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from fastapi.concurrency import run_in_threadpool
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.tools import BaseTool

from vaultmind.core.exceptions import UpstreamFailureError

logger = logging.getLogger(__name__)


def message_text(message: BaseMessage) -> str:
    """
    Extract plain text from a message.

    Handles both string content and the list-of-blocks content some
    providers return.

    Args:
        message: Any LangChain message

    Returns:
        str: Concatenated text content
    """
    content = message.content
    if isinstance(content, str):
        return content
    return "".join(
        item if isinstance(item, str) else str(item.get("text", "")) if isinstance(item, dict) else str(item)
        for item in content
    )


class BaseLanguageModelGateway(ABC):
    """Contract shared by every language model backend."""

    @abstractmethod
    async def complete(
        self,
        messages: Sequence[BaseMessage],
        tools: Sequence[BaseTool] | None = None,
    ) -> AIMessage:
        """
        Run one model call.

        Args:
            messages: Ordered conversation sent to the model
            tools: Tools the model may request calls for

        Returns:
            AIMessage: Model reply, possibly carrying tool calls
        """

    @abstractmethod
    async def count_tokens(self, text: str) -> int:
        """Number of model tokens in text."""


class ChatModelGateway(BaseLanguageModelGateway):
    """Gateway backed by a LangChain chat model."""

    def __init__(
        self,
        model: BaseChatModel,
        token_counter: Callable[[str], int] | None = None,
    ) -> None:
        """
        Initialize gateway.

        Args:
            model: LangChain chat model (must support bind_tools for tool calls)
            token_counter: Override for token counting (defaults to model.get_num_tokens)
        """
        self._model = model
        self._token_counter = token_counter or model.get_num_tokens

    async def complete(
        self,
        messages: Sequence[BaseMessage],
        tools: Sequence[BaseTool] | None = None,
    ) -> AIMessage:
        runnable = self._model.bind_tools(list(tools)) if tools else self._model

        logger.debug(
            f"{__name__}:complete - Invoking model with {len(messages)} messages, "
            f"tools={len(tools) if tools else 0}"
        )
        response = await runnable.ainvoke(list(messages))

        if not isinstance(response, AIMessage):
            raise UpstreamFailureError(
                "Malformed model response",
                details={"response_type": type(response).__name__},
            )
        return response

    async def count_tokens(self, text: str) -> int:
        return int(await run_in_threadpool(self._token_counter, text))
