"""
RAG agent state schemas.

Defines the agent's states, its mutable per-turn state, and the message
selection helpers used by the generate step. Messages are distinguished by
their LangChain type tag ("human", "system", "ai", "tool").

Dependencies: langchain_core.messages
System role: Agent state definitions
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from langchain_core.messages import AIMessage, BaseMessage


class AgentStep(str, Enum):
    """States of the single-hop retrieval agent."""

    QUERY_OR_RESPOND = "query_or_respond"
    RETRIEVE = "retrieve"
    GENERATE = "generate"
    END = "end"


# QueryOrRespond -> Retrieve -> Generate is the longest path to END
MAX_AGENT_STEPS = 3


@dataclass
class AgentState:
    """Append-only conversation for one turn."""

    vault_id: int
    messages: list[BaseMessage] = field(default_factory=list)
    step: AgentStep = AgentStep.QUERY_OR_RESPOND
    steps_taken: int = 0

    def append(self, message: BaseMessage) -> None:
        self.messages.append(message)

    @property
    def last_message(self) -> BaseMessage:
        return self.messages[-1]


def has_tool_calls(message: BaseMessage) -> bool:
    """True for AI messages that request at least one tool call."""
    return message.type == "ai" and bool(getattr(message, "tool_calls", None))


def recent_tool_messages(messages: Sequence[BaseMessage]) -> list[BaseMessage]:
    """
    Collect the trailing contiguous run of tool messages.

    Scans backward from the end and stops at the first non-tool message,
    so only the latest retrieval batch is returned, in original order.

    Args:
        messages: Conversation so far

    Returns:
        list[BaseMessage]: Latest tool messages, oldest first
    """
    collected: list[BaseMessage] = []
    for message in reversed(messages):
        if message.type != "tool":
            break
        collected.append(message)
    collected.reverse()
    return collected


def conversation_messages(messages: Sequence[BaseMessage]) -> list[BaseMessage]:
    """
    Select the messages replayed to the model when generating the answer.

    Keeps human and system messages and AI messages without tool calls.

    Args:
        messages: Conversation so far

    Returns:
        list[BaseMessage]: Filtered conversation
    """
    return [
        message
        for message in messages
        if message.type in ("human", "system")
        or (message.type == "ai" and not has_tool_calls(message))
    ]


def final_answer(state: AgentState) -> AIMessage:
    """Last AI message of a finished turn."""
    message = state.last_message
    if not isinstance(message, AIMessage):
        raise TypeError(f"Turn ended on a {message.type} message")
    return message
