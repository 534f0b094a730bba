"""
RAG conversational agent implementation.

Single-hop retrieval agent written as an explicit state machine:
QueryOrRespond decides between answering directly and calling the
retrieve tool; Retrieve executes the requested calls; Generate answers
from the latest batch of tool results. Every path ends within
MAX_AGENT_STEPS model/tool steps.

Dependencies: langchain_core.messages, vaultmind.boundary.llm, vaultmind.core.retriever
System role: RAG Q&A agent orchestration
"""

import logging
from collections.abc import Sequence

from langchain_core.messages import BaseMessage, SystemMessage, ToolMessage
from langchain_core.tools import BaseTool

from vaultmind.boundary.llm.gateway import BaseLanguageModelGateway, message_text
from vaultmind.core.agentic_system.agent.rag_agent_prompt import (
    QUERY_OR_RESPOND_PROMPT,
    build_generate_prompt,
)
from vaultmind.core.agentic_system.agent.rag_agent_schema import (
    MAX_AGENT_STEPS,
    AgentState,
    AgentStep,
    conversation_messages,
    final_answer,
    has_tool_calls,
    recent_tool_messages,
)
from vaultmind.core.agentic_system.agent.rag_agent_tool import create_retrieve_tool
from vaultmind.core.exceptions import UpstreamFailureError
from vaultmind.core.retriever import Retriever
from vaultmind.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class RAGAgent:
    """
    Retrieval-augmented conversational agent.

    Holds no per-turn state: each run() works on its own AgentState, so one
    instance can serve concurrent turns.
    """

    def __init__(
        self,
        gateway: BaseLanguageModelGateway,
        retriever: Retriever,
        system_prompt: str = QUERY_OR_RESPOND_PROMPT,
    ) -> None:
        """
        Initialize RAG agent.

        Args:
            gateway: Language model gateway used for every model call
            retriever: Vault-scoped retriever exposed as the "retrieve" tool
            system_prompt: Pinned routing instruction for QueryOrRespond
        """
        self._gateway = gateway
        self._retriever = retriever
        self._system_prompt = system_prompt

    async def run(self, messages: Sequence[BaseMessage], vault_id: int) -> AgentState:
        """
        Drive one conversational turn to completion.

        Args:
            messages: Conversation history ending with the user's message
            vault_id: Vault every retrieval is restricted to

        Returns:
            AgentState: Final state; its messages are the input followed by
                the messages appended during this turn

        Raises:
            UpstreamFailureError: If the machine does not reach END within bounds
            Exception: Gateway and tool errors propagate unchanged
        """
        state = AgentState(vault_id=vault_id, messages=list(messages))
        tools = [create_retrieve_tool(self._retriever, vault_id)]

        logger.info(f"{__name__}:run - START vault_id={vault_id}, history_len={len(state.messages)}")

        while state.step is not AgentStep.END:
            if state.steps_taken >= MAX_AGENT_STEPS:
                raise UpstreamFailureError(
                    "Agent exceeded its step limit",
                    details={"steps": state.steps_taken, "step": state.step.value},
                )

            if state.step is AgentStep.QUERY_OR_RESPOND:
                state.step = await self._query_or_respond(state, tools)
            elif state.step is AgentStep.RETRIEVE:
                state.step = await self._retrieve(state, tools)
            elif state.step is AgentStep.GENERATE:
                state.step = await self._generate(state)
            state.steps_taken += 1

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:run - END",
            vault_id=vault_id,
            steps=state.steps_taken,
            sequence=state.messages,
        )
        return state

    async def ainvoke(self, messages: Sequence[BaseMessage], vault_id: int) -> str:
        """
        Answer the latest message and return only the answer text.

        Args:
            messages: Conversation history ending with the user's message
            vault_id: Vault every retrieval is restricted to

        Returns:
            str: Final answer
        """
        state = await self.run(messages, vault_id)
        return message_text(final_answer(state))

    async def _query_or_respond(self, state: AgentState, tools: list[BaseTool]) -> AgentStep:
        """Let the model either answer or request retrieval."""
        prompt = [SystemMessage(content=self._system_prompt), *state.messages]
        response = await self._gateway.complete(prompt, tools=tools)
        state.append(response)

        if has_tool_calls(response):
            logger.info(f"{__name__}:_query_or_respond - tool_calls={len(response.tool_calls)}")
            return AgentStep.RETRIEVE

        logger.info(f"{__name__}:_query_or_respond - Answered directly")
        return AgentStep.END

    async def _retrieve(self, state: AgentState, tools: list[BaseTool]) -> AgentStep:
        """Execute every tool call of the last AI message, in order."""
        tools_by_name = {t.name: t for t in tools}
        request = state.last_message

        for index, call in enumerate(request.tool_calls):
            call_id = call.get("id") or f"{call['name']}_{index}"
            selected = tools_by_name.get(call["name"])

            if selected is None:
                logger.warning(f"{__name__}:_retrieve - Unknown tool requested: {call['name']}")
                state.append(
                    ToolMessage(
                        content=f"Error: tool '{call['name']}' is not available",
                        tool_call_id=call_id,
                        name=call["name"],
                        status="error",
                    )
                )
                continue

            # A full ToolCall yields a ToolMessage carrying the artifact.
            tool_message = await selected.ainvoke({**call, "id": call_id, "type": "tool_call"})
            state.append(tool_message)

        return AgentStep.GENERATE

    async def _generate(self, state: AgentState) -> AgentStep:
        """Answer from the most recent batch of tool results."""
        tool_messages = recent_tool_messages(state.messages)
        context = "\n".join(message_text(message) for message in tool_messages)

        prompt = [
            SystemMessage(content=build_generate_prompt(context)),
            *conversation_messages(state.messages),
        ]
        logger.info(
            f"{__name__}:_generate - tool_messages={len(tool_messages)}, "
            f"context_len={len(context)}, prompt_messages={len(prompt)}"
        )

        response = await self._gateway.complete(prompt)
        state.append(response)
        return AgentStep.END
