"""
RAG conversational agent module.

Provides the single-hop retrieval agent, its retrieve tool and prompts.

Dependencies: langchain_core, vaultmind.core.retriever
System role: Agent module exports
"""

from vaultmind.core.agentic_system.agent.rag_agent import RAGAgent
from vaultmind.core.agentic_system.agent.rag_agent_schema import AgentState, AgentStep
from vaultmind.core.agentic_system.agent.rag_agent_tool import RETRIEVE_TOOL_NAME, create_retrieve_tool

__all__ = ["RAGAgent", "AgentState", "AgentStep", "RETRIEVE_TOOL_NAME", "create_retrieve_tool"]
