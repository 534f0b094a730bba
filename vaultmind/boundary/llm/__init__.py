"""
Language model boundary layer.

Dependencies: langchain_core, langchain_google_genai
System role: Gateway to the chat model used by both pipelines
"""

from vaultmind.boundary.llm.gateway import (
    BaseLanguageModelGateway,
    ChatModelGateway,
    message_text,
)

__all__ = ["BaseLanguageModelGateway", "ChatModelGateway", "message_text"]
