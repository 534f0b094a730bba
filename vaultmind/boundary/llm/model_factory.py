"""
Chat model factory.

Builds the Gemini chat model and wraps it in a ChatModelGateway.

Dependencies: langchain_google_genai, vaultmind.configs
System role: Language model instantiation
"""

import logging

from langchain_google_genai import ChatGoogleGenerativeAI

from vaultmind.boundary.llm.gateway import ChatModelGateway
from vaultmind.configs import Settings, get_settings

logger = logging.getLogger(__name__)


def get_chat_model(settings: Settings | None = None) -> ChatGoogleGenerativeAI:
    """
    Create the configured chat model.

    Args:
        settings: Application settings (loaded from environment if None)

    Returns:
        ChatGoogleGenerativeAI: Chat model with tool-calling support
    """
    settings = settings or get_settings()
    config = settings.llm

    kwargs = {}
    if config.api_key:
        kwargs["google_api_key"] = config.api_key
    if config.timeout_seconds is not None:
        kwargs["timeout"] = config.timeout_seconds

    logger.info(f"{__name__}:get_chat_model - Creating chat model {config.model_id}")
    return ChatGoogleGenerativeAI(
        model=config.model_id,
        temperature=config.temperature,
        **kwargs,
    )


def get_gateway(settings: Settings | None = None) -> ChatModelGateway:
    """
    Create the language model gateway used by the agent and summarizer.

    Args:
        settings: Application settings (loaded from environment if None)

    Returns:
        ChatModelGateway: Gateway over the configured chat model
    """
    return ChatModelGateway(get_chat_model(settings))
