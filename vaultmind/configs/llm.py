"""
Language model configuration settings.

Chat model selection and sampling parameters shared by the conversational
agent and the summarizer.

Dependencies: pydantic, pydantic_settings
System role: Language model gateway configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Chat model configuration (Google Gemini via LangChain)."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    model_id: str = Field(
        default="gemini-2.5-flash",
        description="Chat model identifier",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for chat and summaries",
    )
    api_key: str | None = Field(
        default=None,
        description="Provider API key (falls back to GOOGLE_API_KEY when unset)",
    )
    timeout_seconds: float | None = Field(
        default=120.0,
        description="Per-request timeout delegated to the model client",
    )
