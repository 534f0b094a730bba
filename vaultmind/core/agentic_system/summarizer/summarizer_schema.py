"""
Summarizer schemas for state management.

This module defines:
- SummaryUnit, the value passed between map, collapse and finalize
- SummarizationState, the working set of one summarization run
- SummarizerStep, the states of the summarization machine

Dependencies: pydantic, dataclasses
System role: Data schemas for the map-reduce summarizer
"""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SummaryUnit(BaseModel):
    """Summary text with its token count measured once at creation."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Summary text")
    token_count: int = Field(ge=0, description="Model tokens in content")


class SummarizerStep(str, Enum):
    """States of the map-reduce summarizer."""

    MAP = "map"
    COLLECT = "collect"
    COLLAPSE = "collapse"
    FINALIZE = "finalize"
    END = "end"


@dataclass
class SummarizationState:
    """Working state of one run.

    `summaries` only grows; `collapsed` is replaced wholesale on every
    collapse iteration.
    """

    contents: list[str]
    summaries: list[SummaryUnit] = field(default_factory=list)
    collapsed: list[SummaryUnit] = field(default_factory=list)
    final: str | None = None
    step: SummarizerStep = SummarizerStep.MAP
    collapse_iterations: int = 0

    @property
    def total_tokens(self) -> int:
        return sum(unit.token_count for unit in self.collapsed)
