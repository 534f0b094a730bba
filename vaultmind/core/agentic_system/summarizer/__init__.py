"""
Map-reduce summarizer module.

Also holds the mind map prompt and schema, which work from the summarized note.

Dependencies: langchain_core, vaultmind.boundary.llm
System role: Summarizer module exports
"""

from vaultmind.core.agentic_system.summarizer.map_reduce_summarizer import (
    MapReduceSummarizer,
    split_into_groups,
)
from vaultmind.core.agentic_system.summarizer.mind_map_schema import (
    MindMap,
    MindMapNode,
    parse_mind_map,
)
from vaultmind.core.agentic_system.summarizer.summarizer_schema import (
    SummarizationState,
    SummarizerStep,
    SummaryUnit,
)

__all__ = [
    "MapReduceSummarizer",
    "split_into_groups",
    "MindMap",
    "MindMapNode",
    "parse_mind_map",
    "SummarizationState",
    "SummarizerStep",
    "SummaryUnit",
]
