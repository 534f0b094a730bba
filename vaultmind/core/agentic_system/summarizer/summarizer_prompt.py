"""
Summarizer prompts.

Map prompt summarizes one chunk; reduce prompt distills a set of summaries
into one. The reduce prompt is used both for collapsing groups and for the
final pass.

Dependencies: langchain_core.prompts
System role: Prompt templates for note generation
"""

from langchain_core.prompts import PromptTemplate

MAP_PROMPT = PromptTemplate.from_template(
    "Write a concise summary of the following:\n\n{context}"
)

REDUCE_PROMPT = PromptTemplate.from_template(
    "The following is a set of summaries:\n"
    "{docs}\n"
    "Take these and distill it into a final, consolidated summary "
    "of the main themes."
)

# Separator between summaries inside one reduce call
SUMMARY_SEPARATOR = "\n\n"


def build_map_prompt(content: str) -> str:
    return MAP_PROMPT.format(context=content)


def build_reduce_prompt(summaries: list[str]) -> str:
    return REDUCE_PROMPT.format(docs=SUMMARY_SEPARATOR.join(summaries))
