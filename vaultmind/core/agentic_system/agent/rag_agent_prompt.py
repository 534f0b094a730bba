"""
RAG agent system prompts.

Defines the pinned routing instruction used when the model decides whether
to retrieve, and the grounded-answer template used after retrieval.

Dependencies: langchain_core.prompts
System role: Prompt templates for RAG agent behavior
"""

from langchain_core.prompts import PromptTemplate

QUERY_OR_RESPOND_PROMPT = (
    "You are a helpful assistant for a personal knowledge vault. "
    "Use the retrieve tool for questions about the content of the vault's documents. "
    "Answer directly, without calling any tool, for greetings and general conversation."
)

GENERATE_PROMPT = PromptTemplate.from_template(
    "You are an assistant for question-answering tasks. "
    "Use the following pieces of retrieved context to answer the question. "
    "If the context is insufficient to answer, say that you don't know. "
    "Use three sentences maximum and keep the answer concise."
    "\n\n"
    "{context}"
)


def build_generate_prompt(context: str) -> str:
    """
    Render the grounded-answer system instruction.

    Args:
        context: Newline-joined contents of the latest tool messages

    Returns:
        str: System prompt text
    """
    return GENERATE_PROMPT.format(context=context)
