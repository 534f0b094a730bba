"""
Mind map prompt.

Asks the model to turn a vault note into a hierarchical mind map, returned
as one JSON object whose root node has id "root".

Dependencies: langchain_core.prompts
System role: Prompt template for mind map generation
"""

from langchain_core.prompts import PromptTemplate

# Literal JSON braces are doubled for the f-string template format
MIND_MAP_PROMPT = PromptTemplate.from_template(
    "Analyze the notes below and turn them into a hierarchical mind map in JSON format.\n\n"
    "Instructions:\n"
    "1. Find the central topic of the notes; it becomes the root node.\n"
    "2. Find the main branches (key concepts) and their sub-branches (details).\n"
    '3. Give every node a unique "id". The root node id must be "root".\n'
    '4. Spread the main branches evenly between "direction": "left" and "direction": "right".\n'
    "5. Reply with the JSON object only, inside a single ```json code block.\n\n"
    "Expected format:\n"
    "```json\n"
    "{{\n"
    '  "data": {{\n'
    '    "id": "root",\n'
    '    "topic": "Central Topic",\n'
    '    "children": [\n'
    "      {{\n"
    '        "id": "branch-1",\n'
    '        "topic": "Main Branch",\n'
    '        "direction": "left",\n'
    '        "children": [{{"id": "branch-1-1", "topic": "Detail"}}]\n'
    "      }}\n"
    "    ]\n"
    "  }}\n"
    "}}\n"
    "```\n\n"
    "Notes:\n{note}"
)


def build_mind_map_prompt(note: str) -> str:
    return MIND_MAP_PROMPT.format(note=note)
