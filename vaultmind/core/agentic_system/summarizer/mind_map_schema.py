"""
Mind map schemas and response parsing.

MindMapNode is recursive: the root carries the central topic, its children
are the main branches (each with a left/right direction), and deeper nodes
are details. parse_mind_map turns a raw model reply into a validated MindMap.

Dependencies: pydantic, json (stdlib)
System role: Output contract for mind map generation
"""

import json
from typing import Literal

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, model_validator

from vaultmind.core.exceptions import UpstreamFailureError

ROOT_NODE_ID = "root"


class MindMapNode(BaseModel):
    """One topic in the mind map."""

    id: str = Field(min_length=1, description="Node id, unique within the map")
    topic: str = Field(description="Text shown on the node")
    direction: Literal["left", "right"] | None = Field(
        default=None,
        description="Side of the root a main branch is drawn on",
    )
    children: list["MindMapNode"] = Field(default_factory=list, description="Sub-topics")

    def iter_nodes(self):
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()


class MindMap(BaseModel):
    """Complete mind map as returned by the model."""

    data: MindMapNode = Field(description="Root node")

    @model_validator(mode="after")
    def _check_root_and_ids(self) -> "MindMap":
        if self.data.id != ROOT_NODE_ID:
            raise ValueError(f'root node id must be "{ROOT_NODE_ID}", got {self.data.id!r}')
        ids = [node.id for node in self.data.iter_nodes()]
        if len(ids) != len(set(ids)):
            raise ValueError("node ids must be unique")
        return self


def _strip_code_fence(text: str) -> str:
    if "```json" in text:
        return text.split("```json")[1].split("```")[0]
    if "```" in text:
        return text.split("```")[1].split("```")[0]
    return text


def parse_mind_map(response_text: str) -> MindMap:
    """
    Parse a model reply into a MindMap.

    Handles replies wrapped in a markdown code block.

    Args:
        response_text: Raw model reply

    Returns:
        MindMap: Validated mind map

    Raises:
        UpstreamFailureError: If the reply is not a valid mind map
    """
    text = _strip_code_fence(response_text).strip()
    try:
        data = json.loads(text)
        return MindMap.model_validate(data)
    except (json.JSONDecodeError, PydanticValidationError) as e:
        raise UpstreamFailureError(
            "Malformed mind map response",
            details={"error_type": type(e).__name__},
        ) from e
