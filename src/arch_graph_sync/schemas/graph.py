"""Graph data source records.

The graph is read by views to turn an element id into something worth
rendering. The synchronization core never queries it.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NodeType(str, Enum):
    SPACE = "Space"
    MEP_ELEMENT = "MEPElement"
    MEP_SYSTEM = "MEPSystem"
    STOREY = "Storey"
    ROUTE_NODE = "RouteNode"


class EdgeType(str, Enum):
    ON_LEVEL = "ON_LEVEL"
    ADJACENT_TO = "ADJACENT_TO"
    CONNECTS_TO = "CONNECTS_TO"
    CROSSES = "CROSSES"
    BELONGS_TO_SYSTEM = "BELONGS_TO_SYSTEM"
    SERVES = "SERVES"
    IN_BUILDING = "IN_BUILDING"
    IN_ZONE = "IN_ZONE"


class GraphNode(BaseModel):
    """A node. ``properties`` commonly carries ``levelCode``, ``category``,
    ``material``, ``systemCode``, ``globalId`` and ``tags``."""

    id: str = Field(..., min_length=1)
    type: NodeType
    label: str = ""
    properties: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class GraphEdge(BaseModel):
    id: str = Field(..., min_length=1)
    source: str
    target: str
    type: EdgeType
    properties: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class GraphData(BaseModel):
    """A node/edge set. Duplicate ids and dangling edges are allowed here and
    reported by validation rather than rejected at construction."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    scenario: str = Field("custom", description="Name of the dataset")

    model_config = ConfigDict(frozen=True)

    @property
    def relationship_types(self) -> list[EdgeType]:
        seen: dict[EdgeType, None] = {}
        for edge in self.edges:
            seen.setdefault(edge.type, None)
        return list(seen)


class ValidationResult(BaseModel):
    """Outcome of a consistency check over a GraphData."""

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def valid(self) -> bool:
        return not self.errors
