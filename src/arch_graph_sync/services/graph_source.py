"""Graph data source queried by views.

Resolves element ids into nodes, validates node/edge consistency and offers
the neighborhood and per-level queries the graph and detail views need. The
engine core never calls into this module.
"""

import logging

import pandas as pd

from arch_graph_sync.schemas import (
    EdgeType,
    GraphData,
    GraphEdge,
    GraphNode,
    HighlightCategory,
    NodeType,
    ValidationResult,
)

logger = logging.getLogger(__name__)

NODE_COLUMNS = [
    "id",
    "type",
    "label",
    "category",
    "level_code",
    "material",
    "system_code",
]

# Node property keys (camelCase, as produced by the graph service) -> frame columns
_PROPERTY_COLUMNS = {
    "category": "category",
    "levelCode": "level_code",
    "material": "material",
    "systemCode": "system_code",
}

_PIPE_CATEGORIES = {"pipe", "pipes", "duct", "ducts", "pipefitting", "pipe fitting"}


class GraphDataSource:
    """Read-only view over a ``GraphData`` set."""

    def __init__(self, data: GraphData) -> None:
        self.data = data
        self._nodes: dict[str, GraphNode] = {}
        for node in data.nodes:
            # First occurrence wins; duplicates are reported by validate().
            self._nodes.setdefault(node.id, node)
        self._frame: pd.DataFrame | None = None

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    # --- Validation ---

    def validate(self) -> ValidationResult:
        """Check id uniqueness and edge endpoints; flag orphan nodes."""
        errors: list[str] = []
        warnings: list[str] = []

        node_ids: set[str] = set()
        for node in self.data.nodes:
            if node.id in node_ids:
                errors.append(f"Duplicate node ID: {node.id}")
            node_ids.add(node.id)

        edge_ids: set[str] = set()
        for edge in self.data.edges:
            if edge.id in edge_ids:
                errors.append(f"Duplicate edge ID: {edge.id}")
            edge_ids.add(edge.id)

        connected: set[str] = set()
        for edge in self.data.edges:
            if edge.source not in node_ids:
                errors.append(f"Edge {edge.id} has invalid source: {edge.source}")
            if edge.target not in node_ids:
                errors.append(f"Edge {edge.id} has invalid target: {edge.target}")
            connected.update((edge.source, edge.target))

        for node in self.data.nodes:
            if node.id not in connected:
                warnings.append(f"Orphan node (no edges): {node.id}")

        result = ValidationResult(errors=errors, warnings=warnings)
        if not result.valid:
            logger.warning(
                f"Graph '{self.data.scenario}' failed validation with "
                f"{len(errors)} errors"
            )
        return result

    # --- Lookups ---

    def get_node(self, node_id: str) -> GraphNode | None:
        return self._nodes.get(node_id)

    def nodes_by_type(self, node_type: NodeType | str) -> list[GraphNode]:
        node_type = NodeType(node_type)
        return [n for n in self.data.nodes if n.type is node_type]

    def edges_by_type(self, edge_type: EdgeType | str) -> list[GraphEdge]:
        edge_type = EdgeType(edge_type)
        return [e for e in self.data.edges if e.type is edge_type]

    def connected_edges(self, node_id: str) -> list[GraphEdge]:
        return [e for e in self.data.edges if node_id in (e.source, e.target)]

    def neighbors(self, node_id: str) -> list[GraphNode]:
        """Nodes one edge away from ``node_id``, in dataset order."""
        neighbor_ids = set()
        for edge in self.connected_edges(node_id):
            neighbor_ids.add(edge.target if edge.source == node_id else edge.source)
        neighbor_ids.discard(node_id)
        return [n for n in self._nodes.values() if n.id in neighbor_ids]

    def filter_by_level(self, level_code: str) -> GraphData:
        """Sub-graph for one level.

        Keeps storeys, spaces and MEP elements on ``level_code`` plus every
        MEP system (systems span all levels), and only the edges between
        kept nodes.
        """
        on_level_types = {NodeType.STOREY, NodeType.SPACE, NodeType.MEP_ELEMENT}
        nodes = [
            n
            for n in self.data.nodes
            if n.type is NodeType.MEP_SYSTEM
            or (
                n.type in on_level_types
                and n.properties.get("levelCode") == level_code
            )
        ]
        kept = {n.id for n in nodes}
        edges = [e for e in self.data.edges if e.source in kept and e.target in kept]
        return GraphData(
            nodes=nodes, edges=edges, scenario=f"{self.data.scenario}-{level_code}"
        )

    # --- Tabular access ---

    def nodes_frame(self) -> pd.DataFrame:
        """One row per node with flattened, filterable property columns."""
        if self._frame is None:
            rows = []
            for node in self._nodes.values():
                row = {"id": node.id, "type": node.type.value, "label": node.label}
                for key, column in _PROPERTY_COLUMNS.items():
                    row[column] = node.properties.get(key)
                rows.append(row)
            self._frame = pd.DataFrame(rows, columns=NODE_COLUMNS)
        return self._frame.copy()

    def find_nodes(
        self,
        category: str | None = None,
        level: str | None = None,
        material: str | None = None,
    ) -> list[str]:
        """Ids of nodes matching every given filter (case-insensitive).

        Category matching ignores a trailing plural "s" ("Walls" matches
        "Wall"). With no filter at all nothing matches.
        """
        if not any((category, level, material)):
            return []

        df = self.nodes_frame()
        mask = pd.Series(True, index=df.index)
        if category:
            wanted = _singular(category.strip().casefold())
            mask &= _normalized(df["category"]).map(_singular) == wanted
        if level:
            mask &= _normalized(df["level_code"]) == level.strip().casefold()
        if material:
            mask &= _normalized(df["material"]) == material.strip().casefold()
        return df.loc[mask, "id"].tolist()


def highlight_category_for(node: GraphNode) -> HighlightCategory:
    """Map a node onto the highlight category views style it with."""
    if node.type is NodeType.SPACE:
        return HighlightCategory.SPACE
    if node.type is NodeType.MEP_SYSTEM:
        return HighlightCategory.SYSTEM
    if node.type is NodeType.MEP_ELEMENT:
        category = str(node.properties.get("category", "")).casefold()
        if category in _PIPE_CATEGORIES:
            return HighlightCategory.PIPE
    return HighlightCategory.ELEMENT


def _normalized(column: pd.Series) -> pd.Series:
    return column.fillna("").astype(str).str.strip().str.casefold()


def _singular(value: str) -> str:
    if len(value) > 3 and value.endswith("s") and not value.endswith("ss"):
        return value[:-1]
    return value
