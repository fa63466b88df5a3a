"""
Data models for flow diagram layout.

This module contains the dataclasses that flow through the layout pipeline,
from parsed nodes and edges to the finished, immutable Diagram handed to a
renderer. Every model is a frozen dataclass with tuple fields, so rendering
the same text twice yields values that compare equal.

Classes:
    NodeKind: The four node kinds of the flow grammar.
    ShapeDimensions: Fixed box geometry for a node kind.
    Node: A parsed node declaration.
    Edge: A parsed directed edge.
    LayoutNode: A node with computed position, size and level.
    LayoutEdge: An edge with a computed path and label anchor.
    Diagram: The fully laid-out result.
    RenderResult: A Diagram (or the explicit empty condition) plus diagnostics.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

Point = Tuple[float, float]

NO_NODES_MESSAGE = "No nodes found in DSL"


class NodeKind(Enum):
    """Which kind of flow element a node is."""

    START_EVENT = "startEvent"
    TASK = "task"
    GATEWAY = "gateway"
    END_EVENT = "endEvent"


@dataclass(frozen=True)
class ShapeDimensions:
    """
    Fixed box geometry for a node kind.

    Attributes:
        shape: Drawing primitive ("circle", "rect" or "diamond").
        width: Full width of the bounding box.
        height: Full height of the bounding box.
    """

    shape: str
    width: float
    height: float


SHAPE_DIMENSIONS: Dict[NodeKind, ShapeDimensions] = {
    NodeKind.START_EVENT: ShapeDimensions("circle", 60, 60),
    NodeKind.TASK: ShapeDimensions("rect", 100, 50),
    NodeKind.GATEWAY: ShapeDimensions("diamond", 80, 80),
    NodeKind.END_EVENT: ShapeDimensions("circle", 60, 60),
}


@dataclass(frozen=True)
class Node:
    """
    A node declared in the input text.

    Attributes:
        id: Unique identifier used by edges.
        kind: Node kind.
        label: Display text.
        actor: Performer annotation; only kept for tasks.
    """

    id: str
    kind: NodeKind
    label: str
    actor: Optional[str] = None


@dataclass(frozen=True)
class Edge:
    """A directed edge between two node ids, with an optional label."""

    source: str
    target: str
    label: str = ""


@dataclass(frozen=True)
class LayoutNode:
    """
    A node with its computed geometry.

    Attributes:
        id: Node identifier.
        kind: Node kind.
        label: Display text.
        actor: Performer annotation (tasks only).
        x: Horizontal center of the shape.
        y: Vertical center of the shape.
        width: Bounding box width.
        height: Bounding box height.
        level: BFS depth from the start node.
    """

    id: str
    kind: NodeKind
    label: str
    actor: Optional[str]
    x: float
    y: float
    width: float
    height: float
    level: int

    @property
    def shape(self) -> str:
        return SHAPE_DIMENSIONS[self.kind].shape

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2

    @classmethod
    def from_node(cls, node: Node, x: float, y: float, level: int) -> "LayoutNode":
        dims = SHAPE_DIMENSIONS[node.kind]
        return cls(
            id=node.id,
            kind=node.kind,
            label=node.label,
            actor=node.actor,
            x=x,
            y=y,
            width=dims.width,
            height=dims.height,
            level=level,
        )


@dataclass(frozen=True)
class LayoutEdge:
    """
    An edge with its computed route.

    Attributes:
        source: Source node id.
        target: Target node id.
        label: Edge label, empty when absent.
        path: Ordered waypoints from source anchor to target anchor. Empty
            when an endpoint is unknown and the edge could not be routed.
        label_position: Anchor for the label text, or None.
    """

    source: str
    target: str
    label: str
    path: Tuple[Point, ...] = ()
    label_position: Optional[Point] = None

    @property
    def is_routed(self) -> bool:
        return len(self.path) >= 2


@dataclass(frozen=True)
class Diagram:
    """
    The finished layout consumed by a renderer.

    Nodes are in declaration order and edges in input order so that
    rendering is deterministic.
    """

    nodes: Tuple[LayoutNode, ...]
    edges: Tuple[LayoutEdge, ...]
    canvas_width: float
    canvas_height: float

    def get_node(self, node_id: str) -> Optional[LayoutNode]:
        """Look up a laid-out node by id."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


@dataclass(frozen=True)
class RenderResult:
    """
    Outcome of a render call.

    Attributes:
        diagram: The laid-out diagram, or None when no nodes were parsed.
        diagnostics: Non-fatal warnings collected along the pipeline.
        message: User-facing message for the empty condition.
    """

    diagram: Optional[Diagram]
    diagnostics: Tuple[str, ...] = ()
    message: str = ""

    @property
    def is_empty(self) -> bool:
        return self.diagram is None
