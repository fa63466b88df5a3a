"""
Canvas sizing for laid-out diagrams.

Routing can put back-edge channels and their labels above level 0, so the
finished layout is first shifted down until everything clears the top
margin, then the canvas is sized to contain it.
"""

from dataclasses import replace
from typing import Sequence, Tuple

from .models import LayoutEdge, LayoutNode
from .router import estimate_label_size

CANVAS_MARGIN = 40


def top_overflow(
    nodes: Sequence[LayoutNode],
    edges: Sequence[LayoutEdge],
    top_margin: float,
) -> float:
    """
    Distance the diagram must move down so nothing sits above top_margin.

    Considers node boxes, edge waypoints and label boxes.

    Returns:
        The deficit, or 0.0 when everything already clears the margin.
    """
    tops = [node.top for node in nodes]
    for edge in edges:
        tops.extend(y for _, y in edge.path)
        if edge.label_position is not None:
            _, height = estimate_label_size(edge.label)
            tops.append(edge.label_position[1] - height / 2)

    if not tops:
        return 0.0
    return max(0.0, top_margin - min(tops))


def shift_down(
    nodes: Sequence[LayoutNode],
    edges: Sequence[LayoutEdge],
    dy: float,
) -> Tuple[Tuple[LayoutNode, ...], Tuple[LayoutEdge, ...]]:
    """Move every node, waypoint and label anchor down by dy."""
    shifted_nodes = tuple(replace(node, y=node.y + dy) for node in nodes)
    shifted_edges = []
    for edge in edges:
        label_position = edge.label_position
        if label_position is not None:
            label_position = (label_position[0], label_position[1] + dy)
        shifted_edges.append(
            replace(
                edge,
                path=tuple((x, y + dy) for x, y in edge.path),
                label_position=label_position,
            )
        )
    return shifted_nodes, tuple(shifted_edges)


def calculate_canvas_size(
    nodes: Sequence[LayoutNode],
    edges: Sequence[LayoutEdge],
    margin: float = CANVAS_MARGIN,
) -> Tuple[float, float]:
    """
    Calculate the canvas size that contains every drawn element.

    Covers node boxes, edge waypoints (back-edge channels run to the right
    of the nodes) and label boxes, plus a fixed margin.

    Args:
        nodes: Laid-out nodes.
        edges: Routed edges.
        margin: Space added past the furthest element.

    Returns:
        (width, height) tuple.
    """
    max_x = 0.0
    max_y = 0.0

    for node in nodes:
        max_x = max(max_x, node.right)
        max_y = max(max_y, node.bottom)

    for edge in edges:
        for x, y in edge.path:
            max_x = max(max_x, x)
            max_y = max(max_y, y)
        if edge.label_position is not None:
            width, height = estimate_label_size(edge.label)
            label_x, label_y = edge.label_position
            max_x = max(max_x, label_x + width / 2)
            max_y = max(max_y, label_y + height / 2)

    return max_x + margin, max_y + margin
