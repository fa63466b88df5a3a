"""
Edge routing module for flow diagram layout.

Handles orthogonal routing of edges between laid-out nodes:
- Anchors on the bottom of the source and the top of the target
- A horizontal run along the midline between the two levels
- A side channel for back edges that climb to an earlier level
- Label anchors placed just above the horizontal run
"""

from typing import List, Mapping, Optional, Sequence, Tuple

from .models import Edge, LayoutEdge, LayoutNode, Point
from .positioning import LEFT_MARGIN

LABEL_OFFSET = 8  # Gap between a label box and the path below it
LABEL_CHAR_WIDTH = 7
LABEL_HEIGHT = 14
LABEL_PADDING = 4
BACK_EDGE_CLEARANCE = 20


def estimate_label_size(label: str) -> Tuple[float, float]:
    """Approximate the box a label occupies at the default font size."""
    if not label:
        return 0.0, 0.0
    return len(label) * LABEL_CHAR_WIDTH + 2 * LABEL_PADDING, float(LABEL_HEIGHT)


def simplify_path(points: Sequence[Point]) -> Tuple[Point, ...]:
    """Drop repeated points and interior points of straight runs."""
    deduped: List[Point] = []
    for point in points:
        if not deduped or deduped[-1] != point:
            deduped.append(point)

    simplified: List[Point] = []
    for point in deduped:
        if len(simplified) >= 2:
            before, middle = simplified[-2], simplified[-1]
            same_column = before[0] == middle[0] == point[0]
            same_row = before[1] == middle[1] == point[1]
            if same_column or same_row:
                simplified[-1] = point
                continue
        simplified.append(point)
    return tuple(simplified)


class EdgeRouter:
    """
    Routes edges between laid-out nodes using orthogonal paths.
    """

    def __init__(self, left_margin: float = LEFT_MARGIN):
        self.left_margin = left_margin

    def route_all(
        self, edges: Sequence[Edge], nodes: Mapping[str, LayoutNode]
    ) -> Tuple[LayoutEdge, ...]:
        """
        Route every edge, in input order.

        Edges with an unknown endpoint are kept with an empty path and no
        label anchor.

        Args:
            edges: Parsed edges.
            nodes: Laid-out nodes by id.

        Returns:
            Tuple of LayoutEdge objects, one per input edge.
        """
        routed = []
        for edge in edges:
            source = nodes.get(edge.source)
            target = nodes.get(edge.target)
            if source is None or target is None:
                routed.append(LayoutEdge(edge.source, edge.target, edge.label))
            else:
                routed.append(self.route(edge, source, target))
        return tuple(routed)

    def route(self, edge: Edge, source: LayoutNode, target: LayoutNode) -> LayoutEdge:
        """
        Route a single edge between two laid-out nodes.

        A forward edge drops from the source to the midline between the
        boxes, runs across and drops into the target. When the target is not
        below the source, the path leaves downward, runs up a channel to the
        right of both boxes and enters the target from above.

        Returns:
            LayoutEdge with waypoints and label anchor.
        """
        start = (source.x, source.bottom)
        end = (target.x, target.top)

        if target.top > source.bottom:
            mid_y = (source.bottom + target.top) / 2
            run = ((source.x, mid_y), (target.x, mid_y))
            points = [start, run[0], run[1], end]
        else:
            below = source.bottom + BACK_EDGE_CLEARANCE
            above = target.top - BACK_EDGE_CLEARANCE
            channel_x = max(source.right, target.right) + BACK_EDGE_CLEARANCE
            run = ((channel_x, above), (target.x, above))
            points = [
                start,
                (source.x, below),
                (channel_x, below),
                run[0],
                run[1],
                end,
            ]

        return LayoutEdge(
            source=edge.source,
            target=edge.target,
            label=edge.label,
            path=simplify_path(points),
            label_position=self._label_position(edge.label, run),
        )

    def _label_position(
        self, label: str, run: Tuple[Point, Point]
    ) -> Optional[Point]:
        """
        Center of the label box, sitting LABEL_OFFSET above the run.

        When the run is too short to hold the label without touching the
        vertical line entering it, the label moves to the right of that line.
        """
        if not label:
            return None

        width, height = estimate_label_size(label)
        (x1, y), (x2, _) = run
        center_y = y - LABEL_OFFSET - height / 2

        if abs(x2 - x1) >= width + 2 * LABEL_OFFSET:
            center_x = (x1 + x2) / 2
        else:
            center_x = x1 + LABEL_OFFSET + width / 2

        center_x = max(center_x, self.left_margin + width / 2)
        return (center_x, center_y)
