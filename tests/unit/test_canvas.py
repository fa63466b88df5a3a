"""Unit tests for the canvas module."""

from bpmnflow.canvas import (
    CANVAS_MARGIN,
    calculate_canvas_size,
    shift_down,
    top_overflow,
)
from bpmnflow.models import LayoutEdge, LayoutNode, Node, NodeKind
from bpmnflow.router import estimate_label_size


def _place(node_id, kind, x, y):
    return LayoutNode.from_node(Node(node_id, kind, node_id), x, y, 0)


class TestCalculateCanvasSize:
    """Tests for calculate_canvas_size."""

    def test_nodes_only(self):
        """Size is the furthest box edge plus margin."""
        nodes = [
            _place("s", NodeKind.START_EVENT, 100, 60),
            _place("t", NodeKind.TASK, 250, 180),
        ]
        assert calculate_canvas_size(nodes, []) == (
            300 + CANVAS_MARGIN,
            205 + CANVAS_MARGIN,
        )

    def test_back_edge_channel_extends_width(self):
        """Waypoints right of every node widen the canvas."""
        nodes = [_place("t", NodeKind.TASK, 100, 60)]
        edges = [LayoutEdge("t", "t", "", path=((100, 85), (400, 85), (100, 35)))]
        width, _ = calculate_canvas_size(nodes, edges, margin=10)
        assert width == 410

    def test_label_box_extends_width(self):
        """Labels past the rightmost node widen the canvas."""
        nodes = [_place("t", NodeKind.TASK, 100, 60)]
        label = "approved by manager"
        label_width, _ = estimate_label_size(label)
        edges = [
            LayoutEdge(
                "t",
                "x",
                label,
                path=((100, 85), (100, 100)),
                label_position=(160, 90),
            )
        ]
        width, _ = calculate_canvas_size(nodes, edges, margin=0)
        assert width == 160 + label_width / 2

    def test_unrouted_edges_ignored(self):
        """Dangling edges contribute nothing."""
        nodes = [_place("t", NodeKind.TASK, 100, 60)]
        edges = [LayoutEdge("t", "ghost", "label")]
        assert calculate_canvas_size(nodes, edges) == calculate_canvas_size(nodes, [])


class TestTopOverflow:
    """Tests for top_overflow."""

    def test_no_overflow(self):
        """Boxes below the margin need no shift."""
        nodes = [_place("s", NodeKind.START_EVENT, 100, 60)]
        assert top_overflow(nodes, [], 20) == 0.0

    def test_waypoint_above_margin(self):
        """A back-edge channel above level 0 sets the deficit."""
        nodes = [_place("g", NodeKind.GATEWAY, 100, 40)]
        edges = [LayoutEdge("a", "g", "", path=((170, -20), (100, -20), (100, 0)))]
        assert top_overflow(nodes, edges, 20) == 40

    def test_label_box_above_margin(self):
        """The top of a label box counts, not just its anchor."""
        nodes = [_place("s", NodeKind.START_EVENT, 100, 60)]
        edges = [
            LayoutEdge(
                "a",
                "s",
                "again",
                path=((170, 10), (100, 10), (100, 30)),
                label_position=(135, -5),
            )
        ]
        _, label_height = estimate_label_size("again")
        assert top_overflow(nodes, edges, 20) == 20 - (-5 - label_height / 2)

    def test_empty(self):
        assert top_overflow([], [], 20) == 0.0


class TestShiftDown:
    """Tests for shift_down."""

    def test_moves_everything(self):
        """Nodes, waypoints and label anchors move together."""
        nodes = [_place("s", NodeKind.START_EVENT, 100, 60)]
        edges = [
            LayoutEdge(
                "s",
                "s",
                "loop",
                path=((100, 90), (100, 10)),
                label_position=(120, 2),
            ),
            LayoutEdge("s", "ghost", ""),
        ]
        shifted_nodes, shifted_edges = shift_down(nodes, edges, 32)
        assert shifted_nodes[0].y == 92
        assert shifted_nodes[0].x == 100
        assert shifted_edges[0].path == ((100, 122), (100, 42))
        assert shifted_edges[0].label_position == (120, 34)
        assert shifted_edges[1].path == ()
        assert shifted_edges[1].label_position is None
