"""Unit tests for the router module."""

import pytest

from bpmnflow.models import Edge, LayoutEdge, LayoutNode, Node, NodeKind
from bpmnflow.router import (
    BACK_EDGE_CLEARANCE,
    LABEL_OFFSET,
    EdgeRouter,
    estimate_label_size,
    simplify_path,
)


def _place(node_id, kind, x, y, level=0):
    return LayoutNode.from_node(Node(node_id, kind, node_id), x, y, level)


@pytest.fixture
def router():
    return EdgeRouter()


class TestSimplifyPath:
    """Tests for simplify_path."""

    def test_removes_duplicates(self):
        assert simplify_path([(0, 0), (0, 0), (5, 0), (5, 9)]) == (
            (0, 0),
            (5, 0),
            (5, 9),
        )

    def test_straight_vertical_collapses(self):
        assert simplify_path([(1, 0), (1, 5), (1, 5), (1, 9)]) == ((1, 0), (1, 9))

    def test_keeps_corners(self):
        path = [(0, 0), (0, 5), (8, 5), (8, 9)]
        assert simplify_path(path) == tuple(path)


class TestEstimateLabelSize:
    """Tests for estimate_label_size."""

    def test_empty_label(self):
        assert estimate_label_size("") == (0.0, 0.0)

    def test_grows_with_length(self):
        short_w, short_h = estimate_label_size("no")
        long_w, long_h = estimate_label_size("not approved")
        assert long_w > short_w
        assert long_h == short_h


class TestRoute:
    """Tests for EdgeRouter.route."""

    def test_straight_forward_edge(self, router):
        """Aligned nodes get a two-point vertical path."""
        source = _place("s", NodeKind.START_EVENT, 100, 60)
        target = _place("t", NodeKind.TASK, 100, 180, 1)
        routed = router.route(Edge("s", "t"), source, target)
        assert routed.path == ((100, 90), (100, 155))
        assert routed.label_position is None

    def test_orthogonal_forward_edge(self, router):
        """Offset nodes get down-across-down with a midline run."""
        source = _place("g", NodeKind.GATEWAY, 100, 180, 1)
        target = _place("t", NodeKind.TASK, 250, 300, 2)
        routed = router.route(Edge("g", "t", "no"), source, target)
        assert routed.path == (
            (100, 220),
            (100, 247.5),
            (250, 247.5),
            (250, 275),
        )

    def test_label_above_midline_run(self, router):
        """The label box sits LABEL_OFFSET above the horizontal run."""
        source = _place("g", NodeKind.GATEWAY, 100, 180, 1)
        target = _place("t", NodeKind.TASK, 250, 300, 2)
        routed = router.route(Edge("g", "t", "no"), source, target)
        _, height = estimate_label_size("no")
        label_x, label_y = routed.label_position
        assert label_x == 175
        assert label_y + height / 2 == 247.5 - LABEL_OFFSET

    def test_label_beside_straight_edge(self, router):
        """With no horizontal run, the label moves right of the line."""
        source = _place("g", NodeKind.GATEWAY, 100, 180, 1)
        target = _place("t", NodeKind.TASK, 100, 300, 2)
        routed = router.route(Edge("g", "t", "yes"), source, target)
        width, _ = estimate_label_size("yes")
        label_x, _ = routed.label_position
        assert label_x - width / 2 == 100 + LABEL_OFFSET

    def test_label_kept_inside_left_margin(self):
        """A long label near the left edge is pushed right."""
        router = EdgeRouter(left_margin=20)
        source = _place("a", NodeKind.TASK, 70, 60)
        target = _place("b", NodeKind.TASK, 370, 180, 1)
        label = "a very long label that is wider than the run"
        routed = router.route(Edge("a", "b", label), source, target)
        width, _ = estimate_label_size(label)
        assert routed.label_position[0] - width / 2 >= 20

    def test_back_edge_uses_side_channel(self, router):
        """An edge to an earlier level loops around the right side."""
        source = _place("b", NodeKind.TASK, 100, 300, 2)
        target = _place("a", NodeKind.TASK, 100, 180, 1)
        routed = router.route(Edge("b", "a"), source, target)
        channel_x = 150 + BACK_EDGE_CLEARANCE
        assert routed.path == (
            (100, 325),
            (100, 325 + BACK_EDGE_CLEARANCE),
            (channel_x, 325 + BACK_EDGE_CLEARANCE),
            (channel_x, 155 - BACK_EDGE_CLEARANCE),
            (100, 155 - BACK_EDGE_CLEARANCE),
            (100, 155),
        )

    def test_same_level_edge_is_routed_around(self, router):
        """Same-level edges use the side channel too."""
        source = _place("a", NodeKind.TASK, 100, 180, 1)
        target = _place("b", NodeKind.TASK, 250, 180, 1)
        routed = router.route(Edge("a", "b"), source, target)
        xs = [x for x, _ in routed.path]
        assert max(xs) == 300 + BACK_EDGE_CLEARANCE
        assert routed.path[0] == (100, 205)
        assert routed.path[-1] == (250, 155)

    def test_self_loop(self, router):
        """A self-loop leaves the bottom and re-enters the top."""
        node = _place("a", NodeKind.TASK, 100, 180, 1)
        routed = router.route(Edge("a", "a"), node, node)
        assert routed.path[0] == (100, 205)
        assert routed.path[-1] == (100, 155)
        assert routed.is_routed


class TestRouteAll:
    """Tests for EdgeRouter.route_all."""

    def test_keeps_input_order(self, router):
        nodes = {
            "s": _place("s", NodeKind.START_EVENT, 100, 60),
            "t": _place("t", NodeKind.TASK, 100, 180, 1),
        }
        edges = [Edge("t", "s"), Edge("s", "t")]
        routed = router.route_all(edges, nodes)
        assert [(e.source, e.target) for e in routed] == [("t", "s"), ("s", "t")]

    def test_dangling_edge_kept_unrouted(self, router):
        nodes = {"s": _place("s", NodeKind.START_EVENT, 100, 60)}
        routed = router.route_all([Edge("s", "ghost", "x")], nodes)
        assert routed == (LayoutEdge("s", "ghost", "x"),)
        assert not routed[0].is_routed
