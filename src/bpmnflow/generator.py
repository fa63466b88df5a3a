"""
Main diagram generator module.

Combines parsing, graph building, level assignment, positioning, edge
routing and canvas sizing to turn DSL text into a laid-out Diagram.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from .canvas import CANVAS_MARGIN, calculate_canvas_size, shift_down, top_overflow
from .graph import build_graph
from .layout import assign_levels
from .models import (
    NO_NODES_MESSAGE,
    Diagram,
    LayoutNode,
    RenderResult,
)
from .parser import Parser
from .png_renderer import PNGRenderer
from .positioning import (
    BASE_X,
    BASE_Y,
    LEFT_MARGIN,
    LEVEL_SPACING,
    MIN_SPACING,
    PositionCalculator,
)
from .router import EdgeRouter
from .svg_renderer import SVGRenderer
from .tracer import RenderTrace

logger = logging.getLogger(__name__)


class FlowchartGenerator:
    """
    Generate flow diagram layouts from simple text descriptions.

    Example:
        >>> generator = FlowchartGenerator()
        >>> result = generator.generate('''
        ...     startEvent s "Start"
        ...     task t "Review" [actor: Alice]
        ...     s --> t
        ... ''')
        >>> result.diagram.get_node("t").level
        1
    """

    def __init__(
        self,
        min_spacing: float = MIN_SPACING,
        level_spacing: float = LEVEL_SPACING,
        base_x: float = BASE_X,
        base_y: float = BASE_Y,
        left_margin: float = LEFT_MARGIN,
        canvas_margin: float = CANVAS_MARGIN,
    ):
        """
        Initialize the diagram generator.

        Args:
            min_spacing: Minimum horizontal distance between node centers
                on the same level
            level_spacing: Vertical distance between levels
            base_x: Horizontal origin that root nodes are centered on
            base_y: Vertical center of the first level
            left_margin: Smallest x allowed for the left edge of a box; the
                same space is kept clear above the topmost element
            canvas_margin: Space added past the furthest drawn element

        Raises:
            ValueError: If the spacing would let boxes overlap, or a margin
                would put shapes outside the canvas
        """
        self.min_spacing = min_spacing
        self.level_spacing = level_spacing
        self.left_margin = left_margin
        self.canvas_margin = canvas_margin

        self.parser = Parser()
        self.position_calculator = PositionCalculator(
            min_spacing=min_spacing,
            level_spacing=level_spacing,
            base_x=base_x,
            base_y=base_y,
            left_margin=left_margin,
        )
        self.router = EdgeRouter(left_margin=left_margin)
        self._trace: Optional[RenderTrace] = None

    def generate(self, input_text: str, debug: bool = False) -> RenderResult:
        """
        Lay out a diagram from input text.

        Never raises for problems in the text: they are reported as
        diagnostics. When no node is parsed, the result has no diagram and
        carries a user-facing message instead.

        Args:
            input_text: Multi-line DSL text
            debug: Record a RenderTrace, available through get_trace()

        Returns:
            RenderResult with the Diagram (or the empty condition) and
            diagnostics
        """
        trace = RenderTrace(input_text=input_text) if debug else None
        self._trace = trace

        parsed = self.parser.parse(input_text)
        diagnostics = list(parsed.diagnostics)
        if trace:
            trace.add_stage(
                "parse",
                {
                    "nodes": [node.id for node in parsed.nodes],
                    "edges": [(e.source, e.target, e.label) for e in parsed.edges],
                    "diagnostics": list(parsed.diagnostics),
                },
            )

        if not parsed.nodes:
            return self._finish(
                RenderResult(None, tuple(diagnostics), NO_NODES_MESSAGE), trace
            )

        flow_graph = build_graph(parsed.nodes, parsed.edges)
        diagnostics.extend(flow_graph.diagnostics)
        if trace:
            trace.add_stage(
                "graph",
                {
                    "adjacency": flow_graph.adjacency,
                    "parents": flow_graph.parents,
                    "dangling": [(e.source, e.target) for e in flow_graph.dangling],
                },
            )

        assignment = assign_levels(flow_graph, parsed.nodes)
        diagnostics.extend(assignment.diagnostics)
        if trace:
            trace.add_stage(
                "levels",
                {
                    "start": assignment.start,
                    "layers": assignment.layers,
                    "unreached": assignment.unreached,
                },
            )

        kinds = {node.id: node.kind for node in parsed.nodes}
        positions = self.position_calculator.calculate_positions(
            assignment.layers, flow_graph.parents, kinds
        )
        if trace:
            trace.add_stage("positions", {"positions": dict(positions)})

        layout_nodes: Dict[str, LayoutNode] = {}
        for node in parsed.nodes:
            x, y = positions[node.id]
            layout_nodes[node.id] = LayoutNode.from_node(
                node, x, y, assignment.levels[node.id]
            )

        layout_edges = self.router.route_all(parsed.edges, layout_nodes)
        if trace:
            trace.add_stage(
                "routes",
                {
                    "paths": {
                        f"{e.source}->{e.target}": e.path for e in layout_edges
                    },
                    "labels": {
                        f"{e.source}->{e.target}": e.label_position
                        for e in layout_edges
                        if e.label_position is not None
                    },
                },
            )

        nodes = tuple(layout_nodes.values())
        shift = top_overflow(nodes, layout_edges, self.left_margin)
        if shift:
            nodes, layout_edges = shift_down(nodes, layout_edges, shift)
            logger.debug("Shifted diagram down by %g to clear the top margin", shift)
        width, height = calculate_canvas_size(nodes, layout_edges, self.canvas_margin)
        if trace:
            trace.add_stage(
                "canvas", {"shift": shift, "width": width, "height": height}
            )

        diagram = Diagram(
            nodes=nodes,
            edges=layout_edges,
            canvas_width=width,
            canvas_height=height,
        )
        return self._finish(RenderResult(diagram, tuple(diagnostics)), trace)

    def get_trace(self) -> Optional[RenderTrace]:
        """Return the trace of the last generate() call made with debug=True."""
        return self._trace

    def save_svg(self, input_text: str, filename: str, **svg_kwargs) -> str:
        """
        Generate a diagram and save it as an SVG file.

        Args:
            input_text: Multi-line DSL text
            filename: Output filename (should end in .svg)
            **svg_kwargs: Styling options for SVGRenderer

        Returns:
            Path of the written file
        """
        result = self.generate(input_text)
        output_path = Path(filename)
        svg = SVGRenderer(**svg_kwargs).render(result)
        output_path.write_text(svg, encoding="utf-8")
        return str(output_path)

    def save_png(
        self, input_text: str, filename: str, scale: int = 2, **png_kwargs
    ) -> str:
        """
        Generate a diagram and save it as a PNG image.

        Args:
            input_text: Multi-line DSL text
            filename: Output filename (should end in .png)
            scale: Resolution multiplier for crisp output (default 2 for retina)
            **png_kwargs: Styling options for PNGRenderer

        Returns:
            Path of the written file
        """
        result = self.generate(input_text)
        return PNGRenderer(scale=scale, **png_kwargs).render(result, filename)

    def _finish(
        self, result: RenderResult, trace: Optional[RenderTrace]
    ) -> RenderResult:
        for message in result.diagnostics:
            logger.warning(message)
        if result.is_empty:
            logger.warning(result.message)
        else:
            logger.debug(
                "Laid out %d nodes and %d edges on a %gx%g canvas",
                len(result.diagram.nodes),
                len(result.diagram.edges),
                result.diagram.canvas_width,
                result.diagram.canvas_height,
            )
        if trace:
            trace.diagnostics = list(result.diagnostics)
        return result


def render(input_text: str) -> RenderResult:
    """
    Convenience function to lay out DSL text with default settings.

    Args:
        input_text: Multi-line DSL text

    Returns:
        RenderResult with the Diagram (or the empty condition) and diagnostics
    """
    return FlowchartGenerator().generate(input_text)
