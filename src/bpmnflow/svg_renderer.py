"""
SVG renderer for laid-out diagrams.

Builds an SVG document from a finished Diagram using ElementTree. Edges are
drawn first so node shapes sit on top of the line ends.
"""

import math
import xml.etree.ElementTree as ET
from typing import Dict, Tuple

from .models import Diagram, LayoutEdge, LayoutNode, NodeKind, RenderResult

SVG_NS = "http://www.w3.org/2000/svg"
ET.register_namespace("", SVG_NS)

ARROW_MARKER_ID = "arrow"

# (fill, stroke) per node kind
NODE_COLORS: Dict[NodeKind, Tuple[str, str]] = {
    NodeKind.START_EVENT: ("#e3f2fd", "#1976d2"),
    NodeKind.TASK: ("#fff3e0", "#f57c00"),
    NodeKind.GATEWAY: ("#e8f5e9", "#43a047"),
    NodeKind.END_EVENT: ("#ffebee", "#c62828"),
}


def _q(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


def _fmt(value: float) -> str:
    if math.isclose(value, round(value)):
        return str(int(round(value)))
    return f"{value:.3f}".rstrip("0").rstrip(".")


class SVGRenderer:
    """Renders diagrams as SVG documents."""

    def __init__(
        self,
        font_family: str = "sans-serif",
        font_size: int = 14,
        label_font_size: int = 12,
        actor_font_size: int = 10,
        line_color: str = "#000000",
        text_color: str = "#000000",
        actor_color: str = "#555555",
        error_color: str = "#d32f2f",
    ):
        self.font_family = font_family
        self.font_size = font_size
        self.label_font_size = label_font_size
        self.actor_font_size = actor_font_size
        self.line_color = line_color
        self.text_color = text_color
        self.actor_color = actor_color
        self.error_color = error_color

    def render(self, result: RenderResult) -> str:
        """
        Render a RenderResult as an SVG string.

        The empty result becomes a small SVG showing its message.
        """
        if result.is_empty:
            return self._render_message(result.message)
        return self.render_diagram(result.diagram)

    def render_diagram(self, diagram: Diagram) -> str:
        """Render a laid-out diagram as an SVG string."""
        root = ET.Element(
            _q("svg"),
            {
                "width": _fmt(diagram.canvas_width),
                "height": _fmt(diagram.canvas_height),
                "viewBox": f"0 0 {_fmt(diagram.canvas_width)} "
                f"{_fmt(diagram.canvas_height)}",
                "font-family": self.font_family,
            },
        )
        self._add_arrow_marker(root)

        for edge in diagram.edges:
            if edge.is_routed:
                self._add_edge(root, edge)

        for node in diagram.nodes:
            self._add_node(root, node)

        return ET.tostring(root, encoding="unicode")

    def _render_message(self, message: str) -> str:
        root = ET.Element(
            _q("svg"),
            {"width": "300", "height": "60", "font-family": self.font_family},
        )
        text = ET.SubElement(
            root,
            _q("text"),
            {
                "x": "10",
                "y": "35",
                "font-size": str(self.font_size),
                "fill": self.error_color,
            },
        )
        text.text = message
        return ET.tostring(root, encoding="unicode")

    def _add_arrow_marker(self, root: ET.Element) -> None:
        defs = ET.SubElement(root, _q("defs"))
        marker = ET.SubElement(
            defs,
            _q("marker"),
            {
                "id": ARROW_MARKER_ID,
                "viewBox": "0 0 10 10",
                "refX": "10",
                "refY": "5",
                "markerWidth": "8",
                "markerHeight": "8",
                "orient": "auto",
            },
        )
        ET.SubElement(
            marker, _q("path"), {"d": "M 0 0 L 10 5 L 0 10 z", "fill": self.line_color}
        )

    def _add_edge(self, root: ET.Element, edge: LayoutEdge) -> None:
        (x0, y0), *rest = edge.path
        d = f"M {_fmt(x0)} {_fmt(y0)}" + "".join(
            f" L {_fmt(x)} {_fmt(y)}" for x, y in rest
        )
        ET.SubElement(
            root,
            _q("path"),
            {
                "d": d,
                "stroke": self.line_color,
                "stroke-width": "2",
                "fill": "none",
                "marker-end": f"url(#{ARROW_MARKER_ID})",
            },
        )

        if edge.label and edge.label_position is not None:
            label_x, label_y = edge.label_position
            text = ET.SubElement(
                root,
                _q("text"),
                {
                    "x": _fmt(label_x),
                    "y": _fmt(label_y),
                    "text-anchor": "middle",
                    "dominant-baseline": "middle",
                    "font-size": str(self.label_font_size),
                    "fill": self.text_color,
                },
            )
            text.text = edge.label

    def _add_node(self, root: ET.Element, node: LayoutNode) -> None:
        fill, stroke = NODE_COLORS[node.kind]
        group = ET.SubElement(
            root, _q("g"), {"id": node.id, "class": f"bpmn-{node.kind.value}"}
        )
        style = {"fill": fill, "stroke": stroke, "stroke-width": "2"}

        if node.shape == "circle":
            ET.SubElement(
                group,
                _q("circle"),
                {
                    "cx": _fmt(node.x),
                    "cy": _fmt(node.y),
                    "r": _fmt(node.width / 2),
                    **style,
                },
            )
        elif node.shape == "diamond":
            points = [
                (node.x, node.top),
                (node.right, node.y),
                (node.x, node.bottom),
                (node.left, node.y),
            ]
            ET.SubElement(
                group,
                _q("polygon"),
                {
                    "points": " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in points),
                    **style,
                },
            )
        else:
            ET.SubElement(
                group,
                _q("rect"),
                {
                    "x": _fmt(node.left),
                    "y": _fmt(node.top),
                    "width": _fmt(node.width),
                    "height": _fmt(node.height),
                    "rx": "5",
                    "ry": "5",
                    **style,
                },
            )

        label = ET.SubElement(
            group,
            _q("text"),
            {
                "x": _fmt(node.x),
                "y": _fmt(node.y),
                "text-anchor": "middle",
                "dominant-baseline": "middle",
                "font-size": str(self.font_size),
                "fill": self.text_color,
            },
        )
        label.text = node.label

        if node.kind is NodeKind.TASK and node.actor:
            # Bottom-right corner, inside the box
            actor = ET.SubElement(
                group,
                _q("text"),
                {
                    "x": _fmt(node.right - 5),
                    "y": _fmt(node.bottom - 5),
                    "text-anchor": "end",
                    "font-size": str(self.actor_font_size),
                    "fill": self.actor_color,
                    "class": "bpmn-actor",
                },
            )
            actor.text = node.actor
