"""
bpmnflow - Flow diagram layout for a small BPMN-style DSL

A Python library that lays out start events, tasks, gateways and end events
connected by labeled edges, and renders the result as SVG or PNG.

Example:
    >>> from bpmnflow import FlowchartGenerator
    >>> generator = FlowchartGenerator()
    >>> result = generator.generate('''
    ...     startEvent s "Start"
    ...     task t "Do" [actor: Alice]
    ...     endEvent e "End"
    ...     s --> t
    ...     t --> e
    ... ''')
    >>> [node.level for node in result.diagram.nodes]
    [0, 1, 2]

Debug Mode Example:
    >>> result = generator.generate('startEvent s "Start"', debug=True)
    >>> trace = generator.get_trace()
    >>> print(trace.summary())
"""

from .canvas import calculate_canvas_size
from .generator import FlowchartGenerator, render
from .graph import FlowGraph, build_graph
from .layout import LevelAssignment, assign_levels
from .models import (
    Diagram,
    Edge,
    LayoutEdge,
    LayoutNode,
    Node,
    NodeKind,
    RenderResult,
)
from .parser import ParseResult, Parser, parse_flowchart
from .png_renderer import PNGRenderer, render_to_png
from .positioning import PositionCalculator
from .router import EdgeRouter
from .svg_renderer import SVGRenderer
from .tracer import PipelineStage, RenderTrace

__version__ = "0.1.0"

__all__ = [
    # Main API
    "FlowchartGenerator",
    "render",
    # Models
    "Diagram",
    "Edge",
    "LayoutEdge",
    "LayoutNode",
    "Node",
    "NodeKind",
    "RenderResult",
    # Parser
    "Parser",
    "ParseResult",
    "parse_flowchart",
    # Layout
    "FlowGraph",
    "build_graph",
    "LevelAssignment",
    "assign_levels",
    "PositionCalculator",
    "EdgeRouter",
    "calculate_canvas_size",
    # Renderers
    "SVGRenderer",
    "PNGRenderer",
    "render_to_png",
    # Debug/Tracing
    "RenderTrace",
    "PipelineStage",
]
