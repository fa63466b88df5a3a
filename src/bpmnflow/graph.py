"""
Graph construction for flow diagram layout.

Builds the directed graph used by traversal from parsed nodes and edges.
Only edges whose endpoints are both declared nodes enter the graph; the rest
are kept aside as dangling edges so they can still appear in the diagram.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import networkx as nx

from .models import Edge, Node


@dataclass
class FlowGraph:
    """
    Trusted graph structure for layout.

    Attributes:
        graph: Directed graph over declared node ids.
        adjacency: Forward map node id -> child ids, in edge order.
        parents: Reverse map node id -> parent ids, in edge order.
        dangling: Edges with at least one undeclared endpoint.
        diagnostics: Warnings raised while building.
    """

    graph: nx.DiGraph
    adjacency: Dict[str, List[str]] = field(default_factory=dict)
    parents: Dict[str, List[str]] = field(default_factory=dict)
    dangling: List[Edge] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)


def build_graph(nodes: Sequence[Node], edges: Sequence[Edge]) -> FlowGraph:
    """
    Build adjacency and parent maps from parsed nodes and edges.

    Repeated edges between the same pair collapse to one graph edge;
    networkx keeps successors and predecessors in insertion order, which
    fixes the child order used by breadth-first traversal.

    Args:
        nodes: Parsed nodes, in declaration order.
        edges: Parsed edges, in input order.

    Returns:
        FlowGraph with maps covering every declared node.
    """
    graph = nx.DiGraph()
    graph.add_nodes_from(node.id for node in nodes)

    dangling: List[Edge] = []
    diagnostics: List[str] = []

    if not edges:
        diagnostics.append("No edges found; rendering nodes only.")

    for edge in edges:
        missing = [
            endpoint
            for endpoint in (edge.source, edge.target)
            if endpoint not in graph
        ]
        if missing:
            names = ", ".join(f"'{name}'" for name in dict.fromkeys(missing))
            diagnostics.append(
                f"Edge {edge.source} --> {edge.target} references unknown "
                f"node {names}; excluded from layout"
            )
            dangling.append(edge)
            continue
        graph.add_edge(edge.source, edge.target)

    return FlowGraph(
        graph=graph,
        adjacency={node: list(graph.successors(node)) for node in graph.nodes},
        parents={node: list(graph.predecessors(node)) for node in graph.nodes},
        dangling=dangling,
        diagnostics=diagnostics,
    )
