"""
Level assignment using networkx breadth-first traversal.

Each node gets an integer level: its BFS depth from the start node. The
first discovery of a node fixes its level, which breaks cycles in BFS order.
Nodes the traversal never reaches are collected on one trailing level so
they are still drawn.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import networkx as nx

from .graph import FlowGraph
from .models import Node, NodeKind


@dataclass
class LevelAssignment:
    """
    Result of level assignment.

    Attributes:
        levels: Node id -> level.
        layers: Node ids per level, each in discovery order.
        start: Id of the traversal start node.
        unreached: Ids placed on the trailing level, sorted by id.
        diagnostics: Warnings raised during assignment.
    """

    levels: Dict[str, int] = field(default_factory=dict)
    layers: List[List[str]] = field(default_factory=list)
    start: str = ""
    unreached: List[str] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)


def find_start_node(nodes: Sequence[Node]) -> Node:
    """Return the first start event, or the first node when there is none."""
    for node in nodes:
        if node.kind is NodeKind.START_EVENT:
            return node
    return nodes[0]


def assign_levels(flow_graph: FlowGraph, nodes: Sequence[Node]) -> LevelAssignment:
    """
    Assign BFS levels to every node.

    Children are explored in edge order because the graph keeps successors
    in insertion order.

    Args:
        flow_graph: Graph built from the parsed edges.
        nodes: Parsed nodes in declaration order; must not be empty.

    Returns:
        LevelAssignment covering every node.
    """
    result = LevelAssignment()

    start = find_start_node(nodes)
    if start.kind is not NodeKind.START_EVENT:
        result.diagnostics.append(
            f"No startEvent found; starting layout from first node '{start.id}'"
        )
    result.start = start.id

    result.levels[start.id] = 0
    result.layers.append([start.id])

    for parent, child in nx.bfs_edges(flow_graph.graph, start.id):
        level = result.levels[parent] + 1
        result.levels[child] = level
        if level == len(result.layers):
            result.layers.append([])
        result.layers[level].append(child)

    # Id order, independent of declaration order
    result.unreached = sorted(
        node.id for node in nodes if node.id not in result.levels
    )
    if result.unreached:
        trailing = len(result.layers)
        result.layers.append(list(result.unreached))
        for node_id in result.unreached:
            result.levels[node_id] = trailing
            result.diagnostics.append(
                f"Node '{node_id}' is not reachable from '{start.id}'; "
                f"placed on trailing level {trailing}"
            )

    return result
