"""
Parser module for the flow diagram DSL.

Turns line-oriented input text into typed nodes and edges. Parsing is total:
lines that match no statement are skipped and reported as diagnostics, so a
half-typed diagram never stops rendering.

Grammar (one statement per line, statements in any order)::

    node    := KIND IDENT '"' TEXT '"' actor?
    actor   := '[actor:' NAME ']' | 'actor="' NAME '"'
    edge    := IDENT ARROW ('|' TEXT '|')? IDENT ('|' TEXT '|')?
    KIND    := startEvent | task | gateway | endEvent
    IDENT   := [A-Za-z0-9_]+
    ARROW   := '-->' | '->'

Blank lines, comments starting with ``%%`` or ``#`` and a bare header token
on the first content line (for example ``bpmnFlow``) are ignored.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .models import Edge, Node, NodeKind

IDENT = r"[A-Za-z0-9_]+"


@dataclass
class ParseResult:
    """Result of parsing input text."""

    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)


class Parser:
    """Parses flow diagram text into nodes and edges."""

    NODE_PATTERN = re.compile(
        r"^(?P<kind>startEvent|task|gateway|endEvent)\s+"
        rf"(?P<id>{IDENT})\s*"
        r'"(?P<label>[^"]*)"'
        r"(?:\s*(?:\[\s*actor\s*:\s*(?P<bracket_actor>[^\]]*?)\s*\]"
        r'|actor\s*=\s*"(?P<quoted_actor>[^"]*)"))?'
        r"\s*$"
    )

    EDGE_PATTERN = re.compile(
        rf"^(?P<source>{IDENT})\s*-{{1,2}}>\s*"
        r"(?:\|(?P<arrow_label>[^|]*)\|\s*)?"
        rf"(?P<target>{IDENT})"
        r"(?:\s*\|(?P<target_label>[^|]*)\|)?"
        r"\s*$"
    )

    HEADER_PATTERN = re.compile(rf"^{IDENT}$")

    COMMENT_PREFIXES = ("%%", "#")

    def parse(self, input_text: str) -> ParseResult:
        """
        Parse input text into nodes, edges and diagnostics.

        Duplicate node ids follow a last-write-wins policy: the later
        declaration replaces the earlier one in place, so the node keeps the
        slot of its first declaration in node order.

        Args:
            input_text: Multi-line DSL text.

        Returns:
            ParseResult with nodes in declaration order, edges in input
            order and one diagnostic per skipped or adjusted line.
        """
        result = ParseResult()
        declared_on: Dict[str, int] = {}
        index_of: Dict[str, int] = {}
        seen_content = False

        for line_num, line in enumerate(input_text.splitlines(), 1):
            stripped = line.strip()

            if not stripped or stripped.startswith(self.COMMENT_PREFIXES):
                continue

            first_content_line = not seen_content
            seen_content = True

            node = self._parse_node(stripped, line_num, result.diagnostics)
            if node is not None:
                if node.id in index_of:
                    result.diagnostics.append(
                        f"Line {line_num}: Duplicate node id '{node.id}' replaces "
                        f"the declaration on line {declared_on[node.id]}"
                    )
                    result.nodes[index_of[node.id]] = node
                else:
                    index_of[node.id] = len(result.nodes)
                    result.nodes.append(node)
                declared_on[node.id] = line_num
                continue

            edge = self._parse_edge(stripped, line_num, result.diagnostics)
            if edge is not None:
                result.edges.append(edge)
                continue

            if first_content_line and self.HEADER_PATTERN.match(stripped):
                continue

            result.diagnostics.append(
                f"Line {line_num}: Unrecognized statement skipped: {stripped}"
            )

        return result

    def _parse_node(
        self, line: str, line_num: int, diagnostics: List[str]
    ) -> Optional[Node]:
        match = self.NODE_PATTERN.match(line)
        if not match:
            return None

        kind = NodeKind(match.group("kind"))
        actor = match.group("bracket_actor")
        if actor is None:
            actor = match.group("quoted_actor")
        if actor is not None:
            actor = actor.strip() or None

        if actor is not None and kind is not NodeKind.TASK:
            diagnostics.append(
                f"Line {line_num}: Actor '{actor}' ignored on {kind.value} "
                f"'{match.group('id')}' (only tasks have actors)"
            )
            actor = None

        return Node(
            id=match.group("id"),
            kind=kind,
            label=match.group("label"),
            actor=actor,
        )

    def _parse_edge(
        self, line: str, line_num: int, diagnostics: List[str]
    ) -> Optional[Edge]:
        match = self.EDGE_PATTERN.match(line)
        if not match:
            return None

        arrow_label = match.group("arrow_label")
        target_label = match.group("target_label")
        if arrow_label is not None and target_label is not None:
            diagnostics.append(
                f"Line {line_num}: Edge has two labels, keeping "
                f"'{arrow_label.strip()}'"
            )

        label = arrow_label if arrow_label is not None else target_label
        return Edge(
            source=match.group("source"),
            target=match.group("target"),
            label=(label or "").strip(),
        )


def parse_flowchart(input_text: str) -> ParseResult:
    """
    Convenience function to parse flow diagram input.

    Args:
        input_text: Multi-line DSL text.

    Returns:
        ParseResult with nodes, edges and diagnostics.
    """
    return Parser().parse(input_text)
