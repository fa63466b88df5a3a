"""
Position calculation for flow diagram layout.

This module converts BFS levels into canvas coordinates. Positions are the
centers of node shapes:
- Vertical position comes straight from the level
- Horizontal position starts at the mean of the parents' positions
- Nodes in a level are pushed apart to respect a minimum spacing
- The whole diagram is shifted right if anything crosses the left margin

The PositionCalculator is a pure transform: the same layers and parent map
always produce the same, read-only coordinate map.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple

from .models import SHAPE_DIMENSIONS, NodeKind

# Default layout constants
MIN_SPACING = 150
LEVEL_SPACING = 120
BASE_X = 100
BASE_Y = 60
LEFT_MARGIN = 20

WIDEST_SHAPE = max(dims.width for dims in SHAPE_DIMENSIONS.values())
TALLEST_SHAPE = max(dims.height for dims in SHAPE_DIMENSIONS.values())


class PositionCalculator:
    """
    Calculates node center positions from levels.

    Attributes:
        min_spacing: Minimum horizontal distance between centers in a level.
        level_spacing: Vertical distance between consecutive levels.
        base_x: Horizontal origin that parentless nodes are centered on.
        base_y: Vertical center of level 0.
        left_margin: Smallest allowed x for the left edge of any box.
    """

    def __init__(
        self,
        min_spacing: float = MIN_SPACING,
        level_spacing: float = LEVEL_SPACING,
        base_x: float = BASE_X,
        base_y: float = BASE_Y,
        left_margin: float = LEFT_MARGIN,
    ):
        """
        Initialize the position calculator.

        Args:
            min_spacing: Minimum horizontal distance between centers in a
                level; must be at least the widest shape.
            level_spacing: Vertical distance between levels; must exceed the
                tallest shape so edges have room for a midline.
            base_x: Horizontal origin for parentless nodes.
            base_y: Vertical center of level 0.
            left_margin: Left boundary for box edges; must not be negative.

        Raises:
            ValueError: If the spacing would let boxes overlap, or a margin would
                put shapes outside the canvas.
        """
        if min_spacing < WIDEST_SHAPE:
            raise ValueError(
                f"min_spacing must be at least {WIDEST_SHAPE} (widest shape)"
            )
        if level_spacing <= TALLEST_SHAPE:
            raise ValueError(
                f"level_spacing must be greater than {TALLEST_SHAPE} (tallest shape)"
            )
        if base_y < TALLEST_SHAPE / 2:
            raise ValueError(
                f"base_y must be at least {TALLEST_SHAPE / 2} so level 0 fits"
            )
        if left_margin < 0:
            raise ValueError("left_margin must not be negative")

        self.min_spacing = float(min_spacing)
        self.level_spacing = float(level_spacing)
        self.base_x = float(base_x)
        self.base_y = float(base_y)
        self.left_margin = float(left_margin)

    def calculate_positions(
        self,
        layers: Sequence[Sequence[str]],
        parents: Mapping[str, Sequence[str]],
        kinds: Mapping[str, NodeKind],
    ) -> Mapping[str, Tuple[float, float]]:
        """
        Calculate center positions for every node.

        Levels are processed top-down, so only parents on earlier levels
        contribute to a node's starting x. Parents on the same or a later
        level (back edges) are ignored.

        Args:
            layers: Node ids per level, each in discovery order.
            parents: Node id -> parent ids.
            kinds: Node id -> kind, for box widths.

        Returns:
            Read-only mapping of node id -> (x, y).
        """
        xs: Dict[str, float] = {}
        ys: Dict[str, float] = {}

        for level, layer in enumerate(layers):
            layer_x = self._initial_x(layer, parents, xs)
            self._resolve_collisions(layer, layer_x)
            xs.update(layer_x)
            level_y = self.base_y + level * self.level_spacing
            for node_id in layer:
                ys[node_id] = level_y

        shift = self._left_margin_deficit(xs, kinds)
        return MappingProxyType(
            {node_id: (xs[node_id] + shift, ys[node_id]) for node_id in xs}
        )

    def _initial_x(
        self,
        layer: Sequence[str],
        parents: Mapping[str, Sequence[str]],
        placed: Mapping[str, float],
    ) -> Dict[str, float]:
        layer_x: Dict[str, float] = {}
        parentless: List[str] = []

        for node_id in layer:
            parent_xs = [placed[p] for p in parents.get(node_id, ()) if p in placed]
            if parent_xs:
                layer_x[node_id] = sum(parent_xs) / len(parent_xs)
            else:
                parentless.append(node_id)

        # Centered row on base_x
        offset = (len(parentless) - 1) * self.min_spacing / 2
        for index, node_id in enumerate(parentless):
            layer_x[node_id] = self.base_x + index * self.min_spacing - offset

        return layer_x

    def _resolve_collisions(
        self, layer: Sequence[str], layer_x: Dict[str, float]
    ) -> None:
        """
        Push nodes right until neighbours are at least min_spacing apart.

        Sorting is stable, so nodes sharing an x keep discovery order. A
        push moves every node further right by the same amount.
        """
        ordered = sorted(layer, key=lambda node_id: layer_x[node_id])

        for i in range(1, len(ordered)):
            gap = layer_x[ordered[i]] - layer_x[ordered[i - 1]]
            if gap < self.min_spacing:
                shift = self.min_spacing - gap
                for node_id in ordered[i:]:
                    layer_x[node_id] += shift
                # Exact spacing, free of float drift
                layer_x[ordered[i]] = layer_x[ordered[i - 1]] + self.min_spacing

    def _left_margin_deficit(
        self, xs: Mapping[str, float], kinds: Mapping[str, NodeKind]
    ) -> float:
        if not xs:
            return 0.0
        leftmost = min(
            x - SHAPE_DIMENSIONS[kinds[node_id]].width / 2
            for node_id, x in xs.items()
        )
        return max(0.0, self.left_margin - leftmost)
