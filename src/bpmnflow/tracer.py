"""
Debug tracing infrastructure for bpmnflow.

When debug mode is enabled, the generator records a snapshot of each
pipeline stage: what the parser produced, how the graph was built, which
level each node landed on, where it was placed, how edges were routed and
how large the canvas came out.

Usage:
    >>> generator = FlowchartGenerator()
    >>> result = generator.generate('startEvent s "Start"', debug=True)
    >>> trace = generator.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("debug_trace.txt")

Stages, in order:
1. parse - nodes, edges and parser diagnostics
2. graph - adjacency, parents and dangling edges
3. levels - start node, layers and unreached nodes
4. positions - node centers
5. routes - edge waypoints and label anchors
6. canvas - canvas width and height
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class RenderTrace:
    """
    Complete trace of a render operation.

    Attributes:
        stages: Pipeline stages with their data, in execution order
        diagnostics: Diagnostics the render produced
        input_text: The original input text
    """

    stages: List[PipelineStage] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)
    input_text: str = ""

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        """
        Add a pipeline stage snapshot.

        Args:
            name: Name of the stage (e.g., "levels")
            data: Dictionary of relevant data at this stage
        """
        self.stages.append(PipelineStage(name, data.copy()))

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the input, the stages that ran and the
        diagnostics raised.
        """
        lines = [
            "=" * 60,
            "RENDER TRACE SUMMARY",
            "=" * 60,
            "",
            f"Input: {repr(self.input_text[:100])}"
            f"{'...' if len(self.input_text) > 100 else ''}",
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]

        for stage in self.stages:
            lines.append(f"  - {stage.name}")

        lines.extend(["", f"Diagnostics: {len(self.diagnostics)}"])
        for message in self.diagnostics:
            lines.append(f"  {message}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete human-readable dump of the trace."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
