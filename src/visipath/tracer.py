"""
Debug tracing infrastructure for visipath.

This module provides data structures for capturing what happened while a
scene was built and searched. When debug mode is enabled, the scene records
every pipeline stage together with the human-readable progress messages the
builder and pathfinder emit through their diagnostic sink.

This is primarily useful for:
1. Understanding why two nodes were or were not connected
2. Following the A* frontier as it expands
3. Writing targeted tests against intermediate state

Usage:
    >>> scene = Scene(debug=True)
    >>> scene.add_wall(100, 100, 50, 50)
    >>> scene.set_start(0, 0)
    >>> scene.set_goal(200, 200)
    >>> scene.solve()
    >>> trace = scene.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("debug_trace.txt")
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

# A diagnostic sink accepts one human-readable line at a time.
DiagnosticSink = Callable[[str], None]


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    The planning pipeline has these stages:
    1. scene - Obstacles and nodes handed to the builder
    2. graph_built - Edge and adjacency counts after visibility testing
    3. search_started - Start, goal and initial heuristic
    4. search_finished - Outcome, expansions and path cost

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            # Truncate long values
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class PlanTrace:
    """
    Complete trace of a build and search.

    A PlanTrace is itself usable as a diagnostic sink: calling
    ``trace.log(message)`` appends to ``messages``, so ``trace.log`` can be
    passed anywhere a ``DiagnosticSink`` is accepted.

    Attributes:
        stages: List of pipeline stages with their data
        messages: Every diagnostic message, in emission order
    """

    stages: List[PipelineStage] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        """
        Add a pipeline stage snapshot.

        Args:
            name: Name of the stage (e.g., "graph_built")
            data: Dictionary of relevant data at this stage
        """
        self.stages.append(PipelineStage(name, data.copy()))

    def log(self, message: str) -> None:
        """Record a diagnostic message."""
        self.messages.append(message)

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get the most recent pipeline stage with the given name."""
        for stage in reversed(self.stages):
            if stage.name == name:
                return stage
        return None

    def get_messages(self, substring: str) -> List[str]:
        """Get all messages containing a substring."""
        return [m for m in self.messages if substring in m]

    def clear(self) -> None:
        self.stages.clear()
        self.messages.clear()

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the stage overview and message count.
        """
        lines = [
            "=" * 60,
            "PLAN TRACE SUMMARY",
            "=" * 60,
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]

        for stage in self.stages:
            lines.append(f"  {stage.name}")

        lines.extend(["", f"Diagnostic messages: {len(self.messages)}"])

        finished = self.get_stage("search_finished")
        if finished is not None:
            lines.append(f"Search outcome: {finished.data.get('outcome')}")

        return "\n".join(lines)

    def dump(self) -> str:
        """
        Generate a complete human-readable dump of the trace.

        This includes all stages with their full data and every message.
        Can be long for scenes with many nodes.
        """
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("MESSAGES:")
        lines.append("-" * 40)
        lines.extend(self.messages)

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
