"""
Debug tracing infrastructure for canvasoutline.

When debug mode is enabled, the generator records what each pipeline stage
produced so a surprising outline can be traced back to the containment
decisions behind it.

Usage:
    >>> generator = OutlineGenerator()
    >>> outline = generator.generate_from_file("board.canvas", debug=True)
    >>> trace = generator.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("debug_trace.txt")

Stages recorded by the generator:
- parse: element, group and connection counts
- resolve: group nesting, leaf assignments and ungrouped elements
- render: the produced outline
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

MAX_VALUE_WIDTH = 100
PREVIEW_LINES = 15


@dataclass
class PipelineStage:
    """
    Data recorded at one pipeline stage.

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
        snapshot: Optional list of output lines at this point
    """

    name: str
    data: Dict[str, Any]
    snapshot: Optional[List[str]] = None

    def __str__(self) -> str:
        lines = [f"[{self.name}]"]
        for key in sorted(self.data):
            value = repr(self.data[key])
            if len(value) > MAX_VALUE_WIDTH:
                value = value[:MAX_VALUE_WIDTH] + "..."
            lines.append(f"  {key} = {value}")
        if self.snapshot:
            shown = self.snapshot[:PREVIEW_LINES]
            lines.append(f"  output ({len(shown)} of {len(self.snapshot)} lines):")
            lines.extend(f"    > {row}" for row in shown)
        return "\n".join(lines)


@dataclass
class RenderTrace:
    """
    Complete trace of an outline run.

    Attributes:
        stages: List of pipeline stages with their data
        input_text: The canvas text, if the run started from text
        source: Path of the canvas file, if the run started from a file
    """

    stages: List[PipelineStage] = field(default_factory=list)
    input_text: str = ""
    source: str = ""

    def add_stage(
        self,
        name: str,
        data: Dict[str, Any],
        output: Optional[str] = None,
    ) -> None:
        """
        Add a pipeline stage record.

        Args:
            name: Name of the stage (e.g., "resolve")
            data: Dictionary of relevant data at this stage
            output: Optional rendered text to snapshot
        """
        snapshot = output.split("\n") if output is not None else None
        self.stages.append(PipelineStage(name, data.copy(), snapshot))

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def summary(self) -> str:
        """
        Describe the run in outline terms.

        Lists the element counts, every group indented under its parent with
        the leaves assigned to it, and the elements left outside all groups.
        """
        if self.source:
            origin = f"file {self.source}"
        elif self.input_text:
            origin = f"{len(self.input_text)} characters of canvas text"
        else:
            origin = "in-memory elements"
        lines = [f"Outline trace ({origin})"]

        parse = self.get_stage("parse")
        if parse is not None:
            lines.append(
                "Loaded {elements} elements: {groups} groups, "
                "{connections} connections".format(**parse.data)
            )

        resolve = self.get_stage("resolve")
        if resolve is not None:
            nesting = resolve.data.get("nesting", [])
            leaves = resolve.data.get("leaves", {})
            roots = [group_id for group_id, depth in nesting if depth == 0]
            lines.append(f"Group forest: {len(nesting)} groups, {len(roots)} roots")
            for group_id, depth in nesting:
                assigned = ", ".join(leaves.get(group_id, [])) or "no leaves"
                lines.append(f"  {'  ' * depth}{group_id}: {assigned}")
            ungrouped = resolve.data.get("ungrouped", [])
            if ungrouped:
                lines.append(f"Ungrouped: {', '.join(ungrouped)}")

        render = self.get_stage("render")
        if render is not None and render.snapshot is not None:
            lines.append(f"Rendered {len(render.snapshot)} lines")

        return "\n".join(lines)

    def dump(self) -> str:
        """Summary followed by every stage in full."""
        sections = [self.summary()]
        sections.extend(str(stage) for stage in self.stages)
        return "\n\n".join(sections)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
