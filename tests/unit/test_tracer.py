"""
Tests for the tracer module.

These tests verify the debug tracing used to capture the intermediate state
of an outline run.
"""

import os
import tempfile

from canvasoutline.tracer import PipelineStage, RenderTrace


def resolved_trace(**kwargs):
    trace = RenderTrace(**kwargs)
    trace.add_stage("parse", {"elements": 5, "groups": 2, "connections": 1})
    trace.add_stage(
        "resolve",
        {
            "roots": ["R"],
            "nesting": [("R", 0), ("C", 1)],
            "parents": {"R": None, "C": "R"},
            "leaves": {"R": ["a"], "C": []},
            "ungrouped": ["x", "y"],
        },
    )
    trace.add_stage("render", {"characters": 20}, output="## R\n\n- a\n")
    return trace


class TestPipelineStage:
    """Tests for PipelineStage dataclass."""

    def test_creation(self):
        stage = PipelineStage(name="parse", data={"elements": 3})
        assert stage.name == "parse"
        assert stage.data == {"elements": 3}
        assert stage.snapshot is None

    def test_str_with_data(self):
        result = str(PipelineStage(name="resolve", data={"roots": ["R"], "a": 1}))
        assert result.split("\n") == ["[resolve]", "  a = 1", "  roots = ['R']"]

    def test_str_truncates_long_values(self):
        result = str(PipelineStage(name="s", data={"big": "x" * 500}))
        assert "x" * 99 + "..." in result
        assert "x" * 100 not in result

    def test_str_with_snapshot(self):
        stage = PipelineStage(name="render", data={}, snapshot=["## R", "", "- a"])
        result = str(stage)
        assert "output (3 of 3 lines):" in result
        assert "    > ## R" in result

    def test_snapshot_preview_limited(self):
        stage = PipelineStage(
            name="render", data={}, snapshot=[f"line{i}" for i in range(30)]
        )
        result = str(stage)
        assert "output (15 of 30 lines):" in result
        assert "> line14" in result
        assert "> line15" not in result


class TestRenderTrace:
    """Tests for RenderTrace dataclass."""

    def test_add_stage(self):
        trace = RenderTrace()
        trace.add_stage("parse", {"elements": 1})
        assert len(trace.stages) == 1
        assert trace.stages[0].snapshot is None

    def test_add_stage_copies_data(self):
        trace = RenderTrace()
        data = {"elements": 1}
        trace.add_stage("parse", data)
        data["elements"] = 2
        assert trace.get_stage("parse").data["elements"] == 1

    def test_add_stage_with_output(self):
        trace = RenderTrace()
        trace.add_stage("render", {}, output="## G\n\n- x\n")
        assert trace.get_stage("render").snapshot == ["## G", "", "- x", ""]

    def test_get_stage_missing(self):
        assert RenderTrace().get_stage("nope") is None

    def test_summary_describes_run(self):
        summary = resolved_trace(input_text='{"nodes": []}').summary()
        assert summary.split("\n") == [
            "Outline trace (13 characters of canvas text)",
            "Loaded 5 elements: 2 groups, 1 connections",
            "Group forest: 2 groups, 1 roots",
            "  R: a",
            "    C: no leaves",
            "Ungrouped: x, y",
            "Rendered 4 lines",
        ]

    def test_summary_names_source_file(self):
        summary = resolved_trace(source="board.canvas").summary()
        assert summary.startswith("Outline trace (file board.canvas)")

    def test_summary_without_input(self):
        assert RenderTrace().summary() == "Outline trace (in-memory elements)"

    def test_summary_without_ungrouped(self):
        trace = RenderTrace()
        trace.add_stage("resolve", {"nesting": [], "leaves": {}, "ungrouped": []})
        summary = trace.summary()
        assert "Group forest: 0 groups, 0 roots" in summary
        assert "Ungrouped" not in summary

    def test_dump(self):
        trace = resolved_trace()
        dump = trace.dump()
        assert dump.startswith(trace.summary())
        assert "[parse]\n  connections = 1\n  elements = 5\n  groups = 2" in dump
        assert "[render]" in dump

    def test_dump_to_file(self):
        trace = resolved_trace()

        with tempfile.NamedTemporaryFile(suffix=".txt", delete=False) as f:
            path = f.name

        try:
            trace.dump_to_file(path)
            with open(path, encoding="utf-8") as f:
                content = f.read()
            assert content == trace.dump()
        finally:
            os.unlink(path)
