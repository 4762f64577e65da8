"""Tests for the PipelineRun label and annotation codec."""

from __future__ import annotations

import pytest
import stubs

from pipetrigger.filter.constants import DEFAULT_KEYS, ReservedKeys
from pipetrigger.filter.labels import (
    append_issued_build_runs_label,
    pipeline_run_get_annotations,
    pipeline_run_get_labels,
)


class TestPipelineRunGetLabels:
    """Tests for reading labels and annotations."""

    def test_without_labels(self) -> None:
        """Test a run without labels yields an empty mapping."""
        run = stubs.pipeline_run("pipeline")
        assert pipeline_run_get_labels(run) == {}

    def test_returns_copy(self) -> None:
        """Test mutating the result leaves the run untouched."""
        run = stubs.pipeline_run("pipeline")
        run.metadata.labels = {"app": "demo"}

        labels = pipeline_run_get_labels(run)
        labels["extra"] = "value"

        assert run.metadata.labels == {"app": "demo"}

    def test_annotations_copy(self) -> None:
        """Test annotations are returned as a copy."""
        run = stubs.pipeline_run("pipeline")
        assert pipeline_run_get_annotations(run) == {}

        run.metadata.annotations = {"note": "x"}
        annotations = pipeline_run_get_annotations(run)
        annotations.clear()
        assert run.metadata.annotations == {"note": "x"}


class TestAppendIssuedBuildRunsLabel:
    """Tests for append_issued_build_runs_label."""

    @pytest.mark.parametrize(
        ("existing", "issued", "want"),
        [
            (None, ["buildrun"], "buildrun"),
            ("existing-buildrun", ["buildrun"], "buildrun,existing-buildrun"),
            (None, ["a", "b"], "b,a"),
            ("x", ["a", "b"], "b,a,x"),
        ],
        ids=[
            "PipelineRun without BuildRun labeled",
            "PipelineRun with BuildRun labeled",
            "multiple names on empty label",
            "multiple names on existing label",
        ],
    )
    def test_append(self, existing: str | None, issued: list[str], want: str) -> None:
        """Test each name becomes the new leading token."""
        run = stubs.pipeline_run("pipeline")
        if existing is not None:
            run.metadata.labels = {DEFAULT_KEYS.build_runs_created: existing}

        append_issued_build_runs_label(run, issued)

        labels = pipeline_run_get_labels(run)
        assert DEFAULT_KEYS.build_runs_created in labels
        assert labels[DEFAULT_KEYS.build_runs_created] == want

    def test_empty_names_leave_object_untouched(self) -> None:
        """Test nothing is written without names."""
        run = stubs.pipeline_run("pipeline")
        append_issued_build_runs_label(run, [])
        assert run.metadata.labels is None

        run.metadata.labels = {DEFAULT_KEYS.build_runs_created: "existing-buildrun"}
        append_issued_build_runs_label(run, [])
        assert run.metadata.labels == {DEFAULT_KEYS.build_runs_created: "existing-buildrun"}

    def test_repeated_calls_keep_previous_names(self) -> None:
        """Test earlier names are kept as the suffix."""
        run = stubs.pipeline_run("pipeline")
        append_issued_build_runs_label(run, ["first"])
        append_issued_build_runs_label(run, ["second"])
        assert run.metadata.labels == {DEFAULT_KEYS.build_runs_created: "second,first"}

    def test_duplicates_are_kept(self) -> None:
        """Test repeated names are not de-duplicated."""
        run = stubs.pipeline_run("pipeline")
        append_issued_build_runs_label(run, ["buildrun"])
        append_issued_build_runs_label(run, ["buildrun"])
        assert run.metadata.labels == {DEFAULT_KEYS.build_runs_created: "buildrun,buildrun"}

    def test_preserves_other_labels(self) -> None:
        """Test unrelated labels survive the write."""
        run = stubs.pipeline_run("pipeline")
        run.metadata.labels = {"app": "demo"}
        append_issued_build_runs_label(run, ["buildrun"])
        assert run.metadata.labels == {
            "app": "demo",
            DEFAULT_KEYS.build_runs_created: "buildrun",
        }

    def test_custom_prefix(self) -> None:
        """Test the label key follows the reserved prefix."""
        keys = ReservedKeys.from_prefix("triggers.example.com")
        run = stubs.pipeline_run("pipeline")
        append_issued_build_runs_label(run, ["buildrun"], keys)
        assert run.metadata.labels == {"triggers.example.com/buildrun-names": "buildrun"}
