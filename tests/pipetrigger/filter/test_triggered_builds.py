"""Tests for the processed-name and triggered-builds annotations."""

from __future__ import annotations

import json

import pytest
import stubs

from pipetrigger.filter.constants import DEFAULT_KEYS
from pipetrigger.filter.translate import pipeline_run_to_object_ref
from pipetrigger.filter.triggered_builds import (
    TriggeredBuild,
    pipeline_run_annotate_name,
    pipeline_run_annotated_name_matches_object,
    pipeline_run_append_triggered_builds_annotation,
    pipeline_run_get_triggered_builds,
    triggered_builds_contains_object_ref,
)
from pipetrigger.kernel.domain import WhenObjectRef
from pipetrigger.kernel.exceptions import TriggeredBuildsDecodeError


@pytest.fixture
def object_ref() -> WhenObjectRef:
    return WhenObjectRef(name="pipeline", status=["Successful"], selector={"app": "demo"})


class TestPipelineRunName:
    """Tests for the processed-name annotation."""

    def test_not_annotated(self) -> None:
        """Test a run without the annotation does not match."""
        run = stubs.pipeline_run("pipeline")
        assert pipeline_run_annotated_name_matches_object(run) is False

    def test_annotate_and_match(self) -> None:
        """Test an annotated run matches its own name."""
        run = stubs.pipeline_run("pipeline")
        pipeline_run_annotate_name(run)

        assert run.metadata.annotations == {DEFAULT_KEYS.pipeline_run_name: "pipeline"}
        assert pipeline_run_annotated_name_matches_object(run) is True

    def test_annotation_from_other_object(self) -> None:
        """Test an annotation carrying another name does not match."""
        run = stubs.pipeline_run("pipeline")
        run.metadata.annotations = {DEFAULT_KEYS.pipeline_run_name: "pipeline-abc12"}
        assert pipeline_run_annotated_name_matches_object(run) is False


class TestTriggeredBuildsAnnotation:
    """Tests for the triggered-builds annotation."""

    def test_absent_annotation(self) -> None:
        """Test a missing annotation reads as an empty list."""
        assert pipeline_run_get_triggered_builds(stubs.pipeline_run("pipeline")) == []

    def test_append_and_read_back(self, object_ref: WhenObjectRef) -> None:
        """Test appended builds are stored as compact JSON."""
        run = stubs.pipeline_run("pipeline")
        pipeline_run_append_triggered_builds_annotation(
            run, [TriggeredBuild(build_name="build", object_ref=object_ref)]
        )

        raw = run.metadata.annotations[DEFAULT_KEYS.pipeline_run_triggered_builds]
        assert json.loads(raw) == [
            {
                "buildName": "build",
                "objectRef": {
                    "name": "pipeline",
                    "status": ["Successful"],
                    "selector": {"app": "demo"},
                },
            }
        ]
        assert pipeline_run_get_triggered_builds(run) == [
            TriggeredBuild(build_name="build", object_ref=object_ref)
        ]

    def test_append_skips_recorded_entries(self, object_ref: WhenObjectRef) -> None:
        """Test recorded entries are not appended twice."""
        run = stubs.pipeline_run("pipeline")
        triggered = TriggeredBuild(build_name="build", object_ref=object_ref)

        pipeline_run_append_triggered_builds_annotation(run, [triggered])
        before = dict(run.metadata.annotations)
        pipeline_run_append_triggered_builds_annotation(run, [triggered])

        assert run.metadata.annotations == before
        assert len(pipeline_run_get_triggered_builds(run)) == 1

    def test_same_build_other_status_is_appended(self, object_ref: WhenObjectRef) -> None:
        """Test the same build with another object ref is recorded."""
        run = stubs.pipeline_run("pipeline")
        started = object_ref.model_copy(update={"status": ["Started"]})

        pipeline_run_append_triggered_builds_annotation(
            run, [TriggeredBuild(build_name="build", object_ref=started)]
        )
        pipeline_run_append_triggered_builds_annotation(
            run, [TriggeredBuild(build_name="build", object_ref=object_ref)]
        )

        assert [t.object_ref.status for t in pipeline_run_get_triggered_builds(run)] == [
            ["Started"],
            ["Successful"],
        ]

    @pytest.mark.parametrize("raw", ["not json", '{"buildName": "x"}', '[{"objectRef": {}}]'])
    def test_malformed_annotation(self, raw: str) -> None:
        """Test an undecodable annotation raises TriggeredBuildsDecodeError."""
        run = stubs.pipeline_run("pipeline")
        run.metadata.annotations = {DEFAULT_KEYS.pipeline_run_triggered_builds: raw}

        with pytest.raises(TriggeredBuildsDecodeError):
            pipeline_run_get_triggered_builds(run)


class TestTriggeredBuildsContainsObjectRef:
    """Tests for triggered_builds_contains_object_ref."""

    def test_all_names_recorded(self, object_ref: WhenObjectRef) -> None:
        """Test every name recorded for the ref is found."""
        triggered = [
            TriggeredBuild(build_name="a", object_ref=object_ref),
            TriggeredBuild(build_name="b", object_ref=object_ref),
        ]
        assert triggered_builds_contains_object_ref(triggered, ["a", "b"], object_ref) is True

    def test_missing_name(self, object_ref: WhenObjectRef) -> None:
        """Test a name without a record is not found."""
        triggered = [TriggeredBuild(build_name="a", object_ref=object_ref)]
        assert triggered_builds_contains_object_ref(triggered, ["a", "b"], object_ref) is False

    def test_different_object_ref(self, object_ref: WhenObjectRef) -> None:
        """Test a record for another ref does not count."""
        other = object_ref.model_copy(update={"selector": {}})
        triggered = [TriggeredBuild(build_name="a", object_ref=other)]
        assert triggered_builds_contains_object_ref(triggered, ["a"], object_ref) is False

    def test_replayed_event_is_recognized(self) -> None:
        """Test a replayed event maps to the recorded ref."""
        run = stubs.pipeline_run_succeeded("pipeline")
        ref = pipeline_run_to_object_ref(stubs.NOW, run)
        pipeline_run_append_triggered_builds_annotation(
            run, [TriggeredBuild(build_name="build", object_ref=ref)]
        )

        # the annotation lives under the reserved prefix, so the ref is unchanged
        replayed = pipeline_run_to_object_ref(stubs.NOW, run)
        recorded = pipeline_run_get_triggered_builds(run)
        assert triggered_builds_contains_object_ref(recorded, ["build"], replayed) is True
