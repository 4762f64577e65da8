"""Annotations tracking which PipelineRun objects and Builds were already processed.

Two annotations live on the PipelineRun:

- ``<prefix>/pipelinerun-name`` holds the name of the object at the time it was
  processed, so a replayed event for the same object can be skipped.
- ``<prefix>/pipelinerun-triggered-builds`` holds a JSON list of the Builds
  triggered for the run, each with the WhenObjectRef it was triggered for.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from pipetrigger.filter.constants import DEFAULT_KEYS, ReservedKeys
from pipetrigger.filter.labels import pipeline_run_get_annotations
from pipetrigger.kernel.domain.build_run import WhenObjectRef
from pipetrigger.kernel.domain.meta import ResourceModel
from pipetrigger.kernel.domain.pipeline_run import PipelineRun
from pipetrigger.kernel.exceptions import TriggeredBuildsDecodeError


class TriggeredBuild(ResourceModel):
    """A Build triggered for a PipelineRun and the object ref that matched it."""

    build_name: str
    object_ref: WhenObjectRef | None = None


_TRIGGERED_BUILDS = TypeAdapter(list[TriggeredBuild])


def pipeline_run_annotate_name(
    pipeline_run: PipelineRun, keys: ReservedKeys = DEFAULT_KEYS
) -> None:
    """Annotate the run with its current name."""
    annotations = pipeline_run_get_annotations(pipeline_run)
    annotations[keys.pipeline_run_name] = pipeline_run.metadata.name
    pipeline_run.metadata.annotations = annotations


def pipeline_run_annotated_name_matches_object(
    pipeline_run: PipelineRun, keys: ReservedKeys = DEFAULT_KEYS
) -> bool:
    """Whether the run is annotated and the annotation matches its name."""
    annotations = pipeline_run.metadata.annotations or {}
    value = annotations.get(keys.pipeline_run_name)
    return value is not None and value == pipeline_run.metadata.name


def pipeline_run_get_triggered_builds(
    pipeline_run: PipelineRun, keys: ReservedKeys = DEFAULT_KEYS
) -> list[TriggeredBuild]:
    """Decode the triggered-builds annotation, empty when absent.

    Raises
    ------
    TriggeredBuildsDecodeError
        When the annotation is present but is not a JSON list of triggered builds
    """
    annotations = pipeline_run.metadata.annotations or {}
    raw = annotations.get(keys.pipeline_run_triggered_builds, "")
    if not raw:
        return []
    try:
        return _TRIGGERED_BUILDS.validate_json(raw)
    except PydanticValidationError as e:
        raise TriggeredBuildsDecodeError(pipeline_run.namespaced_name, str(e)) from e


def pipeline_run_append_triggered_builds_annotation(
    pipeline_run: PipelineRun,
    triggered_builds: Iterable[TriggeredBuild],
    keys: ReservedKeys = DEFAULT_KEYS,
) -> None:
    """Append triggered builds to the annotation, skipping entries already recorded.

    Raises
    ------
    TriggeredBuildsDecodeError
        When the existing annotation cannot be decoded
    """
    recorded = pipeline_run_get_triggered_builds(pipeline_run, keys)
    changed = False
    for triggered in triggered_builds:
        if any(
            r.build_name == triggered.build_name and r.object_ref == triggered.object_ref
            for r in recorded
        ):
            continue
        recorded.append(triggered)
        changed = True
    if not changed:
        return

    annotations = pipeline_run_get_annotations(pipeline_run)
    annotations[keys.pipeline_run_triggered_builds] = json.dumps(
        [t.model_dump(by_alias=True, exclude_none=True) for t in recorded],
        separators=(",", ":"),
    )
    pipeline_run.metadata.annotations = annotations


def triggered_builds_contains_object_ref(
    triggered_builds: Sequence[TriggeredBuild],
    build_names: Sequence[str],
    object_ref: WhenObjectRef,
) -> bool:
    """Whether every Build in ``build_names`` was already triggered for ``object_ref``."""
    for build_name in build_names:
        found = any(
            t.build_name == build_name and t.object_ref == object_ref
            for t in triggered_builds
        )
        if not found:
            return False
    return True
