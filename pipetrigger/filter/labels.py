"""Label and annotation codec for PipelineRun objects.

Reads return copies so callers can mutate the result before writing it back.
"""

from __future__ import annotations

from collections.abc import Sequence

from pipetrigger.filter.constants import DEFAULT_KEYS, ReservedKeys
from pipetrigger.kernel.domain.pipeline_run import PipelineRun


def pipeline_run_get_labels(pipeline_run: PipelineRun) -> dict[str, str]:
    """Return a copy of the run's labels, empty when none are set."""
    return dict(pipeline_run.metadata.labels or {})


def pipeline_run_get_annotations(pipeline_run: PipelineRun) -> dict[str, str]:
    """Return a copy of the run's annotations, empty when none are set."""
    return dict(pipeline_run.metadata.annotations or {})


def append_issued_build_runs_label(
    pipeline_run: PipelineRun,
    build_run_names: Sequence[str],
    keys: ReservedKeys = DEFAULT_KEYS,
) -> None:
    """Record the BuildRuns issued for the run in the ``buildrun-names`` label.

    Each name becomes the new leading token of the comma-separated value, the
    previous value is kept verbatim as the suffix::

        "existing-buildrun" + ["buildrun"] -> "buildrun,existing-buildrun"
        "" + ["a", "b"] -> "b,a"

    Nothing is written when ``build_run_names`` is empty. Names are not
    de-duplicated.
    """
    if not build_run_names:
        return

    labels = pipeline_run_get_labels(pipeline_run)
    value = labels.get(keys.build_runs_created, "")
    for name in build_run_names:
        value = f"{name},{value}" if value else name
    labels[keys.build_runs_created] = value
    pipeline_run.metadata.labels = labels
