"""Classification of a PipelineRun status into one canonical reason."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import StrEnum

from pipetrigger.filter.constants import DEFAULT_PIPELINE_TIMEOUT
from pipetrigger.kernel.domain.pipeline_run import PipelineRun
from pipetrigger.kernel.exceptions import StatusClassificationError


class PipelineRunReason(StrEnum):
    """Canonical statuses matched verbatim by Build triggers."""

    SUCCESSFUL = "Successful"
    FAILED = "Failed"
    CANCELLED = "Cancelled"
    TIMED_OUT = "TimedOut"
    STARTED = "Started"


def parse_pipeline_run_status(
    now: datetime,
    pipeline_run: PipelineRun,
    default_timeout: timedelta = DEFAULT_PIPELINE_TIMEOUT,
) -> PipelineRunReason:
    """Parse the run status into its canonical reason.

    Checks run in priority order: a finished run reports its outcome even when
    it was also cancelled, and a run over its timeout reports ``TimedOut``
    before ``Started``. The timeout is evaluated against ``now``, never the
    wall clock.

    Parameters
    ----------
    now : datetime
        Instant to evaluate the timeout against
    pipeline_run : PipelineRun
        Run to classify
    default_timeout : timedelta
        Timeout for runs that declare none

    Returns
    -------
    PipelineRunReason
        One of the canonical statuses (a ``str`` subclass)

    Raises
    ------
    StatusClassificationError
        When the run is neither done, cancelled, timed out nor started
    """
    if pipeline_run.is_done():
        if pipeline_run.is_succeeded():
            return PipelineRunReason.SUCCESSFUL
        return PipelineRunReason.FAILED
    if pipeline_run.is_cancelled():
        return PipelineRunReason.CANCELLED
    if pipeline_run.has_timed_out(now, default_timeout):
        return PipelineRunReason.TIMED_OUT
    if pipeline_run.has_started():
        return PipelineRunReason.STARTED
    raise StatusClassificationError(pipeline_run.namespaced_name)
