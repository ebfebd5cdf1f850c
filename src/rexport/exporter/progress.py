"""
Aggregate progress of an export batch.
"""

from collections import Counter
from typing import Dict, List, Sequence

from rexport.exporter.interfaces import JobScheduler
from rexport.exporter.models import JobProgress, JobState
from rexport.exporter.submitter import job_group_id

NO_JOBS_FAILURE = "no export jobs recorded for group"


def fail_progress() -> JobProgress:
    """Placeholder returned when a group has no visible jobs."""
    return JobProgress(uid="", state=JobState.FAILED, failure=NO_JOBS_FAILURE)


def is_placeholder(progress: JobProgress) -> bool:
    return progress.uid == "" and progress.failure == NO_JOBS_FAILURE


def get_group_progress(scheduler: JobScheduler, space_id: int) -> List[JobProgress]:
    """Progress of every job in the space's export group; never empty."""
    progress = scheduler.get_job_progress_for_group(job_group_id(space_id))
    if not progress:
        return [fail_progress()]
    return list(progress)


def summarize_progress(progress: Sequence[JobProgress]) -> Dict[str, object]:
    counts = Counter(p.state for p in progress)
    return {
        "total": len(progress),
        "states": {state.value: counts.get(state, 0) for state in JobState},
        "done": all(p.is_terminal for p in progress),
        "failed": counts.get(JobState.FAILED, 0),
    }
