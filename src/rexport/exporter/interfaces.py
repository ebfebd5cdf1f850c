"""
Contracts of the collaborators the export orchestrator consumes.

The job engine, the repository store and the event bus live outside this
package; anything satisfying these protocols can be plugged in.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

from rexport.exporter.errors import JobCancelledError
from rexport.exporter.models import JobDefinition, JobProgress, Repository


class ProgressReporter(Protocol):
    def __call__(self, progress: int, details: str) -> None: ...


class JobHandler(Protocol):
    def handle(
        self, ctx: "ExecutionContext", data: str, progress: ProgressReporter
    ) -> str: ...


class JobExecutor(Protocol):
    """Handler registry owned by one job engine instance."""

    def register(self, job_type: str, handler: JobHandler) -> None: ...


class JobScheduler(Protocol):
    def run_jobs(self, group_id: str, definitions: List[JobDefinition]) -> None: ...

    def get_job_progress_for_group(self, group_id: str) -> List[JobProgress]: ...


class RepoStore(Protocol):
    def find(self, repo_id: int) -> Repository:
        """Return the repository or raise NotFoundError."""
        ...


class GitService(Protocol):
    def push_to_remote(self, git_uid: str, remote_url: str) -> None: ...


class EventPublisher(Protocol):
    def publish(self, scope_id: int, event_type: str, payload: object) -> None: ...


@dataclass
class ExecutionContext:
    """
    Per-attempt context handed to a job handler by the engine.

    The engine sets ``cancelled`` (or lets ``deadline`` pass) to abort the
    attempt; handlers call ``check()`` before each blocking step.
    """

    job_uid: str = ""
    cancelled: threading.Event = field(default_factory=threading.Event)
    deadline: Optional[float] = None
    clock: Callable[[], float] = time.monotonic

    def cancel(self) -> None:
        self.cancelled.set()

    def is_cancelled(self) -> bool:
        if self.cancelled.is_set():
            return True
        return self.deadline is not None and self.clock() >= self.deadline

    def check(self) -> None:
        if self.is_cancelled():
            raise JobCancelledError(f"job {self.job_uid or '<unknown>'} was cancelled")
