"""
Records exchanged between the export orchestrator and its collaborators.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class TargetAccount:
    """Remote account the repositories are exported into."""

    account_id: str
    org_identifier: str
    project_identifier: str
    token: str = field(repr=False)

    def missing_fields(self):
        return [
            name
            for name in ("account_id", "org_identifier", "project_identifier", "token")
            if not getattr(self, name)
        ]


@dataclass(frozen=True)
class ExportRequest:
    """One repository's export intent, carried inside the job payload."""

    uid: str
    id: int
    description: str
    is_public: bool
    target: TargetAccount


@dataclass
class Repository:
    """Local repository record as returned by the repository store."""

    id: int
    parent_id: int
    uid: str
    git_uid: str
    default_branch: str = "main"
    description: str = ""
    is_public: bool = False


@dataclass
class CreateRepositoryInput:
    uid: str
    default_branch: str
    description: str
    is_public: bool
    readme: bool = False
    license: str = ""
    git_ignore: str = ""


@dataclass
class RemoteRepository:
    """Handle for a repository created on the remote."""

    id: int
    uid: str
    git_url: str


@dataclass
class JobDefinition:
    uid: str
    type: str
    max_retries: int
    timeout: timedelta
    data: str = field(repr=False)


class JobState(str, Enum):
    SCHEDULED = "scheduled"
    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"


@dataclass
class JobProgress:
    uid: str
    state: JobState
    progress: int = 0
    result: str = ""
    failure: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.state in (JobState.FINISHED, JobState.FAILED)


class ExportState(str, Enum):
    DECODING = "decoding"
    RESOLVING_REPO = "resolving_repo"
    CREATING_REMOTE = "creating_remote"
    PUSHING = "pushing"
    RECONCILING = "reconciling"
    DONE = "done"


class ExportOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    SUCCEEDED_EMPTY = "succeeded_empty"
    FAILED = "failed"


@dataclass
class ExportResult:
    """Outcome of one handler invocation, kept for logging and tests."""

    outcome: ExportOutcome
    state: ExportState
    remote: Optional[RemoteRepository] = None
    error: Optional[BaseException] = None
    # compensation failures, surfaced as warnings and never as the job error
    reconcile_warnings: List[Warning] = field(default_factory=list)
