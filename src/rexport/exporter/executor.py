"""
Background job handler that exports one repository.

An attempt decodes the job data, resolves the local repository, creates
the remote repository and pushes into it. When the push fails the remote
is deleted again so no empty remote is left behind. Every attempt that got
as far as creating the remote publishes a completion event.
"""

import re
from typing import Callable

from rexport.constants import EXPORT_JOB_TYPE, PUSH_URL_USERNAME
from rexport.exporter.codec import PayloadCodec
from rexport.exporter.errors import (
    EmptyRepositoryError,
    ExportError,
    RemoteCreateError,
)
from rexport.exporter.interfaces import (
    EventPublisher,
    ExecutionContext,
    GitService,
    JobExecutor,
    ProgressReporter,
    RepoStore,
)
from rexport.exporter.models import (
    CreateRepositoryInput,
    ExportOutcome,
    ExportResult,
    ExportState,
    Repository,
    TargetAccount,
)
from rexport.exporter.notify import publish_export_completed
from rexport.exporter.remote_client import RemoteTargetClient
from rexport.exporter.saga import Saga
from rexport.exporter.submitter import job_uid
from rexport.logging import get_logger, log_job_event
from rexport.utils.url import embed_credentials

logger = get_logger("rexport.exporter.executor")

_EMPTY_SOURCE = re.compile(r"\bempty\b", re.IGNORECASE)

ClientFactory = Callable[[TargetAccount], RemoteTargetClient]


def is_empty_source_error(error: BaseException) -> bool:
    """
    Whether a push failure only means there was nothing to push.

    Git services that raise EmptyRepositoryError are classified by type.
    Our own errors are never matched by text since their messages carry
    remote URLs and repository names. Errors from other git services fall
    back to looking for the word "empty".
    """
    if isinstance(error, EmptyRepositoryError):
        return True
    if isinstance(error, ExportError):
        return False
    return bool(_EMPTY_SOURCE.search(str(error)))


def _noop_progress(progress: int, details: str) -> None:
    pass


class ExportExecutor:
    def __init__(
        self,
        codec: PayloadCodec,
        repo_store: RepoStore,
        git: GitService,
        publisher: EventPublisher,
        client_factory: ClientFactory,
    ):
        self.codec = codec
        self.repo_store = repo_store
        self.git = git
        self.publisher = publisher
        self.client_factory = client_factory

    def register(self, job_executor: JobExecutor) -> None:
        """Register this handler with a job engine at process startup."""
        job_executor.register(EXPORT_JOB_TYPE, self)

    def handle(
        self,
        ctx: ExecutionContext,
        data: str,
        progress: ProgressReporter = _noop_progress,
    ) -> str:
        """
        Job engine entry point.

        Returns an empty result on success (including an empty source
        repository). Raises the attempt's error otherwise so the engine can
        apply its retry policy.
        """
        result = self.execute(ctx, data, progress)
        if result.outcome is ExportOutcome.FAILED:
            raise result.error
        return ""

    def execute(
        self,
        ctx: ExecutionContext,
        data: str,
        progress: ProgressReporter = _noop_progress,
    ) -> ExportResult:
        state = ExportState.DECODING
        uid = ctx.job_uid or EXPORT_JOB_TYPE
        try:
            ctx.check()
            request = self.codec.decode(data)
            uid = ctx.job_uid or job_uid(request.id)
            progress(10, "job input decoded")

            state = ExportState.RESOLVING_REPO
            ctx.check()
            repository = self.repo_store.find(request.id)
        except ExportError as e:
            log_job_event(uid, f"failed while {state.value}", "error", {"error": str(e)})
            return ExportResult(ExportOutcome.FAILED, state, error=e)

        log_job_event(uid, "export started", details={"repository": repository.uid})
        saga = Saga(uid)

        state = ExportState.CREATING_REMOTE
        try:
            ctx.check()
            client = self.client_factory(request.target)
            remote = saga.run(
                "create_remote",
                lambda: client.create_repository(_create_input(repository)),
                compensation=lambda created: client.delete_repository(created.uid),
            )
        except Exception as e:
            error = e
            if not isinstance(e, ExportError):
                error = RemoteCreateError(f"failed to create remote repository: {e}")
                error.__cause__ = e
            log_job_event(uid, "remote creation failed", "error", {"error": str(error)})
            publish_export_completed(self.publisher, repository)
            return ExportResult(ExportOutcome.FAILED, state, error=error)
        progress(30, "remote repository created")

        state = ExportState.PUSHING
        try:
            ctx.check()
            push_url = embed_credentials(
                remote.git_url, PUSH_URL_USERNAME, request.target.token
            )
            self.git.push_to_remote(repository.git_uid, push_url)
        except Exception as e:
            if is_empty_source_error(e):
                log_job_event(uid, "source repository is empty, nothing to push")
                publish_export_completed(self.publisher, repository)
                progress(100, "repository is empty")
                return ExportResult(
                    ExportOutcome.SUCCEEDED_EMPTY, ExportState.DONE, remote=remote
                )

            state = ExportState.RECONCILING
            log_job_event(uid, "push failed, deleting remote", "error", {"error": str(e)})
            report = saga.compensate()
            for warning in report.errors:
                log_job_event(uid, "reconciliation failed", "warning", {"error": str(warning)})
            publish_export_completed(self.publisher, repository)
            return ExportResult(
                ExportOutcome.FAILED,
                state,
                remote=remote,
                error=e,
                reconcile_warnings=report.errors,
            )
        progress(90, "repository pushed")

        log_job_event(uid, "completed repository export", details={"repository": repository.uid})
        publish_export_completed(self.publisher, repository)
        progress(100, "export completed")
        return ExportResult(ExportOutcome.SUCCEEDED, ExportState.DONE, remote=remote)


def _create_input(repository: Repository) -> CreateRepositoryInput:
    return CreateRepositoryInput(
        uid=repository.uid,
        default_branch=repository.default_branch,
        description=repository.description,
        is_public=repository.is_public,
        readme=False,
        license="",
        git_ignore="",
    )
