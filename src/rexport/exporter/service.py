"""
Repository export service wiring.

Bundles the batch submitter, the job handler and progress reporting for
the host process.
"""

from functools import partial
from typing import List, Sequence

from rexport.exporter.codec import PayloadCodec
from rexport.exporter.crypto import Encrypter
from rexport.exporter.executor import ClientFactory, ExportExecutor
from rexport.exporter.git_service import GitPushService
from rexport.exporter.interfaces import (
    EventPublisher,
    ExecutionContext,
    GitService,
    JobExecutor,
    JobScheduler,
    ProgressReporter,
    RepoStore,
)
from rexport.exporter.models import JobDefinition, JobProgress, Repository, TargetAccount
from rexport.exporter.progress import get_group_progress
from rexport.exporter.remote_client import RemoteTargetClient
from rexport.exporter.submitter import BatchSubmitter
from rexport.utils.config_store import ExportConfig


class RepositoryExporter:
    def __init__(
        self,
        scheduler: JobScheduler,
        encrypter: Encrypter,
        repo_store: RepoStore,
        git: GitService,
        publisher: EventPublisher,
        client_factory: ClientFactory,
    ):
        self.scheduler = scheduler
        codec = PayloadCodec(encrypter)
        self.submitter = BatchSubmitter(scheduler, codec)
        self.executor = ExportExecutor(codec, repo_store, git, publisher, client_factory)

    @classmethod
    def from_config(
        cls,
        config: ExportConfig,
        scheduler: JobScheduler,
        encrypter: Encrypter,
        repo_store: RepoStore,
        publisher: EventPublisher,
    ) -> "RepositoryExporter":
        if not config.remote_base_url:
            raise ValueError("remote_base_url is not configured")
        if not config.storage_root:
            raise ValueError("storage_root is not configured")
        client_factory = partial(
            RemoteTargetClient.for_account,
            config.remote_base_url,
            timeout=config.http_timeout,
        )
        return cls(
            scheduler,
            encrypter,
            repo_store,
            GitPushService(config.storage_root),
            publisher,
            client_factory,
        )

    def register(self, job_executor: JobExecutor) -> None:
        self.executor.register(job_executor)

    def run_many(
        self, space_id: int, target: TargetAccount, repositories: Sequence[Repository]
    ) -> List[JobDefinition]:
        return self.submitter.submit_batch(space_id, target, repositories)

    def handle(self, ctx: ExecutionContext, data: str, progress: ProgressReporter) -> str:
        return self.executor.handle(ctx, data, progress)

    def get_progress(self, space_id: int) -> List[JobProgress]:
        return get_group_progress(self.scheduler, space_id)
