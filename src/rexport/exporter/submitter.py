"""
Fan-out of repository exports into a batch of jobs.
"""

from typing import List, Sequence

from rexport.constants import (
    EXPORT_JOB_MAX_RETRIES,
    EXPORT_JOB_TIMEOUT,
    EXPORT_JOB_TYPE,
    EXPORT_REPO_JOB_UID,
    EXPORT_SPACE_JOB_UID,
)
from rexport.exporter.codec import PayloadCodec
from rexport.exporter.interfaces import JobScheduler
from rexport.exporter.models import ExportRequest, JobDefinition, Repository, TargetAccount
from rexport.logging import get_logger

logger = get_logger("rexport.exporter.submitter")


def job_group_id(space_id: int) -> str:
    return EXPORT_SPACE_JOB_UID.format(space_id)


def job_uid(repository_id: int) -> str:
    return EXPORT_REPO_JOB_UID.format(repository_id)


def build_request(repository: Repository, target: TargetAccount) -> ExportRequest:
    return ExportRequest(
        uid=repository.uid,
        id=repository.id,
        description=repository.description,
        is_public=repository.is_public,
        target=target,
    )


class BatchSubmitter:
    def __init__(self, scheduler: JobScheduler, codec: PayloadCodec):
        self.scheduler = scheduler
        self.codec = codec

    def build_definitions(
        self, target: TargetAccount, repositories: Sequence[Repository]
    ) -> List[JobDefinition]:
        """One job definition per repository, in input order.

        Raises EncodingError on the first request that cannot be encoded.
        """
        definitions = []
        for repository in repositories:
            data = self.codec.encode(build_request(repository, target))
            definitions.append(
                JobDefinition(
                    uid=job_uid(repository.id),
                    type=EXPORT_JOB_TYPE,
                    max_retries=EXPORT_JOB_MAX_RETRIES,
                    timeout=EXPORT_JOB_TIMEOUT,
                    data=data,
                )
            )
        return definitions

    def submit_batch(
        self, space_id: int, target: TargetAccount, repositories: Sequence[Repository]
    ) -> List[JobDefinition]:
        """
        Submit one export job per repository under the space's job group.

        Nothing reaches the scheduler unless every definition was built.

        Raises:
            ValueError: No repositories, or the target account is incomplete
            EncodingError: A request could not be encoded
        """
        if not repositories:
            raise ValueError("at least one repository is required for an export")
        missing = target.missing_fields()
        if missing:
            raise ValueError(f"target account is missing: {', '.join(missing)}")

        group_id = job_group_id(space_id)
        definitions = self.build_definitions(target, repositories)
        self.scheduler.run_jobs(group_id, definitions)

        logger.info(f"Submitted {len(definitions)} export job(s) under {group_id}")
        return definitions
