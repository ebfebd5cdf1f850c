"""
Repository export orchestration.
"""

from rexport.exporter.codec import PayloadCodec
from rexport.exporter.executor import ExportExecutor
from rexport.exporter.models import ExportRequest, Repository, TargetAccount
from rexport.exporter.progress import get_group_progress
from rexport.exporter.service import RepositoryExporter
from rexport.exporter.submitter import BatchSubmitter, job_group_id, job_uid

__all__ = [
    "BatchSubmitter",
    "ExportExecutor",
    "ExportRequest",
    "PayloadCodec",
    "Repository",
    "RepositoryExporter",
    "TargetAccount",
    "get_group_progress",
    "job_group_id",
    "job_uid",
]
