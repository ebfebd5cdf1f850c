"""
Git push operations against locally stored bare repositories.
"""

from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from rexport.exporter.errors import EmptyRepositoryError, NotFoundError, PushError
from rexport.logging import get_logger
from rexport.logging.utils import sanitize_string

logger = get_logger("rexport.exporter.git_service")

PUSH_REFSPECS = ("+refs/heads/*:refs/heads/*", "+refs/tags/*:refs/tags/*")


class GitPushService:
    """Pushes repositories kept as ``<storage_root>/<git_uid>.git``."""

    def __init__(self, storage_root):
        self.storage_root = Path(storage_root)

    def get_repo_path(self, git_uid: str) -> Path:
        return self.storage_root / f"{git_uid}.git"

    def open_repo(self, git_uid: str) -> Repo:
        path = self.get_repo_path(git_uid)
        try:
            return Repo(path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotFoundError(f"Repository storage '{git_uid}' not found") from e

    def push_to_remote(self, git_uid: str, remote_url: str) -> None:
        """
        Push all branches and tags of a stored repository to ``remote_url``.

        Raises:
            NotFoundError: No repository is stored under ``git_uid``
            EmptyRepositoryError: The repository has no refs to push
            PushError: git reported a failure
        """
        repo = self.open_repo(git_uid)
        try:
            if not repo.refs:
                raise EmptyRepositoryError(f"Repository '{git_uid}' is empty")

            logger.debug(f"Pushing {git_uid} to {sanitize_string(remote_url)}")
            repo.git.push(remote_url, *PUSH_REFSPECS)
        except GitCommandError as e:
            # stderr echoes the remote URL, credentials included
            raise PushError(f"Failed to push: {sanitize_string(str(e))}") from None
        finally:
            repo.close()

        logger.info(f"Pushed repository {git_uid}")
