"""
Client for the remote hosting service's repository lifecycle API.
"""

import time
from typing import Optional
from urllib.parse import quote

import httpx

from rexport.constants import DEFAULT_HEADERS, DEFAULT_HTTP_TIMEOUT, REMOTE_API_PREFIX
from rexport.exporter.errors import (
    RemoteCreateError,
    RemoteDeleteError,
    RemoteRepositoryExistsError,
)
from rexport.exporter.models import CreateRepositoryInput, RemoteRepository, TargetAccount
from rexport.logging import get_logger, log_api_call
from rexport.utils.url import construct_api_url

logger = get_logger("rexport.exporter.remote_client")


class RemoteTargetClient:
    def __init__(
        self,
        base_url: str,
        account_id: str,
        org_identifier: str,
        project_identifier: str,
        token: str,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ):
        if not base_url.startswith(("http://", "https://")):
            raise ValueError(f"Unsupported remote base URL: {base_url!r}")
        self.base_url = base_url.rstrip("/")
        self.account_id = account_id
        self.org_identifier = org_identifier
        self.project_identifier = project_identifier
        self.token = token
        self.timeout = timeout

    @classmethod
    def for_account(
        cls, base_url: str, target: TargetAccount, timeout: float = DEFAULT_HTTP_TIMEOUT
    ) -> "RemoteTargetClient":
        return cls(
            base_url,
            target.account_id,
            target.org_identifier,
            target.project_identifier,
            target.token,
            timeout=timeout,
        )

    @property
    def parent_ref(self) -> str:
        return f"{self.account_id}/{self.org_identifier}/{self.project_identifier}"

    def _params(self) -> dict:
        return {
            "accountIdentifier": self.account_id,
            "orgIdentifier": self.org_identifier,
            "projectIdentifier": self.project_identifier,
        }

    def _headers(self) -> dict:
        return {**DEFAULT_HEADERS, "Authorization": f"Bearer {self.token}"}

    def _repo_url(self, uid: str) -> str:
        ref = quote(f"{self.parent_ref}/{uid}", safe="")
        return construct_api_url(self.base_url, f"{REMOTE_API_PREFIX}/repos/{ref}/+/")

    def _request(
        self, method: str, url: str, json: Optional[dict] = None
    ) -> httpx.Response:
        """Send one request and log it; transport errors are re-raised."""
        start = time.monotonic()
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.request(
                    method, url, params=self._params(), headers=self._headers(), json=json
                )
        except httpx.HTTPError as e:
            log_api_call(method, url, duration=time.monotonic() - start, error=str(e))
            raise
        log_api_call(
            method, url, status_code=response.status_code, duration=time.monotonic() - start
        )
        return response

    def create_repository(self, repo_input: CreateRepositoryInput) -> RemoteRepository:
        """
        Create a repository under the target project.

        Raises:
            RemoteRepositoryExistsError: The identifier is already taken (409)
            RemoteCreateError: Any other failure
        """
        url = construct_api_url(self.base_url, f"{REMOTE_API_PREFIX}/repos")
        body = {
            "uid": repo_input.uid,
            "default_branch": repo_input.default_branch,
            "description": repo_input.description,
            "is_public": repo_input.is_public,
            "readme": repo_input.readme,
            "license": repo_input.license,
            "git_ignore": repo_input.git_ignore,
            "parent_ref": self.parent_ref,
        }
        try:
            response = self._request("POST", url, json=body)
        except httpx.HTTPError as e:
            raise RemoteCreateError(
                f"Network error creating remote repository '{repo_input.uid}': {e}"
            ) from e

        if response.status_code == 409:
            raise RemoteRepositoryExistsError(
                f"Remote repository '{repo_input.uid}' already exists", status_code=409
            )
        if response.status_code not in (200, 201):
            raise RemoteCreateError(
                f"Failed to create remote repository '{repo_input.uid}': "
                f"{response.status_code} {response.text}",
                status_code=response.status_code,
            )

        remote = _remote_from_json(response.json())
        logger.info(f"Created remote repository {remote.uid} (id={remote.id})")
        return remote

    def delete_repository(self, uid: str) -> None:
        """Delete a remote repository. A missing repository counts as deleted."""
        try:
            response = self._request("DELETE", self._repo_url(uid))
        except httpx.HTTPError as e:
            raise RemoteDeleteError(
                f"Network error deleting remote repository '{uid}': {e}"
            ) from e

        if response.status_code == 404:
            logger.debug(f"Remote repository {uid} already gone")
            return
        if response.status_code not in (200, 204):
            raise RemoteDeleteError(
                f"Failed to delete remote repository '{uid}': "
                f"{response.status_code} {response.text}",
                status_code=response.status_code,
            )
        logger.info(f"Deleted remote repository {uid}")


def _remote_from_json(data: dict) -> RemoteRepository:
    try:
        return RemoteRepository(
            id=int(data["id"]), uid=str(data["uid"]), git_url=str(data["git_url"])
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RemoteCreateError(f"Unexpected remote repository response: {e}") from e
