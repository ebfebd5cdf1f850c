"""Shared pytest configuration and fixtures for the rexport test suite.

Provides in-memory stand-ins for the collaborators the export orchestrator
consumes: the job engine, the repository store, the git service, the event
bus, the remote hosting client and the encryption service.
"""
import sys
from pathlib import Path

import pytest


# Add src/ to path so test modules can import the rexport package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from rexport.exporter.crypto import EncryptionError  # noqa: E402
from rexport.exporter.errors import NotFoundError  # noqa: E402
from rexport.exporter.models import (  # noqa: E402
    RemoteRepository,
    Repository,
    TargetAccount,
)


class FakeEncrypter:
    """Reversible stand-in for the payload encryption service."""

    PREFIX = b"enc:"

    def __init__(self, fail_encrypt=False):
        self.fail_encrypt = fail_encrypt

    def encrypt(self, plaintext):
        if self.fail_encrypt:
            raise EncryptionError("key unavailable")
        return self.PREFIX + plaintext.encode("utf-8")[::-1]

    def decrypt(self, ciphertext):
        if not ciphertext.startswith(self.PREFIX):
            raise EncryptionError("wrong key")
        return ciphertext[len(self.PREFIX):][::-1].decode("utf-8")


class FakeScheduler:
    def __init__(self, progress=None, fail_with=None):
        self.calls = []
        self.progress = progress or {}
        self.fail_with = fail_with

    def run_jobs(self, group_id, definitions):
        if self.fail_with:
            raise self.fail_with
        self.calls.append((group_id, list(definitions)))

    def get_job_progress_for_group(self, group_id):
        return self.progress.get(group_id, [])


class FakeJobExecutor:
    def __init__(self):
        self.handlers = {}

    def register(self, job_type, handler):
        self.handlers[job_type] = handler


class FakeRepoStore:
    def __init__(self, *repositories):
        self.repositories = {repo.id: repo for repo in repositories}

    def find(self, repo_id):
        if repo_id not in self.repositories:
            raise NotFoundError(f"repository {repo_id} not found")
        return self.repositories[repo_id]


class FakeGit:
    def __init__(self, error=None):
        self.error = error
        self.pushes = []

    def push_to_remote(self, git_uid, remote_url):
        self.pushes.append((git_uid, remote_url))
        if self.error:
            raise self.error


class FakePublisher:
    def __init__(self, error=None):
        self.error = error
        self.events = []

    def publish(self, scope_id, event_type, payload):
        self.events.append((scope_id, event_type, payload))
        if self.error:
            raise self.error


class FakeRemoteClient:
    def __init__(self, remote=None, create_error=None, delete_error=None):
        self.remote = remote
        self.create_error = create_error
        self.delete_error = delete_error
        self.created = []
        self.deleted = []

    def create_repository(self, repo_input):
        self.created.append(repo_input)
        if self.create_error:
            raise self.create_error
        return self.remote

    def delete_repository(self, uid):
        self.deleted.append(uid)
        if self.delete_error:
            raise self.delete_error


@pytest.fixture
def target():
    return TargetAccount(
        account_id="acc-1",
        org_identifier="org-1",
        project_identifier="proj-1",
        token="pat.secret-token-value",
    )


@pytest.fixture
def repository():
    return Repository(
        id=42,
        parent_id=7,
        uid="svc-a",
        git_uid="a1b2c3",
        default_branch="main",
        description="",
        is_public=True,
    )


@pytest.fixture
def remote():
    return RemoteRepository(id=900, uid="svc-a", git_url="https://host/svc-a.git")


@pytest.fixture
def encrypter():
    return FakeEncrypter()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def publisher():
    return FakePublisher()


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (slower)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        if "integration" not in item.nodeid:
            item.add_marker(pytest.mark.unit)
