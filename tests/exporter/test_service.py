import pytest

from rexport.exporter.git_service import GitPushService
from rexport.exporter.interfaces import ExecutionContext
from rexport.exporter.models import JobState
from rexport.exporter.remote_client import RemoteTargetClient
from rexport.exporter.service import RepositoryExporter
from rexport.utils.config_store import ExportConfig

from conftest import (
    FakeGit,
    FakeJobExecutor,
    FakeRemoteClient,
    FakeRepoStore,
    FakeScheduler,
)


def test_submit_then_handle_end_to_end(encrypter, publisher, repository, target, remote):
    scheduler = FakeScheduler()
    engine = FakeJobExecutor()
    client = FakeRemoteClient(remote=remote)
    exporter = RepositoryExporter(
        scheduler,
        encrypter,
        FakeRepoStore(repository),
        FakeGit(),
        publisher,
        lambda account: client,
    )
    exporter.register(engine)

    exporter.run_many(7, target, [repository])
    group_id, definitions = scheduler.calls[0]
    handler = engine.handlers[definitions[0].type]

    assert group_id == "export_space_7"
    ctx = ExecutionContext(job_uid=definitions[0].uid)
    assert handler.handle(ctx, definitions[0].data, lambda p, d: None) == ""
    assert client.created[0].uid == "svc-a"
    assert len(publisher.events) == 1


def test_get_progress_never_empty(encrypter, publisher):
    exporter = RepositoryExporter(
        FakeScheduler(), encrypter, FakeRepoStore(), FakeGit(), publisher, None
    )

    progress = exporter.get_progress(7)

    assert [p.state for p in progress] == [JobState.FAILED]


def test_from_config_builds_real_adapters(encrypter, publisher, target, tmp_path):
    config = ExportConfig(
        remote_base_url="https://code.example.com", storage_root=str(tmp_path)
    )

    exporter = RepositoryExporter.from_config(
        config, FakeScheduler(), encrypter, FakeRepoStore(), publisher
    )

    assert isinstance(exporter.executor.git, GitPushService)
    client = exporter.executor.client_factory(target)
    assert isinstance(client, RemoteTargetClient)
    assert client.base_url == "https://code.example.com"
    assert client.token == target.token


def test_from_config_requires_remote_url(encrypter, publisher):
    with pytest.raises(ValueError, match="remote_base_url"):
        RepositoryExporter.from_config(
            ExportConfig(storage_root="/srv"),
            FakeScheduler(),
            encrypter,
            FakeRepoStore(),
            publisher,
        )
