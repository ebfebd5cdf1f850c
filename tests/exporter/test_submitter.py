from datetime import timedelta

import pytest

from rexport.exporter.codec import PayloadCodec
from rexport.exporter.errors import EncodingError
from rexport.exporter.models import Repository, TargetAccount
from rexport.exporter.submitter import BatchSubmitter, job_group_id, job_uid

from conftest import FakeEncrypter, FakeScheduler


def _repos(*ids):
    return [
        Repository(id=i, parent_id=7, uid=f"repo-{i}", git_uid=f"g{i}", description=f"d{i}")
        for i in ids
    ]


@pytest.fixture
def submitter(scheduler, encrypter):
    return BatchSubmitter(scheduler, PayloadCodec(encrypter))


def test_identities_are_deterministic():
    assert job_group_id(7) == "export_space_7"
    assert job_uid(42) == "export_repo_42"


def test_one_definition_per_repository(submitter, scheduler, target):
    submitter.submit_batch(7, target, _repos(1, 2, 3))

    assert len(scheduler.calls) == 1
    group_id, definitions = scheduler.calls[0]
    assert group_id == "export_space_7"
    assert [d.uid for d in definitions] == [
        "export_repo_1",
        "export_repo_2",
        "export_repo_3",
    ]
    for definition in definitions:
        assert definition.type == "repository_export"
        assert definition.max_retries == 1
        assert definition.timeout == timedelta(minutes=45)


def test_definitions_carry_encoded_requests(submitter, scheduler, encrypter, target):
    repos = _repos(10)
    repos[0].is_public = True

    submitter.submit_batch(3, target, repos)

    definition = scheduler.calls[0][1][0]
    request_ = PayloadCodec(encrypter).decode(definition.data)
    assert request_.id == 10
    assert request_.uid == "repo-10"
    assert request_.description == "d10"
    assert request_.is_public is True
    assert request_.target == target


def test_resubmission_reuses_job_identity(submitter, scheduler, target):
    submitter.submit_batch(7, target, _repos(5))
    submitter.submit_batch(7, target, _repos(5))

    assert scheduler.calls[0][1][0].uid == scheduler.calls[1][1][0].uid


def test_encoding_failure_submits_nothing(scheduler, target):
    submitter = BatchSubmitter(scheduler, PayloadCodec(FakeEncrypter(fail_encrypt=True)))

    with pytest.raises(EncodingError):
        submitter.submit_batch(7, target, _repos(1, 2))

    assert scheduler.calls == []


def test_partial_encoding_failure_submits_nothing(mocker, submitter, scheduler, target):
    real_encode = submitter.codec.encode
    calls = {"n": 0}

    def flaky_encode(request_):
        calls["n"] += 1
        if calls["n"] == 2:
            raise EncodingError("boom")
        return real_encode(request_)

    mocker.patch.object(submitter.codec, "encode", side_effect=flaky_encode)

    with pytest.raises(EncodingError):
        submitter.submit_batch(7, target, _repos(1, 2, 3))

    assert scheduler.calls == []


def test_empty_repository_list_rejected(submitter, scheduler, target):
    with pytest.raises(ValueError):
        submitter.submit_batch(7, target, [])

    assert scheduler.calls == []


def test_incomplete_target_rejected(submitter, scheduler):
    target = TargetAccount("acc", "", "proj", "tok")

    with pytest.raises(ValueError, match="org_identifier"):
        submitter.submit_batch(7, target, _repos(1))


def test_scheduler_error_propagates(encrypter, target):
    scheduler = FakeScheduler(fail_with=RuntimeError("engine down"))
    submitter = BatchSubmitter(scheduler, PayloadCodec(encrypter))

    with pytest.raises(RuntimeError, match="engine down"):
        submitter.submit_batch(7, target, _repos(1))
