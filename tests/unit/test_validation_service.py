from __future__ import annotations

import pytest

from rc_tag_gate.common.errors import (
    CommandFailedError,
    ErrCode,
    HighestNotOnCommitError,
    InvalidArgumentsError,
    NoValidCandidatesError,
)
from rc_tag_gate.connectors.git.cli import GitRepository
from rc_tag_gate.connectors.mock import RecordingRunner
from rc_tag_gate.services.validation_service import enforce_rc_tag, evaluate_rc_tag


def _repo(tags_at: str, all_tags: str) -> tuple[GitRepository, RecordingRunner]:
    runner = RecordingRunner(
        {
            "git tag --points-at fake_sha": tags_at,
            "git tag": all_tags,
        },
        strict=True,
    )
    return GitRepository(runner), runner


def test_highest_rc_tag_on_commit_passes() -> None:
    repo, runner = _repo(
        "5.5.0-rc2\n5.5.0-rc10", "5.5.0-rc1\n5.5.0-rc2\n5.5.0-rc10\nother-tag"
    )
    check = enforce_rc_tag("5.5.0", "fake_sha", repo=repo)
    assert check.ok is True
    assert check.highest == "5.5.0-rc10"
    assert check.commit_candidates == ["5.5.0-rc2", "5.5.0-rc10"]
    assert check.all_candidates == ["5.5.0-rc1", "5.5.0-rc2", "5.5.0-rc10"]
    assert runner.calls == ["git tag --points-at fake_sha", "git tag"]


def test_v_prefixed_tag_name_passes() -> None:
    repo, _ = _repo(
        "v5.5.0-rc2\nv5.5.0-rc10", "v5.5.0-rc1\nv5.5.0-rc2\nv5.5.0-rc10\nother-tag"
    )
    check = enforce_rc_tag("v5.5.0", "fake_sha", repo=repo)
    assert check.highest == "v5.5.0-rc10"


@pytest.mark.parametrize(("tag_name", "commit_id"), [("", "fake_sha"), ("5.5.0", ""), ("", "")])
def test_empty_arguments_fail_without_external_calls(tag_name: str, commit_id: str) -> None:
    repo, runner = _repo("5.5.0-rc1", "5.5.0-rc1")
    with pytest.raises(InvalidArgumentsError) as e:
        enforce_rc_tag(tag_name, commit_id, repo=repo)
    assert "Invalid arguments" in e.value.message
    assert e.value.code == ErrCode.INVALID_ARGUMENTS
    assert runner.calls == []


def test_no_rc_tags_on_commit_fails() -> None:
    repo, runner = _repo("", "5.5.0-rc1\n5.5.0-rc2\n5.5.0-rc10")
    with pytest.raises(NoValidCandidatesError) as e:
        enforce_rc_tag("5.5.0", "fake_sha", repo=repo)
    assert "No valid rc tags" in e.value.message
    assert runner.calls == ["git tag --points-at fake_sha"]


def test_only_foreign_tags_on_commit_fails() -> None:
    repo, _ = _repo("5.5.1-rc1\n5x5x0-rc1\nlatest", "5.5.1-rc1")
    with pytest.raises(NoValidCandidatesError):
        enforce_rc_tag("5.5.0", "fake_sha", repo=repo)


def test_highest_not_on_commit_fails() -> None:
    repo, _ = _repo("5.5.0-rc2", "5.5.0-rc2\n5.5.0-rc10")
    with pytest.raises(HighestNotOnCommitError) as e:
        enforce_rc_tag("5.5.0", "fake_sha", repo=repo)
    assert e.value.highest == "5.5.0-rc10"
    assert e.value.code == ErrCode.HIGHEST_NOT_ON_COMMIT
    assert "5.5.0-rc10" in e.value.message


def test_evaluate_returns_failure_as_value() -> None:
    repo, _ = _repo("5.5.0-rc2", "5.5.0-rc2\n5.5.0-rc10")
    check = evaluate_rc_tag("5.5.0", "fake_sha", repo=repo)
    assert check.ok is False
    assert check.code == ErrCode.HIGHEST_NOT_ON_COMMIT
    assert check.highest == "5.5.0-rc10"
    assert check.commit_candidates == ["5.5.0-rc2"]


def test_empty_repository_listing_has_no_highest() -> None:
    # tags_at and the full listing disagree: no candidate in the repository
    repo, _ = _repo("5.5.0-rc1", "")
    check = evaluate_rc_tag("5.5.0", "fake_sha", repo=repo)
    assert check.ok is False
    assert check.code == ErrCode.HIGHEST_NOT_ON_COMMIT
    assert check.highest is None


def test_command_failure_propagates() -> None:
    runner = RecordingRunner(failures={"git tag --points-at fake_sha": "fatal: not a git repo"})
    with pytest.raises(CommandFailedError) as e:
        enforce_rc_tag("5.5.0", "fake_sha", repo=GitRepository(runner))
    assert e.value.code == ErrCode.COMMAND_FAILED
    assert "fatal: not a git repo" in e.value.message
