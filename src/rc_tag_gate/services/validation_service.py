"""
Проверка rc тега перед релизом.

Алгоритм:
- теги на коммите -> фильтр по <tag>-rc<N> -> commit candidates (пусто = ошибка)
- все теги репозитория -> тот же фильтр -> all candidates
- highest(all candidates) должен быть среди commit candidates
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rc_tag_gate.common.errors import (
    ErrCode,
    HighestNotOnCommitError,
    InvalidArgumentsError,
    NoValidCandidatesError,
)
from rc_tag_gate.common.logging import get_project_logger
from rc_tag_gate.common.metrics import track_stage_latency
from rc_tag_gate.common.release_policy import filter_rc_tags, highest_of
from rc_tag_gate.connectors.base import TagRepository

log = get_project_logger()


@dataclass
class RcTagCheck:
    tag_name: str
    commit_id: str
    ok: bool = False
    code: str | None = None
    message: str = ""
    commit_candidates: list[str] = field(default_factory=list)
    all_candidates: list[str] = field(default_factory=list)
    highest: str | None = None


def evaluate_rc_tag(tag_name: str, commit_id: str, *, repo: TagRepository) -> RcTagCheck:
    """
    Validation outcome as a value. Failures of the repository itself
    (CommandFailedError) are raised, not folded into the result.
    """
    check = RcTagCheck(tag_name=tag_name or "", commit_id=commit_id or "")
    if not check.tag_name or not check.commit_id:
        check.code = ErrCode.INVALID_ARGUMENTS
        check.message = InvalidArgumentsError().message
        return check

    log.info("rc_check_started", extra={"payload": {"tag": tag_name, "sha": commit_id}})

    with track_stage_latency("tags_at"):
        check.commit_candidates = filter_rc_tags(tag_name, repo.tags_at(commit_id))
    if not check.commit_candidates:
        check.code = ErrCode.NO_VALID_CANDIDATES
        check.message = NoValidCandidatesError(tag_name, commit_id).message
        return check
    log.info("rc_commit_candidates", extra={"payload": {"tags": check.commit_candidates}})

    with track_stage_latency("all_tags"):
        check.all_candidates = filter_rc_tags(tag_name, repo.all_tags())
    check.highest = highest_of(check.all_candidates)
    log.info("rc_highest_candidate", extra={"payload": {"highest": check.highest}})

    if check.highest is None or check.highest not in check.commit_candidates:
        check.code = ErrCode.HIGHEST_NOT_ON_COMMIT
        check.message = HighestNotOnCommitError(check.highest, check.commit_candidates).message
        return check

    check.ok = True
    return check


def enforce_rc_tag(tag_name: str, commit_id: str, *, repo: TagRepository) -> RcTagCheck:
    check = evaluate_rc_tag(tag_name, commit_id, repo=repo)
    if check.ok:
        return check
    if check.code == ErrCode.INVALID_ARGUMENTS:
        raise InvalidArgumentsError()
    if check.code == ErrCode.NO_VALID_CANDIDATES:
        raise NoValidCandidatesError(check.tag_name, check.commit_id)
    raise HighestNotOnCommitError(check.highest, check.commit_candidates)
