"""
Откат rc тега.

Назначение:
- удалить remote тег и релиз после неуспешной проверки
- каждый шаг best-effort и независим от другого
- исходная ошибка всегда пробрасывается без изменений
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import NoReturn

from rc_tag_gate.common.logging import get_project_logger
from rc_tag_gate.common.metrics import ROLLBACK_STEPS_TOTAL
from rc_tag_gate.connectors.base import TagRepository

log = get_project_logger()


@dataclass
class RollbackStep:
    name: str
    ok: bool
    error: str | None = None


@dataclass
class RollbackReport:
    skipped: bool = False
    steps: list[RollbackStep] = field(default_factory=list)


def _attempt(report: RollbackReport, name: str, fn: Callable[[str], None], tag_name: str) -> None:
    try:
        fn(tag_name)
    except Exception as e:
        log.error(
            "rollback_step_failed",
            extra={"payload": {"step": name, "tag": tag_name, "err": str(e)[:500]}},
        )
        ROLLBACK_STEPS_TOTAL.labels(step=name, result="error").inc()
        report.steps.append(RollbackStep(name=name, ok=False, error=str(e)))
        return
    log.info("rollback_step_ok", extra={"payload": {"step": name, "tag": tag_name}})
    ROLLBACK_STEPS_TOTAL.labels(step=name, result="success").inc()
    report.steps.append(RollbackStep(name=name, ok=True))


def attempt_rollback(tag_name: str, commit_id: str, *, repo: TagRepository) -> RollbackReport:
    report = RollbackReport()
    if not tag_name or not commit_id:
        log.warning(
            "rollback_skipped",
            extra={"payload": {"tag": tag_name or None, "sha": commit_id or None}},
        )
        ROLLBACK_STEPS_TOTAL.labels(step="all", result="skipped").inc()
        report.skipped = True
        return report

    log.info("rollback_started", extra={"payload": {"tag": tag_name, "sha": commit_id}})
    _attempt(report, "delete_tag", repo.delete_remote_tag, tag_name)
    _attempt(report, "delete_release", repo.delete_release, tag_name)
    return report


def rollback(
    tag_name: str, commit_id: str, cause: BaseException, *, repo: TagRepository
) -> NoReturn:
    attempt_rollback(tag_name, commit_id, repo=repo)
    raise cause
