"""
rc-tag-check: release-candidate gate for GitHub release workflow.
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence

from rc_tag_gate.common.config import Settings, get_settings
from rc_tag_gate.common.logging import get_project_logger, setup_logging
from rc_tag_gate.common.metrics import GATE_RUNS_TOTAL, export_metrics
from rc_tag_gate.connectors.base import TagRepository
from rc_tag_gate.connectors.git.cli import GitRepository, SubprocessRunner
from rc_tag_gate.connectors.github.adapter import GitHubReleaseApi
from rc_tag_gate.services.rollback_service import attempt_rollback, rollback
from rc_tag_gate.services.validation_service import enforce_rc_tag

log = get_project_logger()


def _args(argv: Sequence[str] | None, *, tag: str, sha: str) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="rc-tag-check",
        description="Check that the commit carries the highest rc tag; roll back otherwise",
    )
    p.add_argument("--tag", default=tag, help="Release tag name (e.g. 5.5.0)")
    p.add_argument("--sha", default=sha, help="Commit SHA of the release")
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Log rollback deletions instead of running them",
    )
    return p.parse_args(argv)


def build_repository(s: Settings, *, dry_run: bool = False) -> GitRepository:
    release_api = None
    if s.release_backend == "api":
        release_api = GitHubReleaseApi(
            repository=s.github_repository,
            token=s.github_token,
            base_url=s.github_api_url,
            timeout_sec=s.github_http_timeout_sec,
            retries=s.github_http_retries,
            retry_backoff_ms=s.github_http_retry_backoff_ms,
            retry_statuses=s.github_http_retry_statuses,
        )
    return GitRepository(
        SubprocessRunner(timeout_sec=s.command_timeout_sec),
        git_bin=s.git_bin,
        gh_bin=s.gh_bin,
        remote=s.git_remote,
        release_api=release_api,
        dry_run=dry_run,
    )


def run(tag_name: str, commit_id: str, *, repo: TagRepository) -> str:
    """
    Runs the gate; on any failure rolls back and re-raises the original error.
    """
    try:
        check = enforce_rc_tag(tag_name, commit_id, repo=repo)
        return check.highest or ""
    except Exception as e:
        log.error("rc_check_failed", extra={"payload": {"err": str(e)[:500]}})
        rollback(tag_name, commit_id, e, repo=repo)


def _export_metrics(path: str) -> None:
    try:
        export_metrics(path)
    except Exception as e:
        log.error(
            "metrics_export_failed",
            extra={"payload": {"path": path, "err": str(e)[:200]}},
        )


def _fail_without_settings(
    argv: Sequence[str] | None, err: Exception, repo: TagRepository | None
) -> int:
    # без настроек откатываемся через git/gh по умолчанию
    setup_logging()
    log.error("settings_invalid", extra={"payload": {"err": str(err)[:500]}})
    args = _args(
        argv,
        tag=os.getenv("GITHUB_REF_NAME", ""),
        sha=os.getenv("GITHUB_SHA", ""),
    )
    if repo is None:
        repo = GitRepository(SubprocessRunner(), dry_run=args.dry_run)
    attempt_rollback(args.tag, args.sha, repo=repo)
    GATE_RUNS_TOTAL.labels(result="error").inc()
    print(f"rc-tag-check failed: {err}", file=sys.stderr)
    return 2


def main(argv: Sequence[str] | None = None, *, repo: TagRepository | None = None) -> int:
    try:
        s = get_settings()
    except Exception as e:
        return _fail_without_settings(argv, e, repo)

    setup_logging(s.log_level, s.log_format)
    args = _args(argv, tag=s.github_ref_name, sha=s.github_sha)
    if repo is None:
        repo = build_repository(s, dry_run=args.dry_run)

    try:
        highest = run(args.tag, args.sha, repo=repo)
    except Exception as e:
        GATE_RUNS_TOTAL.labels(result="error").inc()
        print(f"rc-tag-check failed: {e}", file=sys.stderr)
        _export_metrics(s.metrics_textfile)
        return 2

    GATE_RUNS_TOTAL.labels(result="success").inc()
    print(f"rc-tag-check OK: {highest} is the highest rc tag on {args.sha}")
    _export_metrics(s.metrics_textfile)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
