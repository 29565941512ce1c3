"""
Git/gh CLI binding.

Назначение:
- SubprocessRunner: production-реализация CommandRunner поверх subprocess
- GitRepository: операции гейта через git и gh (или GitHub API для релизов)
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from rc_tag_gate.common.errors import CommandFailedError
from rc_tag_gate.common.logging import get_project_logger
from rc_tag_gate.common.metrics import EXTERNAL_OPERATIONS_TOTAL
from rc_tag_gate.common.release_policy import parse_tag_lines
from rc_tag_gate.connectors.base import CommandRunner, TagRepository
from rc_tag_gate.connectors.github.adapter import GitHubReleaseApi

log = get_project_logger()


def format_command(command: str, args: Sequence[str]) -> str:
    return " ".join([command, *args])


class SubprocessRunner(CommandRunner):
    def __init__(self, *, timeout_sec: int | None = None) -> None:
        self.timeout_sec = timeout_sec if timeout_sec and timeout_sec > 0 else None

    def execute(self, command: str, args: Sequence[str]) -> str:
        cmdline = format_command(command, args)
        try:
            proc = subprocess.run(
                [command, *args],
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_sec,
                check=False,
            )
        except FileNotFoundError as e:
            raise CommandFailedError(cmdline, str(e), details={"reason": "not_found"}) from e
        except OSError as e:
            raise CommandFailedError(cmdline, str(e), details={"reason": "os_error"}) from e
        except subprocess.TimeoutExpired as e:
            raise CommandFailedError(
                cmdline,
                f"timed out after {self.timeout_sec}s",
                details={"reason": "timeout"},
            ) from e

        if proc.returncode != 0:
            raise CommandFailedError(
                cmdline, proc.stderr or "", details={"returncode": proc.returncode}
            )
        return proc.stdout or ""


class GitRepository(TagRepository):
    def __init__(
        self,
        runner: CommandRunner,
        *,
        git_bin: str = "git",
        gh_bin: str = "gh",
        remote: str = "origin",
        release_api: GitHubReleaseApi | None = None,
        dry_run: bool = False,
    ) -> None:
        self.runner = runner
        self.git_bin = git_bin
        self.gh_bin = gh_bin
        self.remote = remote
        self.release_api = release_api
        self.dry_run = dry_run

    def _run(self, operation: str, command: str, args: list[str]) -> str:
        try:
            out = self.runner.execute(command, args)
        except CommandFailedError:
            EXTERNAL_OPERATIONS_TOTAL.labels(operation=operation, result="error").inc()
            raise
        EXTERNAL_OPERATIONS_TOTAL.labels(operation=operation, result="success").inc()
        return out

    def _mutate(self, operation: str, command: str, args: list[str]) -> None:
        if self.dry_run:
            log.info(
                "dry_run_skip",
                extra={"payload": {"operation": operation, "cmd": format_command(command, args)}},
            )
            EXTERNAL_OPERATIONS_TOTAL.labels(operation=operation, result="dry_run").inc()
            return
        self._run(operation, command, args)

    def tags_at(self, commit_id: str) -> list[str]:
        out = self._run("tags_at", self.git_bin, ["tag", "--points-at", commit_id])
        return parse_tag_lines(out)

    def all_tags(self) -> list[str]:
        return parse_tag_lines(self._run("all_tags", self.git_bin, ["tag"]))

    def delete_remote_tag(self, tag_name: str) -> None:
        self._mutate("delete_tag", self.git_bin, ["push", self.remote, "--delete", tag_name])

    def delete_release(self, tag_name: str) -> None:
        if self.release_api is None:
            self._mutate("delete_release", self.gh_bin, ["release", "delete", tag_name, "--yes"])
            return
        if self.dry_run:
            log.info(
                "dry_run_skip",
                extra={"payload": {"operation": "delete_release", "tag": tag_name}},
            )
            EXTERNAL_OPERATIONS_TOTAL.labels(operation="delete_release", result="dry_run").inc()
            return
        try:
            self.release_api.delete_release(tag_name)
        except CommandFailedError:
            EXTERNAL_OPERATIONS_TOTAL.labels(operation="delete_release", result="error").inc()
            raise
        EXTERNAL_OPERATIONS_TOTAL.labels(operation="delete_release", result="success").inc()
