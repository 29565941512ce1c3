"""
Ошибки rc-tag-gate.

Назначение:
- единый код ошибки (ErrCode) для CLI, логов и метрик
- типизированные ошибки валидации и внешних команд
"""

from __future__ import annotations

from typing import Any


class ErrCode:
    INVALID_ARGUMENTS = "invalid_arguments"
    NO_VALID_CANDIDATES = "no_valid_candidates"
    HIGHEST_NOT_ON_COMMIT = "highest_not_on_commit"
    COMMAND_FAILED = "command_failed"


class GateError(Exception):
    def __init__(self, code: str, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


_INVALID_ARGUMENTS_MSG = "Invalid arguments: tag name and commit SHA are required"


class InvalidArgumentsError(GateError):
    def __init__(self, message: str = _INVALID_ARGUMENTS_MSG) -> None:
        super().__init__(ErrCode.INVALID_ARGUMENTS, message)


class NoValidCandidatesError(GateError):
    def __init__(self, tag_name: str, commit_id: str) -> None:
        super().__init__(
            ErrCode.NO_VALID_CANDIDATES,
            f"No valid rc tags for {tag_name} found on commit {commit_id}. Aborting.",
            details={"tag_name": tag_name, "commit_id": commit_id},
        )


class HighestNotOnCommitError(GateError):
    def __init__(self, highest: str | None, commit_candidates: list[str]) -> None:
        super().__init__(
            ErrCode.HIGHEST_NOT_ON_COMMIT,
            f"Highest rc tag {highest} is not found in the valid rc tags list. Aborting.",
            details={"highest": highest, "commit_candidates": list(commit_candidates)},
        )
        self.highest = highest


class CommandFailedError(GateError):
    def __init__(
        self,
        command: str,
        stderr: str = "",
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"Command failed: {command}"
        if stderr:
            message = f"{message}\n{stderr.rstrip()}"
        super().__init__(ErrCode.COMMAND_FAILED, message, details=details)
        self.command = command
        self.stderr = stderr
