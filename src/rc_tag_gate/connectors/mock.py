"""
Mock CommandRunner для dev/тестов.

Назначение:
- гонять гейт без git/gh: ответы по полной командной строке
- записывать все вызовы, чтобы проверять их количество и порядок
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from rc_tag_gate.common.errors import CommandFailedError
from rc_tag_gate.connectors.base import CommandRunner


class RecordingRunner(CommandRunner):
    def __init__(
        self,
        responses: Mapping[str, str] | None = None,
        *,
        failures: Mapping[str, str] | None = None,
        strict: bool = False,
    ) -> None:
        self.responses = dict(responses or {})
        self.failures = dict(failures or {})
        self.strict = strict
        self.calls: list[str] = []

    def execute(self, command: str, args: Sequence[str]) -> str:
        cmdline = " ".join([command, *args])
        self.calls.append(cmdline)
        if cmdline in self.failures:
            raise CommandFailedError(cmdline, self.failures[cmdline])
        if cmdline in self.responses:
            return self.responses[cmdline]
        if self.strict:
            raise CommandFailedError(cmdline, f"Unexpected command: {cmdline}")
        return ""
