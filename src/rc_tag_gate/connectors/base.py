"""
Базовые контракты внешних коллабораторов.

Назначение:
- CommandRunner: запуск внешней команды, stdout или CommandFailedError
- TagRepository: четыре операции над тегами/релизами, которые нужны гейту
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence


class CommandRunner(ABC):
    @abstractmethod
    def execute(self, command: str, args: Sequence[str]) -> str:
        """
        Запускает команду и возвращает stdout.
        При ненулевом коде выхода бросает CommandFailedError.
        """


class TagRepository(ABC):
    @abstractmethod
    def tags_at(self, commit_id: str) -> list[str]: ...

    @abstractmethod
    def all_tags(self) -> list[str]: ...

    @abstractmethod
    def delete_remote_tag(self, tag_name: str) -> None: ...

    @abstractmethod
    def delete_release(self, tag_name: str) -> None: ...
