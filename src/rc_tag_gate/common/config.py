"""
Конфигурация rc-tag-gate.

Назначение:
- единая точка чтения окружения (GitHub Actions переменные, бинарники, логирование)
- секреты можно передавать через *_FILE переменные
- сервисы получают значения явными аргументами, окружение читает только CLI
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_FILE_SECRETS = {
    "github_token": "GITHUB_TOKEN_FILE",
}


def _read_secret_file(path: str) -> str:
    p = Path(path)
    if not p.is_file():
        raise RuntimeError(f"secret file not found: {path}")
    return p.read_text(encoding="utf-8").strip()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # GitHub Actions context
    github_ref_name: str = ""
    github_sha: str = ""
    github_repository: str = ""
    github_token: str = ""
    github_api_url: str = "https://api.github.com"

    # external commands
    git_bin: str = "git"
    gh_bin: str = "gh"
    git_remote: str = "origin"
    command_timeout_sec: int = 0

    # gh | api
    release_backend: str = "gh"
    github_http_timeout_sec: int = 10
    github_http_retries: int = 2
    github_http_retry_backoff_ms: int = 300
    github_http_retry_statuses: str = "408,409,425,429,500,502,503,504"

    log_level: str = "INFO"
    log_format: str = "json"
    metrics_textfile: str = ""

    @model_validator(mode="after")
    def _load_file_secrets(self) -> Settings:
        for field, env_name in _FILE_SECRETS.items():
            path = (os.getenv(env_name) or "").strip()
            if path and not getattr(self, field):
                setattr(self, field, _read_secret_file(path))
        return self

    @model_validator(mode="after")
    def _check_release_backend(self) -> Settings:
        backend = (self.release_backend or "").strip().lower()
        if backend not in {"gh", "api"}:
            raise ValueError(f"RELEASE_BACKEND must be 'gh' or 'api', got {self.release_backend!r}")
        self.release_backend = backend
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
