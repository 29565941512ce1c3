from __future__ import annotations

import pytest
from pydantic import ValidationError

from rc_tag_gate.common.config import Settings


def test_settings_reads_github_context_from_env(monkeypatch) -> None:
    monkeypatch.setenv("GITHUB_REF_NAME", "5.5.0")
    monkeypatch.setenv("GITHUB_SHA", "fake_sha")
    monkeypatch.setenv("GIT_REMOTE", "upstream")

    settings = Settings(_env_file=None)
    assert settings.github_ref_name == "5.5.0"
    assert settings.github_sha == "fake_sha"
    assert settings.git_remote == "upstream"
    assert settings.release_backend == "gh"


def test_settings_reads_github_token_from_file(monkeypatch, tmp_path) -> None:
    token_file = tmp_path / "gh_token.txt"
    token_file.write_text("ghp_secret\n", encoding="utf-8")

    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setenv("GITHUB_TOKEN_FILE", str(token_file))

    settings = Settings(_env_file=None)
    assert settings.github_token == "ghp_secret"


def test_settings_raises_on_missing_secret_file(monkeypatch, tmp_path) -> None:
    missing = tmp_path / "missing.txt"
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setenv("GITHUB_TOKEN_FILE", str(missing))

    with pytest.raises(RuntimeError):
        Settings(_env_file=None)


def test_settings_rejects_unknown_release_backend(monkeypatch) -> None:
    monkeypatch.setenv("RELEASE_BACKEND", "ftp")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_normalizes_release_backend(monkeypatch) -> None:
    monkeypatch.setenv("RELEASE_BACKEND", " API ")

    assert Settings(_env_file=None).release_backend == "api"
