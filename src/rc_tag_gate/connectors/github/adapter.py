"""
Адаптер GitHub Releases API.

Назначение:
- удаление релиза по имени тега без gh CLI (RELEASE_BACKEND=api)
- ретраи на сетевые ошибки и retryable статусы
"""

from __future__ import annotations

import time
from typing import Any

import requests

from rc_tag_gate.common.errors import CommandFailedError
from rc_tag_gate.common.logging import get_project_logger

log = get_project_logger()

DEFAULT_RETRY_STATUSES = "408,409,425,429,500,502,503,504"


class GitHubReleaseApi:
    def __init__(
        self,
        *,
        repository: str,
        token: str = "",
        base_url: str = "https://api.github.com",
        timeout_sec: int = 10,
        retries: int = 2,
        retry_backoff_ms: int = 300,
        retry_statuses: str = DEFAULT_RETRY_STATUSES,
    ) -> None:
        self.repository = (repository or "").strip().strip("/")
        self.token = (token or "").strip()
        self.base_url = (base_url or "").rstrip("/")
        self.timeout_sec = max(1, int(timeout_sec))
        self.http_retries = max(0, int(retries))
        self.http_retry_backoff_sec = max(0, int(retry_backoff_ms)) / 1000.0
        self.http_retry_statuses = self._parse_retry_statuses(retry_statuses)

    @staticmethod
    def _parse_retry_statuses(raw: str) -> set[int]:
        out: set[int] = set()
        for item in (raw or "").split(","):
            value = item.strip()
            if not value:
                continue
            try:
                out.add(int(value))
            except ValueError:
                continue
        return out

    @staticmethod
    def _safe_response_text(resp: requests.Response, max_len: int = 300) -> str:
        try:
            text = resp.text or ""
            return text[:max_len]
        except Exception:
            return ""

    def _request(self, method: str, path: str) -> requests.Response:
        if not self.repository:
            raise CommandFailedError(
                f"{method} {path}", "GITHUB_REPOSITORY is not configured"
            )

        url = f"{self.base_url}{path}"
        label = f"{method.upper()} {url}"
        headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        attempts = self.http_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                resp = requests.request(
                    method=method.upper(),
                    url=url,
                    headers=headers,
                    timeout=self.timeout_sec,
                )
            except (requests.Timeout, requests.ConnectionError) as e:
                if attempt < attempts:
                    time.sleep(self.http_retry_backoff_sec * attempt)
                    continue
                raise CommandFailedError(
                    label, str(e), details={"attempts": attempts, "url": url}
                ) from e
            except requests.RequestException as e:
                raise CommandFailedError(label, str(e), details={"url": url}) from e

            if resp.status_code in self.http_retry_statuses and attempt < attempts:
                time.sleep(self.http_retry_backoff_sec * attempt)
                continue
            return resp

        raise CommandFailedError(label, "no attempts made", details={"url": url})

    def _fail(self, method: str, path: str, resp: requests.Response) -> CommandFailedError:
        details: dict[str, Any] = {"status_code": resp.status_code, "path": path}
        return CommandFailedError(
            f"{method} {self.base_url}{path}",
            f"GitHub API returned {resp.status_code}: {self._safe_response_text(resp)}",
            details=details,
        )

    def find_release_id(self, tag_name: str) -> int | None:
        tag = requests.utils.quote(tag_name, safe="")
        path = f"/repos/{self.repository}/releases/tags/{tag}"
        resp = self._request("GET", path)
        if resp.status_code == 404:
            return None
        if not 200 <= resp.status_code < 300:
            raise self._fail("GET", path, resp)
        try:
            data = resp.json()
        except ValueError:
            raise self._fail("GET", path, resp) from None
        release_id = data.get("id") if isinstance(data, dict) else None
        if not isinstance(release_id, int):
            raise self._fail("GET", path, resp)
        return release_id

    def delete_release(self, tag_name: str) -> bool:
        """
        Удаляет релиз по тегу. False, если релиза нет.
        """
        release_id = self.find_release_id(tag_name)
        if release_id is None:
            log.info("github_release_not_found", extra={"payload": {"tag": tag_name}})
            return False

        path = f"/repos/{self.repository}/releases/{release_id}"
        resp = self._request("DELETE", path)
        if resp.status_code not in {204, 404} and not 200 <= resp.status_code < 300:
            raise self._fail("DELETE", path, resp)
        log.info(
            "github_release_deleted",
            extra={"payload": {"tag": tag_name, "release_id": release_id}},
        )
        return True
