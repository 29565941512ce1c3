"""
Release-candidate tag policy.

Candidate tags have the form ``<tag name>-rc<N>`` where ``N`` is a positive
integer without a leading zero. The tag name is a literal prefix: any prefix
such as ``v`` is part of the name supplied by the caller.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

_RUN_RE = re.compile(r"(\d+)")
_RC_SUFFIX = r"-rc[1-9][0-9]*"


def rc_tag_pattern(tag_name: str) -> re.Pattern[str]:
    return re.compile(re.escape(tag_name) + _RC_SUFFIX)


def filter_rc_tags(tag_name: str, tags: Iterable[str]) -> list[str]:
    """
    Candidate tags for ``tag_name`` in input order. Whole-string match only.
    """
    pattern = rc_tag_pattern(tag_name)
    return [tag for tag in tags if pattern.fullmatch(tag)]


def parse_tag_lines(raw: str) -> list[str]:
    out: list[str] = []
    for line in (raw or "").splitlines():
        tag = line.strip()
        if tag:
            out.append(tag)
    return out


def natural_sort_key(tag: str) -> tuple:
    """
    Digit runs compare by value and before text runs at the same position;
    equal keys fall back to the plain string (``rc01`` < ``rc1``).
    """
    parts = []
    for i, run in enumerate(_RUN_RE.split(tag)):
        if not run:
            continue
        if i % 2:
            parts.append((0, int(run), ""))
        else:
            parts.append((1, 0, run))
    return (tuple(parts), tag)


def highest_of(tags: Iterable[str]) -> str | None:
    return max(tags, key=natural_sort_key, default=None)
