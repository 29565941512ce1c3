"""
Метрики Prometheus для rc-tag-gate.

Назначение:
- счётчики запусков гейта, внешних операций и шагов отката
- задержки стадий (мс)
- выгрузка в textfile для node-exporter (процесс короткоживущий, /metrics не нужен)
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager

from prometheus_client import REGISTRY, Counter, Histogram, write_to_textfile

# =============================================================================
# СЧЁТЧИКИ И МЕТРИКИ
# =============================================================================

GATE_RUNS_TOTAL = Counter(
    "rc_gate_runs_total",
    "Количество запусков проверки rc тега",
    ["result"],
)

EXTERNAL_OPERATIONS_TOTAL = Counter(
    "rc_gate_external_operations_total",
    "Внешние операции (git/gh/GitHub API)",
    ["operation", "result"],
)

ROLLBACK_STEPS_TOTAL = Counter(
    "rc_gate_rollback_steps_total",
    "Шаги отката (удаление тега и релиза)",
    ["step", "result"],
)

STAGE_LATENCY_MS = Histogram(
    "rc_gate_stage_latency_ms",
    "Задержка выполнения стадий (мс)",
    ["stage"],
    buckets=(5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000, 10000, 30000),
)


@contextmanager
def track_stage_latency(stage: str) -> Iterator[None]:
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        STAGE_LATENCY_MS.labels(stage=stage).observe(elapsed_ms)


def export_metrics(path: str) -> None:
    """
    Пишет текущий registry в файл (формат textfile collector).
    """
    if not path:
        return
    write_to_textfile(path, REGISTRY)
