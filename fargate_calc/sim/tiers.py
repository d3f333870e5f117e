# fargate_calc/sim/tiers.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..types import CpuMillis, MemoryMega


@dataclass(frozen=True)
class FargateTier:
    """Одна строка таблицы Fargate: vCPU и допустимые объёмы памяти (MiB, по возрастанию)."""
    cpu_m: CpuMillis
    memory_options_mi: Tuple[MemoryMega, ...]


def _gib(*values: int) -> Tuple[MemoryMega, ...]:
    return tuple(MemoryMega(v * 1024) for v in values)


# Таблица из документации AWS (Fargate pod configuration).
# Меняется только если AWS меняет тарифную сетку.
FARGATE_TIERS: Tuple[FargateTier, ...] = (
    FargateTier(CpuMillis(250), (MemoryMega(512),) + _gib(1, 2)),
    FargateTier(CpuMillis(500), _gib(1, 2, 3, 4)),
    FargateTier(CpuMillis(1000), _gib(*range(2, 9))),
    FargateTier(CpuMillis(2000), _gib(*range(4, 17))),
    FargateTier(CpuMillis(4000), _gib(*range(8, 31))),
    FargateTier(CpuMillis(8000), _gib(*range(16, 61, 4))),
    FargateTier(CpuMillis(16000), _gib(*range(32, 121, 8))),
)


def tiers() -> Tuple[FargateTier, ...]:
    return FARGATE_TIERS


def max_tier() -> FargateTier:
    return FARGATE_TIERS[-1]
