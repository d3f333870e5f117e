# fargate_calc/sim/matcher.py
from __future__ import annotations

from typing import Sequence

from ..model.requirement import ResourceRequirement
from ..types import UsdPerHour
from .result import UNMATCHED, Matched, MatchResult
from .tiers import FargateTier


def fargate_hourly_price(
    cpu_m: int,
    mem_mi: int,
    cpu_hour_rate: float,
    memory_hour_rate: float,
) -> UsdPerHour:
    """CPU тарифицируется за vCPU-час, память за GiB-час."""
    return UsdPerHour(cpu_m / 1000 * cpu_hour_rate + mem_mi / 1024 * memory_hour_rate)


def match_tier(
    requirement: ResourceRequirement,
    catalog: Sequence[FargateTier],
    cpu_hour_rate: float,
    memory_hour_rate: float,
) -> MatchResult:
    """Подбор конфигурации Fargate для pod'а.

    Идём по тирам в порядке роста CPU и берём первый, где есть подходящая
    память. Дальше не ищем, даже если более крупный тир вышел бы дешевле:
    сначала минимальный CPU, а не минимальная цена.
    """
    for tier in catalog:
        if requirement.cpu_m != 0 and tier.cpu_m < requirement.cpu_m:
            continue
        for mem_mi in tier.memory_options_mi:
            if mem_mi >= requirement.mem_mi:
                return Matched(
                    cpu_m=tier.cpu_m,
                    mem_mi=mem_mi,
                    hourly_price=fargate_hourly_price(
                        tier.cpu_m, mem_mi, cpu_hour_rate, memory_hour_rate
                    ),
                )
    return UNMATCHED
