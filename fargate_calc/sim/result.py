# fargate_calc/sim/result.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..model.requirement import ResourceRequirement
from ..types import CpuMillis, MemoryMega, UsdPerHour


@dataclass(frozen=True)
class Matched:
    """Подобранная конфигурация Fargate и её цена в час."""
    cpu_m: CpuMillis
    mem_mi: MemoryMega
    hourly_price: UsdPerHour


@dataclass(frozen=True)
class Unmatched:
    """Pod не влезает ни в одну конфигурацию. Это не ошибка."""


UNMATCHED = Unmatched()

MatchResult = Union[Matched, Unmatched]


@dataclass(frozen=True)
class PodCostTotals:
    total_cpu_m: int = 0
    total_mem_mi: int = 0
    total_hourly_price: float = 0.0


@dataclass(frozen=True)
class NodeCostTotals:
    ec2_hourly_price: float = 0.0
    fargate_equivalent_hourly_price: float = 0.0


@dataclass
class PodEstimate:
    """Строка по pod'у для отчёта."""
    pod_id: str
    namespace: str
    name: str
    requirement: ResourceRequirement
    result: MatchResult

    @property
    def matched(self) -> bool:
        return isinstance(self.result, Matched)


@dataclass
class NodeEstimate:
    node: str
    instance_type: Optional[str]
    ec2_hourly_price: Optional[float]   # None: цена неизвестна
    fargate_equivalent_hourly_price: float


@dataclass
class EstimateResult:
    """
    То, что уходит в лог / JSON-отчёт / API.
    """
    pods: List[PodEstimate] = field(default_factory=list)
    skipped_pods: List[str] = field(default_factory=list)
    nodes: List[NodeEstimate] = field(default_factory=list)
    pod_totals: PodCostTotals = field(default_factory=PodCostTotals)
    node_totals: NodeCostTotals = field(default_factory=NodeCostTotals)

    @property
    def unmatched_pods(self) -> List[PodEstimate]:
        return [p for p in self.pods if not p.matched]
