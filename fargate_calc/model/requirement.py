# fargate_calc/model/requirement.py
from __future__ import annotations

from dataclasses import dataclass

from ..types import CpuMillis, MemoryMega


@dataclass(frozen=True)
class ResourceRequirement:
    """
    Итоговая потребность pod'а, которую надо уложить в Fargate-конфигурацию.

    Единицы:
      - CPU: milliCPU
      - RAM: MiB
    """
    cpu_m: CpuMillis
    mem_mi: MemoryMega
