# fargate_calc/sim/optimize.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from ..model.requirement import ResourceRequirement
from ..types import CpuMillis, MemoryMega

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepFunction:
    """
    Ступенчатое уменьшение значения.

    steps: пары (порог, сколько вычесть), проверяются сверху вниз,
    срабатывает первая, где value > порог. Если ни одна не подошла,
    вычитается default. Результат не уходит ниже нуля.
    """
    steps: Tuple[Tuple[int, int], ...]
    default: int

    def apply(self, value: int) -> int:
        for threshold, subtract in self.steps:
            if value > threshold:
                return max(0, value - subtract)
        return max(0, value - self.default)


DEFAULT_CPU_STEPS = StepFunction(steps=((1500, 1000), (750, 500)), default=250)
DEFAULT_MEMORY_STEPS = StepFunction(steps=((1536, 1024),), default=512)


@dataclass(frozen=True)
class OptimizationAdjuster:
    """Модель "команда подгонит requests под сетку Fargate".

    Это эвристика, а не данные AWS, поэтому правила можно подменить
    (см. load_adjuster).
    """
    cpu: StepFunction = field(default=DEFAULT_CPU_STEPS)
    memory: StepFunction = field(default=DEFAULT_MEMORY_STEPS)

    def adjust(self, requirement: ResourceRequirement) -> ResourceRequirement:
        return ResourceRequirement(
            cpu_m=CpuMillis(self.cpu.apply(requirement.cpu_m)),
            mem_mi=MemoryMega(self.memory.apply(requirement.mem_mi)),
        )


def _step_function_from_dict(data: Dict[str, Any], fallback: StepFunction) -> StepFunction:
    if not data:
        return fallback
    steps = tuple((int(t), int(s)) for t, s in data.get("steps", []))
    default = int(data.get("default", fallback.default))
    return StepFunction(steps=steps, default=default)


def load_adjuster(path: Union[str, Path]) -> OptimizationAdjuster:
    """Загрузка правил оптимизации из JSON-файла.

    Ожидаемый формат:
    {
      "cpu": {"steps": [[1500, 1000], [750, 500]], "default": 250},
      "memory": {"steps": [[1536, 1024]], "default": 512}
    }
    Отсутствующая секция берётся по умолчанию.
    """
    p = Path(path)
    data = json.loads(p.read_text("utf-8"))
    adjuster = OptimizationAdjuster(
        cpu=_step_function_from_dict(data.get("cpu") or {}, DEFAULT_CPU_STEPS),
        memory=_step_function_from_dict(data.get("memory") or {}, DEFAULT_MEMORY_STEPS),
    )
    log.info("Loaded optimization rules from %s", p)
    return adjuster
