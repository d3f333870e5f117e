# fargate_calc/sim/aggregate.py
from __future__ import annotations

from ..model.entities import Pod
from ..model.requirement import ResourceRequirement
from ..types import CpuMillis, MemoryMega
from .selector import is_istio_proxy, pick_quantity

# Fargate резервирует под sandbox pod'а ~250 MiB сверх requests.
POD_MEMORY_OVERHEAD_MI = MemoryMega(250)


def aggregate_pod(
    pod: Pod,
    use_requests_only: bool = False,
    exclude_istio_proxy: bool = True,
) -> ResourceRequirement:
    """Сворачивает контейнеры pod'а в одну потребность (cpu, mem).

    Pod без requests/limits у всех контейнеров даёт (0, 250Mi): это
    известная недооценка, её не исправляем.
    """
    cpu_m = 0
    mem_mi = 0
    for c in pod.containers:
        if exclude_istio_proxy and is_istio_proxy(c):
            continue
        r = c.resources
        cpu_m += pick_quantity(r.req_cpu_m, r.limit_cpu_m, use_requests_only)
        mem_mi += pick_quantity(r.req_mem_mi, r.limit_mem_mi, use_requests_only)

    return ResourceRequirement(
        cpu_m=CpuMillis(cpu_m),
        mem_mi=MemoryMega(mem_mi + POD_MEMORY_OVERHEAD_MI),
    )
