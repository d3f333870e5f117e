# fargate_calc/sim/selector.py
from __future__ import annotations

from typing import Optional

from ..model.entities import Container, Pod

ISTIO_PROXY_CONTAINER = "istio-proxy"
TERMINAL_PHASES = ("Succeeded", "Failed")


def is_terminal_pod(p: Pod) -> bool:
    """Завершённые pod'ы ресурсов не держат."""
    return p.phase in TERMINAL_PHASES


def is_daemonset_pod(p: Pod) -> bool:
    return any(kind == "DaemonSet" for kind in p.owner_kinds)


def is_istio_proxy(c: Container) -> bool:
    return c.name == ISTIO_PROXY_CONTAINER


def pick_quantity(
    request: Optional[int],
    limit: Optional[int],
    use_requests_only: bool,
) -> int:
    """Выбор между limit и request для одного ресурса контейнера.

    limit считается главным, если он задан (и не 0) и не включён
    режим use_requests_only; иначе берём request, иначе 0.
    """
    if limit and not use_requests_only:
        return int(limit)
    if request:
        return int(request)
    return 0


def skip_reason(p: Pod, exclude_daemonsets: bool = True) -> Optional[str]:
    """Почему pod не участвует в расчёте Fargate (None == участвует)."""
    if is_terminal_pod(p):
        return f"phase {p.phase}"
    if exclude_daemonsets and is_daemonset_pod(p):
        return "DaemonSet"
    return None
