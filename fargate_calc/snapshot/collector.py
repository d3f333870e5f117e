# fargate_calc/snapshot/collector.py
from __future__ import annotations

import logging
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from kubernetes import client, config

from ..model.entities import Container, ContainerResources, Node, Pod, Snapshot
from ..types import CpuMillis, MemoryMega, Namespace, NodeId, PodId

log = logging.getLogger(__name__)

_QUANTITY_RE = re.compile(r"^([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)([a-zA-Z]*)$")

_SUFFIXES: Dict[str, Decimal] = {
    "n": Decimal(10) ** -9,
    "u": Decimal(10) ** -6,
    "m": Decimal(10) ** -3,
    "": Decimal(1),
    "k": Decimal(10) ** 3,
    "M": Decimal(10) ** 6,
    "G": Decimal(10) ** 9,
    "T": Decimal(10) ** 12,
    "P": Decimal(10) ** 15,
    "E": Decimal(10) ** 18,
    "Ki": Decimal(2) ** 10,
    "Mi": Decimal(2) ** 20,
    "Gi": Decimal(2) ** 30,
    "Ti": Decimal(2) ** 40,
    "Pi": Decimal(2) ** 50,
    "Ei": Decimal(2) ** 60,
}

_MIB = Decimal(2) ** 20


def parse_quantity(quantity: Any) -> Decimal:
    """Kubernetes quantity ("100m", "1.5Gi", "1e3", "2") -> Decimal в базовых единицах."""
    text = str(quantity).strip()
    m = _QUANTITY_RE.match(text)
    if not m or m.group(2) not in _SUFFIXES:
        raise ValueError(f"Invalid resource quantity: {quantity!r}")
    try:
        number = Decimal(m.group(1))
    except InvalidOperation:
        raise ValueError(f"Invalid resource quantity: {quantity!r}") from None
    return number * _SUFFIXES[m.group(2)]


def parse_cpu(quantity: Any) -> Optional[CpuMillis]:
    """CPU -> milliCPU с округлением вверх. Пустое значение -> None."""
    if quantity is None or str(quantity).strip() == "":
        return None
    return CpuMillis(math.ceil(parse_quantity(quantity) * 1000))


def parse_memory(quantity: Any) -> Optional[MemoryMega]:
    """Память -> MiB с округлением вверх. Пустое значение -> None."""
    if quantity is None or str(quantity).strip() == "":
        return None
    return MemoryMega(math.ceil(parse_quantity(quantity) / _MIB))


def _container_from_k8s(c: Any) -> Container:
    res = c.resources
    requests = (res.requests if res else None) or {}
    limits = (res.limits if res else None) or {}
    return Container(
        name=c.name,
        resources=ContainerResources(
            req_cpu_m=parse_cpu(requests.get("cpu")),
            req_mem_mi=parse_memory(requests.get("memory")),
            limit_cpu_m=parse_cpu(limits.get("cpu")),
            limit_mem_mi=parse_memory(limits.get("memory")),
        ),
    )


def pod_from_k8s(kp: Any) -> Pod:
    """V1Pod -> Pod."""
    meta = kp.metadata
    spec = kp.spec
    status = kp.status
    return Pod(
        id=PodId(f"{meta.namespace}/{meta.name}"),
        name=meta.name,
        namespace=Namespace(meta.namespace),
        phase=(status.phase if status and status.phase else "Unknown"),
        owner_kinds=[o.kind for o in (meta.owner_references or [])],
        containers=[_container_from_k8s(c) for c in ((spec.containers if spec else None) or [])],
    )


def node_from_k8s(kn: Any) -> Node:
    """V1Node -> Node."""
    meta = kn.metadata
    alloc = (kn.status.allocatable if kn.status else None) or {}
    return Node(
        id=NodeId(meta.name),
        name=meta.name,
        alloc_cpu_m=parse_cpu(alloc.get("cpu")) or CpuMillis(0),
        alloc_mem_mi=parse_memory(alloc.get("memory")) or MemoryMega(0),
        labels=dict(meta.labels or {}),
    )


def collect_k8s_snapshot(namespace: str = "", k8s_context: str | None = None) -> Snapshot:
    """Снимает pod'ы и ноды из кластера (по умолчанию ~/.kube/config).

    Ошибки подключения и API не глушим: без данных считать нечего.
    """
    try:
        config.load_kube_config(context=k8s_context)
    except config.ConfigException:
        if k8s_context:
            raise
        log.info("No kubeconfig found, using in-cluster config")
        config.load_incluster_config()
    v1 = client.CoreV1Api()

    log.info("Fetching Pods%s...", f" in namespace {namespace}" if namespace else "")
    if namespace:
        pods_data = v1.list_namespaced_pod(namespace).items
    else:
        pods_data = v1.list_pod_for_all_namespaces().items
    log.info("Fetching Nodes...")
    nodes_data = v1.list_node().items

    pods = {}
    for kp in pods_data:
        p = pod_from_k8s(kp)
        pods[p.id] = p

    nodes = {}
    for kn in nodes_data:
        n = node_from_k8s(kn)
        nodes[n.id] = n

    return Snapshot(pods=pods, nodes=nodes, namespace=namespace)
