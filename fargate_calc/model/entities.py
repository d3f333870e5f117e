# fargate_calc/model/entities.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..types import NodeId, PodId, InstanceType, Namespace, CpuMillis, MemoryMega

INSTANCE_TYPE_LABEL = "node.kubernetes.io/instance-type"


@dataclass
class ContainerResources:
    """requests/limits контейнера. None == поле не задано в спеке."""
    req_cpu_m: Optional[CpuMillis] = None
    req_mem_mi: Optional[MemoryMega] = None
    limit_cpu_m: Optional[CpuMillis] = None
    limit_mem_mi: Optional[MemoryMega] = None


@dataclass
class Container:
    name: str
    resources: ContainerResources = field(default_factory=ContainerResources)


@dataclass
class Pod:
    id: PodId
    name: str
    namespace: Namespace
    phase: str = "Running"
    owner_kinds: List[str] = field(default_factory=list)
    containers: List[Container] = field(default_factory=list)


@dataclass
class Node:
    id: NodeId
    name: str
    alloc_cpu_m: CpuMillis
    alloc_mem_mi: MemoryMega
    labels: Dict[str, str] = field(default_factory=dict)

    @property
    def instance_type(self) -> Optional[InstanceType]:
        value = self.labels.get(INSTANCE_TYPE_LABEL)
        return InstanceType(value) if value else None


@dataclass
class Snapshot:
    pods: Dict[PodId, Pod]
    nodes: Dict[NodeId, Node]
    namespace: str = ""
