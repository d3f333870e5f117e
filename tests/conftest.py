from __future__ import annotations

import pytest

from fargate_calc.model.entities import (
    INSTANCE_TYPE_LABEL, Container, ContainerResources, Node, Pod, Snapshot,
)
from fargate_calc.types import CpuMillis, MemoryMega, Namespace, NodeId, PodId


def _pod(name, containers, namespace="default", phase="Running", owner_kinds=None):
    return Pod(
        id=PodId(f"{namespace}/{name}"),
        name=name,
        namespace=Namespace(namespace),
        phase=phase,
        owner_kinds=list(owner_kinds or []),
        containers=list(containers),
    )


def _container(name="app", req_cpu=None, req_mem=None, limit_cpu=None, limit_mem=None):
    return Container(
        name=name,
        resources=ContainerResources(
            req_cpu_m=req_cpu, req_mem_mi=req_mem, limit_cpu_m=limit_cpu, limit_mem_mi=limit_mem,
        ),
    )


def _node(name, instance_type=None, cpu_m=4000, mem_mi=8192):
    labels = {INSTANCE_TYPE_LABEL: instance_type} if instance_type else {}
    return Node(
        id=NodeId(name),
        name=name,
        alloc_cpu_m=CpuMillis(cpu_m),
        alloc_mem_mi=MemoryMega(mem_mi),
        labels=labels,
    )


@pytest.fixture
def make_pod():
    return _pod


@pytest.fixture
def make_container():
    return _container


@pytest.fixture
def make_node():
    return _node


@pytest.fixture
def cluster_snapshot():
    """web: 2x(300m/256Mi) + istio-proxy, fluentbit: DaemonSet, job: Succeeded, huge: не влезает."""
    pods = [
        _pod("web", [
            _container("web", req_cpu=300, req_mem=256),
            _container("sidecar", req_cpu=300, req_mem=256),
            _container("istio-proxy", req_cpu=100, req_mem=128),
        ], namespace="shop", owner_kinds=["ReplicaSet"]),
        _pod("fluentbit-x7", [_container(req_cpu=100, req_mem=200)],
             namespace="logging", owner_kinds=["DaemonSet"]),
        _pod("migrate-1", [_container(req_cpu=500, req_mem=512)],
             namespace="shop", phase="Succeeded", owner_kinds=["Job"]),
        _pod("huge", [_container(req_cpu=20000, req_mem=1000)], namespace="batch"),
    ]
    nodes = [
        _node("ip-10-0-0-1", "c5.xlarge", cpu_m=4000, mem_mi=8192),
        _node("ip-10-0-0-2", "m7.mystery", cpu_m=2000, mem_mi=4096),
    ]
    return Snapshot(
        pods={p.id: p for p in pods},
        nodes={n.id: n for n in nodes},
    )
