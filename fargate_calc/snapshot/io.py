# fargate_calc/snapshot/io.py
from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

from ..model.entities import Container, ContainerResources, Node, Pod, Snapshot
from ..types import CpuMillis, MemoryMega, Namespace, NodeId, PodId


def snapshot_to_dict(snap: Snapshot) -> Dict[str, Any]:
    pods_dict = {}
    for p in snap.pods.values():
        pods_dict[p.id] = {
            "name": p.name,
            "namespace": p.namespace,
            "phase": p.phase,
            "owner_kinds": list(p.owner_kinds),
            "containers": [asdict(c) for c in p.containers],
        }

    nodes_dict = {}
    for n in snap.nodes.values():
        nodes_dict[n.name] = {
            "name": n.name,
            "alloc_cpu_m": int(n.alloc_cpu_m),
            "alloc_mem_mi": int(n.alloc_mem_mi),
            "labels": n.labels,
        }

    return {
        "namespace": snap.namespace,
        "pods": pods_dict,
        "nodes": nodes_dict,
    }


def _opt_int(v: Any) -> int | None:
    return int(v) if v is not None else None


def _container_from_dict(v: Dict[str, Any]) -> Container:
    r = v.get("resources") or {}
    return Container(
        name=v.get("name", ""),
        resources=ContainerResources(
            req_cpu_m=_opt_int(r.get("req_cpu_m")),
            req_mem_mi=_opt_int(r.get("req_mem_mi")),
            limit_cpu_m=_opt_int(r.get("limit_cpu_m")),
            limit_mem_mi=_opt_int(r.get("limit_mem_mi")),
        ),
    )


def snapshot_from_dict(data: Dict[str, Any]) -> Snapshot:
    raw_pods = data.get("pods", {})
    raw_nodes = data.get("nodes", {})

    pods = {}
    for k, v in raw_pods.items():
        pod_id = PodId(k)
        pods[pod_id] = Pod(
            id=pod_id,
            name=v.get("name", k),
            namespace=Namespace(v.get("namespace", "default")),
            phase=v.get("phase", "Running"),
            owner_kinds=list(v.get("owner_kinds", [])),
            containers=[_container_from_dict(c) for c in v.get("containers", [])],
        )

    nodes = {}
    for k, v in raw_nodes.items():
        name = v.get("name", k)
        nodes[NodeId(name)] = Node(
            id=NodeId(name),
            name=name,
            alloc_cpu_m=CpuMillis(int(v.get("alloc_cpu_m", 0))),
            alloc_mem_mi=MemoryMega(int(v.get("alloc_mem_mi", 0))),
            labels=dict(v.get("labels", {})),
        )

    return Snapshot(pods=pods, nodes=nodes, namespace=data.get("namespace", ""))


def save_snapshot_to_file(snap: Snapshot, path: Path) -> None:
    data = snapshot_to_dict(snap)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)


def load_snapshot_from_file(path: Path) -> Snapshot:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return snapshot_from_dict(data)
