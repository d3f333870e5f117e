# fargate_calc/api/schema.py
from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from ..config import (
    DEFAULT_EC2_INSTANCE_HOUR, DEFAULT_FARGATE_CPU_HOUR, DEFAULT_FARGATE_MEMORY_HOUR, EstimateConfig,
)
from ..sim.result import EstimateResult, Matched

class TierModel(BaseModel):
    cpu_m: int
    memory_options_mi: List[int]

class SettingsModel(BaseModel):
    """Те же параметры, что и у CLI."""
    use_requests_only: bool = False
    assume_optimization: bool = False
    exclude_daemonsets: bool = True
    exclude_istio_proxy: bool = True
    fargate_cpu_hour: float = DEFAULT_FARGATE_CPU_HOUR
    fargate_memory_hour: float = DEFAULT_FARGATE_MEMORY_HOUR
    ec2_instance_hour: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_EC2_INSTANCE_HOUR))

    def to_config(self, namespace: str = "") -> EstimateConfig:
        return EstimateConfig(
            namespace=namespace,
            use_requests_only=self.use_requests_only,
            assume_optimization=self.assume_optimization,
            exclude_daemonsets=self.exclude_daemonsets,
            exclude_istio_proxy=self.exclude_istio_proxy,
            fargate_cpu_hour=self.fargate_cpu_hour,
            fargate_memory_hour=self.fargate_memory_hour,
            ec2_instance_hour=dict(self.ec2_instance_hour),
        )

class EstimateRequest(BaseModel):
    # snapshot в формате snapshot/io.py
    snapshot: Dict[str, Any]
    settings: SettingsModel = Field(default_factory=SettingsModel)

class PodEstimateModel(BaseModel):
    pod_id: str
    namespace: str
    name: str
    req_cpu_m: int
    req_mem_mi: int
    matched: bool
    fargate_cpu_m: Optional[int] = None
    fargate_mem_mi: Optional[int] = None
    hourly_price: Optional[float] = None

class NodeEstimateModel(BaseModel):
    node: str
    instance_type: Optional[str]
    ec2_hourly_price: Optional[float]
    fargate_equivalent_hourly_price: float

class SummaryModel(BaseModel):
    fargate_total_cpu_m: int
    fargate_total_mem_mi: int
    fargate_total_hourly_price: float
    ec2_hourly_price: float
    fargate_equivalent_hourly_price: float
    pods_matched: int
    pods_unmatched: int
    pods_skipped: int

class EstimateResponse(BaseModel):
    summary: SummaryModel
    pods: List[PodEstimateModel]
    nodes: List[NodeEstimateModel]
    skipped_pods: List[str]


def to_estimate_response(res: EstimateResult) -> EstimateResponse:
    pods = []
    for pe in res.pods:
        item = PodEstimateModel(
            pod_id=pe.pod_id,
            namespace=pe.namespace,
            name=pe.name,
            req_cpu_m=pe.requirement.cpu_m,
            req_mem_mi=pe.requirement.mem_mi,
            matched=pe.matched,
        )
        if isinstance(pe.result, Matched):
            item.fargate_cpu_m = pe.result.cpu_m
            item.fargate_mem_mi = pe.result.mem_mi
            item.hourly_price = pe.result.hourly_price
        pods.append(item)

    nodes = [
        NodeEstimateModel(
            node=ne.node,
            instance_type=ne.instance_type,
            ec2_hourly_price=ne.ec2_hourly_price,
            fargate_equivalent_hourly_price=ne.fargate_equivalent_hourly_price,
        )
        for ne in res.nodes
    ]

    unmatched = len(res.unmatched_pods)
    return EstimateResponse(
        summary=SummaryModel(
            fargate_total_cpu_m=res.pod_totals.total_cpu_m,
            fargate_total_mem_mi=res.pod_totals.total_mem_mi,
            fargate_total_hourly_price=res.pod_totals.total_hourly_price,
            ec2_hourly_price=res.node_totals.ec2_hourly_price,
            fargate_equivalent_hourly_price=res.node_totals.fargate_equivalent_hourly_price,
            pods_matched=len(res.pods) - unmatched,
            pods_unmatched=unmatched,
            pods_skipped=len(res.skipped_pods),
        ),
        pods=pods,
        nodes=nodes,
        skipped_pods=list(res.skipped_pods),
    )
