# fargate_calc/sim/estimate.py
from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..config import EstimateConfig
from ..model.entities import Node, Pod, Snapshot
from ..model.requirement import ResourceRequirement
from .aggregate import aggregate_pod
from .costs import accumulate_node, accumulate_pod, node_ec2_price, node_fargate_equivalent
from .matcher import match_tier
from .optimize import OptimizationAdjuster
from .result import EstimateResult, Matched, NodeEstimate, PodEstimate
from .selector import skip_reason
from .tiers import FargateTier, tiers

log = logging.getLogger(__name__)


def estimate_pod(
    pod: Pod,
    cfg: EstimateConfig,
    adjuster: Optional[OptimizationAdjuster] = None,
    catalog: Optional[Sequence[FargateTier]] = None,
) -> PodEstimate:
    requirement: ResourceRequirement = aggregate_pod(
        pod,
        use_requests_only=cfg.use_requests_only,
        exclude_istio_proxy=cfg.exclude_istio_proxy,
    )
    if cfg.assume_optimization:
        requirement = (adjuster or OptimizationAdjuster()).adjust(requirement)

    result = match_tier(
        requirement,
        catalog if catalog is not None else tiers(),
        cfg.fargate_cpu_hour,
        cfg.fargate_memory_hour,
    )
    if isinstance(result, Matched):
        log.info(
            "Resolved Fargate configuration %s CPU and %s Memory for Pod %s/%s (%dm / %dMi) with hourly price: %s$",
            result.cpu_m / 1000, result.mem_mi / 1024, pod.namespace, pod.name,
            requirement.cpu_m, requirement.mem_mi, result.hourly_price,
        )
    else:
        log.warning(
            "Did not match a fargate config for pod %s/%s with cpu %dm and memory %dMi.",
            pod.namespace, pod.name, requirement.cpu_m, requirement.mem_mi,
        )
    return PodEstimate(
        pod_id=str(pod.id),
        namespace=str(pod.namespace),
        name=pod.name,
        requirement=requirement,
        result=result,
    )


def estimate_node(node: Node, cfg: EstimateConfig) -> NodeEstimate:
    return NodeEstimate(
        node=node.name,
        instance_type=node.instance_type,
        ec2_hourly_price=node_ec2_price(node, cfg.ec2_instance_hour),
        fargate_equivalent_hourly_price=node_fargate_equivalent(
            node, cfg.fargate_cpu_hour, cfg.fargate_memory_hour
        ),
    )


def run_estimate(
    snapshot: Snapshot,
    cfg: Optional[EstimateConfig] = None,
    adjuster: Optional[OptimizationAdjuster] = None,
) -> EstimateResult:
    """Полный прогон: pod'ы -> тиры Fargate, ноды -> EC2 и эквивалент."""
    cfg = cfg or EstimateConfig()
    res = EstimateResult()

    log.debug("Found %d pods.", len(snapshot.pods))
    for pod in snapshot.pods.values():
        reason = skip_reason(pod, cfg.exclude_daemonsets)
        if reason:
            log.debug("Skipping %s Pod %s/%s.", reason, pod.namespace, pod.name)
            res.skipped_pods.append(str(pod.id))
            continue
        pe = estimate_pod(pod, cfg, adjuster)
        res.pods.append(pe)
        res.pod_totals = accumulate_pod(res.pod_totals, pe.result)

    log.info("Total Fargate price/h for pods: %f", res.pod_totals.total_hourly_price)

    log.debug("Found %d nodes.", len(snapshot.nodes))
    for node in snapshot.nodes.values():
        ne = estimate_node(node, cfg)
        res.nodes.append(ne)
        res.node_totals = accumulate_node(
            res.node_totals, ne.ec2_hourly_price, ne.fargate_equivalent_hourly_price
        )

    log.info("Total EC2 price/h for nodes: %s", res.node_totals.ec2_hourly_price)
    log.info(
        "Fargate price/h for equivalent allocatable resources: %s",
        res.node_totals.fargate_equivalent_hourly_price,
    )
    return res
