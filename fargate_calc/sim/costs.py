# fargate_calc/sim/costs.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from ..model.entities import Node
from .matcher import fargate_hourly_price
from .result import Matched, MatchResult, NodeCostTotals, PodCostTotals

log = logging.getLogger(__name__)

_DEFAULT_REGION = "us-east-1"


@dataclass
class PricingState:
    """Прайсы EC2 по типам инстансов.

    hourly_prices: on-demand цена за час работы инстанса в USD.
    """

    region: str = _DEFAULT_REGION
    hourly_prices: Dict[str, float] = field(default_factory=dict)


# ---------------------------------------------------------------------
# Загрузка прайсов
# ---------------------------------------------------------------------


def load_prices(path: Union[str, Path]) -> PricingState:
    """Загрузка прайсов из JSON-файла.

    Ожидаемый формат:
    {
      "prices": { "c5.xlarge": 0.194, ... },
      "region": "us-east-1"
    }
    или
    {
      "hourly_prices": {...},
      "region": "..."
    }
    """
    p = Path(path)
    data = json.loads(p.read_text("utf-8"))
    prices = data.get("prices") or data.get("hourly_prices") or {}
    region = data.get("region") or _DEFAULT_REGION
    state = PricingState(
        region=region,
        hourly_prices={str(k): float(v) for k, v in prices.items()},
    )
    log.info("Loaded pricing from %s for region %s (%d instance types)", p, region, len(prices))
    return state


# ---------------------------------------------------------------------
# Pod'ы
# ---------------------------------------------------------------------


def accumulate_pod(totals: PodCostTotals, result: MatchResult) -> PodCostTotals:
    """Unmatched в сумму не попадает."""
    if not isinstance(result, Matched):
        return totals
    return PodCostTotals(
        total_cpu_m=totals.total_cpu_m + result.cpu_m,
        total_mem_mi=totals.total_mem_mi + result.mem_mi,
        total_hourly_price=totals.total_hourly_price + result.hourly_price,
    )


# ---------------------------------------------------------------------
# Ноды
# ---------------------------------------------------------------------


def node_ec2_price(node: Node, instance_prices: Mapping[str, float]) -> Optional[float]:
    """Цена ноды в час по её instance type, None если посчитать нельзя."""
    instance_type = node.instance_type
    if instance_type is None:
        log.warning("Cannot determine instance type for node %s", node.name)
        return None
    price = instance_prices.get(instance_type)
    if price is None:
        log.warning("EC2 price for %s not provided.", instance_type)
        return None
    return float(price)


def node_fargate_equivalent(node: Node, cpu_hour_rate: float, memory_hour_rate: float) -> float:
    """Линейная цена allocatable-ресурсов ноды по тарифу Fargate, без тиров."""
    return fargate_hourly_price(node.alloc_cpu_m, node.alloc_mem_mi, cpu_hour_rate, memory_hour_rate)


def accumulate_node(
    totals: NodeCostTotals,
    ec2_price: Optional[float],
    fargate_equivalent: float,
) -> NodeCostTotals:
    totals = replace(
        totals,
        fargate_equivalent_hourly_price=totals.fargate_equivalent_hourly_price + fargate_equivalent,
    )
    if ec2_price is not None:
        totals = replace(totals, ec2_hourly_price=totals.ec2_hourly_price + ec2_price)
    return totals
