# fargate_calc/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

# Тарифы Fargate по умолчанию (us-east-1, Linux/x86)
DEFAULT_FARGATE_CPU_HOUR = 0.04656
DEFAULT_FARGATE_MEMORY_HOUR = 0.00511
DEFAULT_EC2_INSTANCE_HOUR: Dict[str, float] = {"c5.xlarge": 0.194}


@dataclass
class EstimateConfig:
    """Параметры одного прогона. В процессе расчёта не меняются."""
    namespace: str = ""
    use_requests_only: bool = False
    assume_optimization: bool = False
    exclude_daemonsets: bool = True
    exclude_istio_proxy: bool = True
    fargate_cpu_hour: float = DEFAULT_FARGATE_CPU_HOUR
    fargate_memory_hour: float = DEFAULT_FARGATE_MEMORY_HOUR
    ec2_instance_hour: Dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_EC2_INSTANCE_HOUR)
    )


def parse_instance_prices(value: str) -> Dict[str, float]:
    """Разбор флага вида c5.xlarge=0.194,m5.large=0.096."""
    result: Dict[str, float] = {}
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, price = item.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Invalid instance price {item!r}, expected <type>=<price>")
        try:
            result[name.strip()] = float(price)
        except ValueError:
            raise ValueError(f"Invalid price for {name.strip()}: {price!r}") from None
    return result
