# fargate_calc/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .api.schema import to_estimate_response
from .config import (
    DEFAULT_FARGATE_CPU_HOUR, DEFAULT_FARGATE_MEMORY_HOUR, EstimateConfig, parse_instance_prices,
)
from .sim.costs import load_prices
from .sim.estimate import run_estimate
from .sim.optimize import OptimizationAdjuster, load_adjuster
from .snapshot.collector import collect_k8s_snapshot
from .snapshot.io import load_snapshot_from_file, save_snapshot_to_file

log = logging.getLogger("fargate_calc")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fargate-calculator",
        description="Calculate Fargate cost for Kubernetes workload.",
    )
    parser.add_argument("--namespace", default="", help="Namespace selector (optional).")
    parser.add_argument("--context", help="kubeconfig context (по умолчанию текущий).")
    parser.add_argument(
        "--use-requests-only",
        action="store_true",
        help="If set, calculator will only use requests and not limits.",
    )
    parser.add_argument(
        "--assume-request-optimization",
        action="store_true",
        help="Expect that requests would be adjusted down to meet Fargate pod config values.",
    )
    parser.add_argument(
        "--fargate-cpu-hour",
        type=float,
        default=DEFAULT_FARGATE_CPU_HOUR,
        help="Price of Fargate vCPU per hour.",
    )
    parser.add_argument(
        "--fargate-memory-hour",
        type=float,
        default=DEFAULT_FARGATE_MEMORY_HOUR,
        help="Price of Fargate memory (GiB) per hour.",
    )
    parser.add_argument(
        "--ec2-instance-hour",
        type=parse_instance_prices,
        default="c5.xlarge=0.194",
        help="Hourly prices of instance types (comma-separated), e.g. c5.xlarge=0.194",
    )
    parser.add_argument(
        "--prices-file",
        help="JSON-файл с ценами EC2 ({\"prices\": {...}}), дополняет --ec2-instance-hour.",
    )
    parser.add_argument(
        "--exclude-daemonsets",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Exclude Pods owned by DaemonSets (as not supported in Fargate).",
    )
    parser.add_argument(
        "--exclude-istio-proxy",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Exclude istio-proxy containers (as not supported in Fargate).",
    )
    parser.add_argument(
        "--optimization-rules",
        help="JSON-файл с правилами для --assume-request-optimization.",
    )
    parser.add_argument("--snapshot", help="Считать по сохранённому снапшоту вместо кластера.")
    parser.add_argument("--save-snapshot", help="Сохранить снятый снапшот в JSON.")
    parser.add_argument("--out", help="Записать JSON-отчёт в файл ('-' для stdout).")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def _config_from_args(args: argparse.Namespace) -> EstimateConfig:
    prices = dict(args.ec2_instance_hour)
    if args.prices_file:
        prices.update(load_prices(args.prices_file).hourly_prices)
    return EstimateConfig(
        namespace=args.namespace,
        use_requests_only=args.use_requests_only,
        assume_optimization=args.assume_request_optimization,
        exclude_daemonsets=args.exclude_daemonsets,
        exclude_istio_proxy=args.exclude_istio_proxy,
        fargate_cpu_hour=args.fargate_cpu_hour,
        fargate_memory_hour=args.fargate_memory_hour,
        ec2_instance_hour=prices,
    )


def main_cli(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    try:
        cfg = _config_from_args(args)
        adjuster = load_adjuster(args.optimization_rules) if args.optimization_rules else OptimizationAdjuster()

        if args.snapshot:
            snap = load_snapshot_from_file(Path(args.snapshot))
        else:
            snap = collect_k8s_snapshot(namespace=cfg.namespace, k8s_context=args.context)
        if args.save_snapshot:
            save_snapshot_to_file(snap, Path(args.save_snapshot))
            log.info(f"Snapshot saved to {args.save_snapshot}")

        res = run_estimate(snap, cfg, adjuster)
    except Exception as e:
        log.error(f"Estimation failed: {e}")
        return 1

    if args.out:
        data = json.dumps(to_estimate_response(res).model_dump(), indent=2, sort_keys=True)
        if args.out == "-":
            print(data)
        else:
            Path(args.out).write_text(data, encoding="utf-8")
            log.info(f"Written report to {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main_cli())
