# check_backend.py
from __future__ import annotations

import argparse
import json
from pathlib import Path

import requests

from fargate_calc.api.schema import to_estimate_response
from fargate_calc.config import EstimateConfig
from fargate_calc.sim.estimate import run_estimate
from fargate_calc.snapshot.io import snapshot_from_dict


BASE_URL = "http://localhost:8000"


def load_cli_estimate(data: dict):
    """Считаем снапшот напрямую (без HTTP)."""
    snapshot = snapshot_from_dict(data)
    return to_estimate_response(run_estimate(snapshot, EstimateConfig()))


def fetch_api_estimate(data: dict, base_url: str = BASE_URL):
    """Тот же снапшот через POST /estimate."""
    resp = requests.post(f"{base_url}/estimate", json={"snapshot": data}, timeout=30)
    resp.raise_for_status()
    return resp.json()


def close(a, b, eps=1e-6):
    return abs(a - b) <= eps


def compare_summary(cli_res, api_json) -> bool:
    print("=== SUMMARY ===")
    ok = True
    for key in (
        "fargate_total_hourly_price",
        "ec2_hourly_price",
        "fargate_equivalent_hourly_price",
    ):
        cli_val = getattr(cli_res.summary, key)
        api_val = api_json["summary"][key]
        print(f"{key:34s} CLI {cli_val:.6f}  API {api_val:.6f}")
        ok = ok and close(cli_val, api_val)
    print("SUMMARY OK:", ok)
    print()
    return ok


def compare_pods(cli_res, api_json) -> bool:
    print("=== PODS ===")
    api_pods = {p["pod_id"]: p for p in api_json["pods"]}
    ok = True
    for p in cli_res.pods:
        a = api_pods.get(p.pod_id)
        if a is None:
            print(f"{p.pod_id}: missing in API")
            ok = False
            continue
        if (p.fargate_cpu_m, p.fargate_mem_mi) != (a["fargate_cpu_m"], a["fargate_mem_mi"]):
            print(f"{p.pod_id}: CLI {p.fargate_cpu_m}/{p.fargate_mem_mi} API {a['fargate_cpu_m']}/{a['fargate_mem_mi']}")
            ok = False
    print("PODS OK:", ok)
    return ok


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Compare local estimate with the API answer")
    parser.add_argument("snapshot", help="Snapshot JSON file")
    parser.add_argument("--url", default=BASE_URL)
    args = parser.parse_args()

    data = json.loads(Path(args.snapshot).read_text("utf-8"))
    cli_res = load_cli_estimate(data)
    api_json = fetch_api_estimate(data, args.url)
    ok_summary = compare_summary(cli_res, api_json)
    ok_pods = compare_pods(cli_res, api_json)
    raise SystemExit(0 if ok_summary and ok_pods else 1)
