# fargate_calc/api/server.py
from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..snapshot.collector import collect_k8s_snapshot
from ..snapshot.io import snapshot_from_dict
from ..sim.estimate import run_estimate
from ..sim.tiers import tiers
from .schema import EstimateRequest, EstimateResponse, SettingsModel, TierModel, to_estimate_response

app = FastAPI(title="fargate-calculator")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

log = logging.getLogger("uvicorn")

# --- Endpoints ---

@app.get("/tiers", response_model=List[TierModel])
def list_tiers() -> List[TierModel]:
    return [
        TierModel(cpu_m=t.cpu_m, memory_options_mi=list(t.memory_options_mi))
        for t in tiers()
    ]

@app.post("/estimate", response_model=EstimateResponse)
def estimate_snapshot(req: EstimateRequest) -> EstimateResponse:
    try:
        snap = snapshot_from_dict(req.snapshot)
    except (TypeError, ValueError, AttributeError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid snapshot: {e}")
    res = run_estimate(snap, req.settings.to_config(snap.namespace))
    return to_estimate_response(res)

@app.get("/estimate", response_model=EstimateResponse)
def estimate_cluster(
    namespace: str = "",
    use_requests_only: bool = False,
    assume_optimization: bool = False,
    exclude_daemonsets: bool = True,
    exclude_istio_proxy: bool = True,
) -> EstimateResponse:
    settings = SettingsModel(
        use_requests_only=use_requests_only,
        assume_optimization=assume_optimization,
        exclude_daemonsets=exclude_daemonsets,
        exclude_istio_proxy=exclude_istio_proxy,
    )
    try:
        snap = collect_k8s_snapshot(namespace=namespace)
    except Exception as e:
        log.error(f"Failed to capture cluster: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    res = run_estimate(snap, settings.to_config(namespace))
    return to_estimate_response(res)
