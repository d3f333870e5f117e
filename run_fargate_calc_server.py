# run_fargate_calc_server.py
import argparse
import logging
import time
import uvicorn
from pathlib import Path

from fargate_calc.snapshot.collector import collect_k8s_snapshot
from fargate_calc.snapshot.io import save_snapshot_to_file

# Настраиваем логирование для лаунчера
logging.basicConfig(level=logging.INFO)
log = logging.getLogger("launcher")

def capture_new_snapshot(namespace: str = ""):
    """
    Снимает pod'ы/ноды из кластера и сохраняет в папку snapshots/,
    чтобы потом можно было отправить их в POST /estimate.
    """
    log.info("Capturing new snapshot on startup...")
    try:
        snap = collect_k8s_snapshot(namespace=namespace)

        root_dir = Path(__file__).resolve().parent
        snapshots_dir = root_dir / "snapshots"
        snapshots_dir.mkdir(parents=True, exist_ok=True)

        file_path = snapshots_dir / f"k8s-{int(time.time())}.json"
        save_snapshot_to_file(snap, file_path)
        log.info(f"Snapshot successfully saved to: {file_path}")

    except Exception as e:
        log.error(f"Failed to capture snapshot: {e}")
        # Сервер должен подняться даже если кластер недоступен

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fargate calculator API launcher")

    parser.add_argument(
        "--capture",
        action="store_true",
        help="Capture a K8s snapshot to snapshots/ before starting the server"
    )
    parser.add_argument("--namespace", default="", help="Namespace for --capture")

    # Стандартные настройки uvicorn
    parser.add_argument("--host", default="0.0.0.0", help="Bind host")
    parser.add_argument("--port", type=int, default=8000, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    if args.capture:
        capture_new_snapshot(args.namespace)

    uvicorn.run(
        "fargate_calc.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
