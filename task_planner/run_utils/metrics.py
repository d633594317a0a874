import threading
from typing import Any, Dict

_lock = threading.Lock()
_METRICS: Dict[str, Any] = {}


def reset() -> None:
    with _lock:
        _METRICS.clear()
        _METRICS["degradations"] = {}
        _METRICS["provider"] = {"ok": 0, "failed": 0, "latency_ms_total": 0.0}
        _METRICS["plans_created"] = 0


def record_degradation(reason: str) -> None:
    with _lock:
        d = _METRICS["degradations"]
        d[reason] = d.get(reason, 0) + 1


def record_provider_call(ok: bool, latency_ms: float) -> None:
    with _lock:
        p = _METRICS["provider"]
        p["ok" if ok else "failed"] += 1
        p["latency_ms_total"] += float(latency_ms)


def record_plan_created() -> None:
    with _lock:
        _METRICS["plans_created"] += 1


def snapshot() -> Dict[str, Any]:
    with _lock:
        p = dict(_METRICS["provider"])
        calls = p["ok"] + p["failed"]
        p["latency_ms_avg"] = round(p["latency_ms_total"] / calls, 2) if calls else 0.0
        return {
            "degradations": dict(_METRICS["degradations"]),
            "provider": p,
            "plansCreated": _METRICS["plans_created"],
        }


reset()
