from collections import Counter
from threading import Lock
from typing import Dict, Counter as CounterType

_metrics: CounterType[str] = Counter()
_lock = Lock()


def _inc(key: str) -> None:
    with _lock:
        _metrics[key] += 1


def record_cart_transition(status: str) -> None:
    _inc(status)


def record_checkout_session(source: str) -> None:
    _inc(f"checkout_sessions_{source}")


def record_gate_rejection(subject: str) -> None:
    _inc(f"gate_rejections_{subject}")


def snapshot() -> Dict[str, int]:
    with _lock:
        return dict(_metrics)


def reset() -> None:
    with _lock:
        _metrics.clear()
