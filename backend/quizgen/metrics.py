"""
Generation fallback counters, reported by GET /health. Process-local; a multi-worker deployment needs
an external metrics backend.
"""
import threading

# Remote provider failed or timed out and the local pipeline answered instead.
remote_fallbacks_total: int = 0
# Local pipeline failed or produced nothing and the simplified generator answered instead.
local_fallbacks_total: int = 0
_lock = threading.Lock()


def increment_remote_fallbacks_total() -> int:
    global remote_fallbacks_total
    with _lock:
        remote_fallbacks_total += 1
        return remote_fallbacks_total


def increment_local_fallbacks_total() -> int:
    global local_fallbacks_total
    with _lock:
        local_fallbacks_total += 1
        return local_fallbacks_total


def snapshot() -> dict[str, int]:
    """Both counters read under the lock."""
    with _lock:
        return {
            "remote_fallbacks_total": remote_fallbacks_total,
            "local_fallbacks_total": local_fallbacks_total,
        }
