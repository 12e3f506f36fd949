"""
Stage result: a value on success or a failure reason. The generation facade dispatches fallbacks on
failure outcomes instead of letting exceptions cascade through the pipeline.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: T | None = None
    error: str | None = None
    stage: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T, stage: str = "") -> "Outcome[T]":
        return cls(value=value, stage=stage)

    @classmethod
    def failure(cls, error: str, stage: str = "") -> "Outcome[T]":
        return cls(error=error, stage=stage)

    def then(self, stage: str, fn: Callable[[T], U]) -> "Outcome[U]":
        """Run the next stage on success; a failure passes through untouched."""
        if not self.ok:
            return self  # type: ignore[return-value]
        return run_stage(stage, fn, self.value)


def run_stage(stage: str, fn: Callable[..., T], *args) -> Outcome[T]:
    """Call fn and capture any error as a failure outcome tagged with the stage name."""
    try:
        return Outcome.success(fn(*args), stage=stage)
    except Exception as e:
        logger.warning("Stage %s failed: %s", stage, e, exc_info=True)
        return Outcome.failure(f"{type(e).__name__}: {e}", stage=stage)
