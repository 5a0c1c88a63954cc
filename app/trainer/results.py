"""Stage result types for the generation pipeline.

Each model-backed stage returns a ``StageResult`` instead of raising, so the
orchestrator composes values and logs outcomes without try/except branching.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

T = TypeVar("T")

StageStatus = Literal["ok", "empty", "fallback"]


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Outcome of one pipeline stage.

    - ok: the stage produced its intended value
    - empty: the stage produced nothing usable (value is an empty container)
    - fallback: the stage failed and ``value`` is a deterministic substitute
    """

    status: StageStatus
    value: T
    error: str | None = None

    @classmethod
    def ok(cls, value: T) -> StageResult[T]:
        return cls(status="ok", value=value)

    @classmethod
    def empty(cls, value: T, error: str | None = None) -> StageResult[T]:
        return cls(status="empty", value=value, error=error)

    @classmethod
    def fallback(cls, value: T, error: str | None = None) -> StageResult[T]:
        return cls(status="fallback", value=value, error=error)

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"
