from dataclasses import dataclass, field
from typing import TypeAlias

from common.model.constants import HIT_RATIO
from common.model.types import CounterName, PhaseName, PlanHash, QueryId


@dataclass(frozen=True, slots=True)
class StatsDelta:
    """Counter deltas between the before and after snapshots."""

    counters: dict[CounterName, int]
    hit_ratio: float

    def as_dict(self) -> dict[str, float]:
        out: dict[str, float] = dict(self.counters)
        out[HIT_RATIO] = self.hit_ratio
        return out


@dataclass(frozen=True, slots=True)
class QueryResult:
    duration: float
    plan_hash: PlanHash


PhaseDurations: TypeAlias = dict[PhaseName, int]


@dataclass(frozen=True, slots=True)
class RunAggregate:
    """
    Everything known about one run: stats deltas and phase durations share
    one namespace in `stats`, per-query results live in `queries`.
    """

    stats: dict[str, float]
    queries: dict[QueryId, QueryResult] = field(default_factory=dict)
