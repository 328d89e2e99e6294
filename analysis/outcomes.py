from dataclasses import dataclass
from enum import Enum

from common.model.results import QueryResult
from common.model.types import QueryId


class QueryOutcome(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def classify_outcome(duration: float, timeout: float) -> QueryOutcome:
    """
    A query that ran for the whole timeout was cancelled by the driver.
    """
    if duration >= timeout:
        return QueryOutcome.CANCELLED
    return QueryOutcome.COMPLETED


def capped_duration(duration: float, timeout: float) -> float:
    return min(float(duration), timeout)


@dataclass(frozen=True, slots=True)
class QuerySummary:
    completed: tuple[QueryId, ...]
    cancelled: tuple[QueryId, ...]
    missing: tuple[QueryId, ...]
    capped_total: float


def summarize_queries(
    queries: dict[QueryId, QueryResult],
    *,
    timeout: float,
    query_ids: tuple[QueryId, ...],
) -> QuerySummary:
    completed: list[QueryId] = []
    cancelled: list[QueryId] = []
    missing: list[QueryId] = []
    total = 0.0

    for qid in query_ids:
        res = queries.get(qid)
        if res is None:
            missing.append(qid)
            continue

        total += capped_duration(res.duration, timeout)
        match classify_outcome(res.duration, timeout):
            case QueryOutcome.COMPLETED:
                completed.append(qid)
            case QueryOutcome.CANCELLED:
                cancelled.append(qid)

    return QuerySummary(
        completed=tuple(completed),
        cancelled=tuple(cancelled),
        missing=tuple(missing),
        capped_total=total,
    )
