"""
Fixed column schema of the per-run record.

Columns are positional and fixed: 6 phase columns, 22 durations,
22 plan hashes, then the hit ratio.
"""

from common.model.constants import (
    HIT_RATIO,
    PHASE_ANALYZE,
    PHASE_BENCHMARK,
    PHASE_FKEYS,
    PHASE_INDEXES,
    PHASE_LOAD,
    PHASE_PKEYS,
    QUERY_IDS,
)
from common.model.errors import IncompleteAggregate
from common.model.results import RunAggregate
from common.model.types import QueryId
from analysis.outcomes import QueryOutcome, classify_outcome

PHASE_COLUMNS: tuple[tuple[str, str], ...] = (
    ("tpch_load", PHASE_LOAD),
    ("tpch_pkeys", PHASE_PKEYS),
    ("tpch_fkeys", PHASE_FKEYS),
    ("tpch_indexes", PHASE_INDEXES),
    ("tpch_analyze", PHASE_ANALYZE),
    ("tpch_total", PHASE_BENCHMARK),
)

HIT_RATIO_COLUMN: str = "db_cache_hit_ratio"

# placeholder for a query cancelled by the timeout
CANCELLED: str = ""


def duration_column(qid: QueryId) -> str:
    return f"query_{qid}"


def hash_column(qid: QueryId) -> str:
    return f"query_{qid}_hash"


def record_columns(query_ids: tuple[QueryId, ...] = QUERY_IDS) -> tuple[str, ...]:
    return (
        tuple(col for col, _ in PHASE_COLUMNS)
        + tuple(duration_column(q) for q in query_ids)
        + tuple(hash_column(q) for q in query_ids)
        + (HIT_RATIO_COLUMN,)
    )


RECORD_COLUMNS: tuple[str, ...] = record_columns()


def _require_stat(agg: RunAggregate, key: str) -> float:
    if key not in agg.stats:
        raise IncompleteAggregate(f"aggregate has no '{key}' value")
    return agg.stats[key]


def format_duration(duration: float, timeout: float) -> str:
    if classify_outcome(duration, timeout) is QueryOutcome.CANCELLED:
        return CANCELLED
    return f"{duration:.2f}"


def build_record(
    agg: RunAggregate,
    *,
    timeout: float,
    query_ids: tuple[QueryId, ...] = QUERY_IDS,
) -> dict[str, str]:
    """
    Render the aggregate as {column: text} in schema order.
    Raises IncompleteAggregate instead of defaulting any field.
    """
    row: dict[str, str] = {}

    for col, phase in PHASE_COLUMNS:
        row[col] = f"{_require_stat(agg, phase):.2f}"

    missing = [q for q in query_ids if q not in agg.queries]
    if missing:
        raise IncompleteAggregate(f"no recorded result for queries {missing}")

    for q in query_ids:
        row[duration_column(q)] = format_duration(agg.queries[q].duration, timeout)

    for q in query_ids:
        row[hash_column(q)] = agg.queries[q].plan_hash

    row[HIT_RATIO_COLUMN] = f"{_require_stat(agg, HIT_RATIO):.1f}"

    columns = record_columns(query_ids)
    if tuple(row) != columns:
        raise IncompleteAggregate(
            f"record has {len(row)} fields, header declares {len(columns)}"
        )

    return row
