import re
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

import pandas as pd

from common.model.constants import (
    BGWRITER_COUNTERS,
    BGWRITER_ROW_LINE,
    DATABASE_COUNTERS,
    DATABASE_ROW_LINE,
    STATS_COUNTERS,
)
from common.model.errors import DivisionByZero, MalformedSnapshot
from common.model.results import StatsDelta
from common.parse.regexes import SNAPSHOT
from parsers._walker import read_lines


def _match_row(
    lines: list[str],
    *,
    lineno: int,
    pattern: re.Pattern[str],
    counters: tuple[str, ...],
    path: Path,
) -> dict[str, int]:
    if lineno >= len(lines):
        raise MalformedSnapshot(
            f"{path}: expected a data row at line {lineno + 1}, file has {len(lines)} lines"
        )

    m = pattern.match(lines[lineno])
    if not m:
        raise MalformedSnapshot(
            f"{path}:{lineno + 1}: row does not match the expected columns: {lines[lineno].rstrip()!r}"
        )

    return {name: int(m.group(name)) for name in counters}


def parse_snapshot(path: Path) -> pd.Series:
    """
    Read one stats snapshot (pg_stat_bgwriter + pg_stat_database reports)
    into an int64 Series indexed by counter name.
    """
    lines = read_lines(path)

    values = _match_row(
        lines,
        lineno=BGWRITER_ROW_LINE,
        pattern=SNAPSHOT.bgwriter_row,
        counters=BGWRITER_COUNTERS,
        path=path,
    )
    values |= _match_row(
        lines,
        lineno=DATABASE_ROW_LINE,
        pattern=SNAPSHOT.database_row,
        counters=DATABASE_COUNTERS,
        path=path,
    )

    return pd.Series(values, dtype="int64").reindex(pd.Index(STATS_COUNTERS))


def hit_ratio(blocks_hit: int, blocks_read: int) -> float:
    """
    Percentage of block requests served from shared buffers, 1 decimal.
    """
    total = blocks_hit + blocks_read
    if total == 0:
        raise DivisionByZero(
            "cache hit ratio undefined: no blocks were read or hit during the run"
        )
    ratio = Decimal(str(100.0 * blocks_hit / total))
    return float(ratio.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def diff_snapshots(before: pd.Series, after: pd.Series) -> StatsDelta:
    """
    after - before for every counter. Negative deltas (counter resets) pass through.
    """
    idx = pd.Index(STATS_COUNTERS)
    delta = after.reindex(idx) - before.reindex(idx)
    if delta.isna().any():
        missing = [str(k) for k in delta.index[delta.isna()]]
        raise MalformedSnapshot(f"counters missing from one snapshot: {missing}")

    counters = {str(k): int(v) for k, v in delta.items()}

    return StatsDelta(
        counters=counters,
        hit_ratio=hit_ratio(counters["blocks_hit"], counters["blocks_read"]),
    )


def load_stats(before_path: Path, after_path: Path) -> StatsDelta:
    return diff_snapshots(parse_snapshot(before_path), parse_snapshot(after_path))
