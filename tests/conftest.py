from dataclasses import dataclass, field
from pathlib import Path

import pytest

from common.model.constants import BGWRITER_COUNTERS, DATABASE_COUNTERS, QUERY_IDS

BENCH_LOG = """\
Mon Oct 12 10:00:00 CEST 2026
10:00:00 [0] : preparing TPC-H database
10:00:00 [0] :   loading data
10:05:00 [300] :   creating primary keys
10:06:00 [360] :   creating foreign keys
10:06:30 [390] :   creating indexes
10:10:00 [600] :   analyzing
10:11:00 [660] : running TPC-H benchmark
10:12:00 [720] :   query 1 done
11:00:00 [3600] : finished TPC-H benchmark
"""

PLAN = """\
 Sort  (cost=2944.20..2944.21 rows=6 width=236)
   Sort Key: l_returnflag, l_linestatus
   ->  HashAggregate  (cost=2944.04..2944.12 rows=6 width=236)
         ->  Seq Scan on lineitem  (cost=0.00..1794.15 rows=59949 width=25)
"""


def snapshot_text(bgwriter: dict[str, int], database: dict[str, int]) -> str:
    """
    psql-style output of pg_stat_bgwriter followed by pg_stat_database.
    """
    bg_values = [bgwriter[c] for c in BGWRITER_COUNTERS]
    db_values = [database[c] for c in DATABASE_COUNTERS]

    bg_row = " " + " | ".join(f"{v:>17}" for v in bg_values)
    db_row = (
        f" {16384:>5} | {'tpch':<7} | {1:>11} | "
        + " | ".join(f"{v:>11}" for v in db_values)
    )

    return "\n".join(
        [
            " checkpoints_timed | checkpoints_req | buffers_checkpoint | ...",
            "-------------------+-----------------+--------------------+----",
            bg_row,
            "(1 row)",
            "",
            " datid | datname | numbackends | xact_commit | xact_rollback | ...",
            "-------+---------+-------------+-------------+---------------+----",
            db_row,
            "(1 row)",
            "",
        ]
    )


def counters(bg: int = 0, db: int = 0, **overrides: int) -> tuple[dict[str, int], dict[str, int]]:
    bgwriter = {c: bg for c in BGWRITER_COUNTERS}
    database = {c: db for c in DATABASE_COUNTERS}
    for k, v in overrides.items():
        if k in bgwriter:
            bgwriter[k] = v
        else:
            database[k] = v
    return bgwriter, database


@dataclass(slots=True)
class RunDirBuilder:
    root: Path
    before: tuple[dict[str, int], dict[str, int]] = field(
        default_factory=lambda: counters(blocks_hit=0, blocks_read=0)
    )
    after: tuple[dict[str, int], dict[str, int]] = field(
        default_factory=lambda: counters(bg=5, db=50, blocks_hit=90, blocks_read=10)
    )
    results: dict[int, float] = field(
        default_factory=lambda: {q: 10.0 + q for q in QUERY_IDS}
    )
    bench_log: str = BENCH_LOG

    def build(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        (self.root / "stats-before.log").write_text(snapshot_text(*self.before))
        (self.root / "stats-after.log").write_text(snapshot_text(*self.after))

        lines = [f"{q}={d}" for q, d in self.results.items()]
        (self.root / "results.log").write_text("\n".join(lines) + "\n")

        explain = self.root / "explain"
        explain.mkdir(exist_ok=True)
        for q in self.results:
            (explain / str(q)).write_text(PLAN)

        (self.root / "bench.log").write_text(self.bench_log)
        return self.root


@pytest.fixture
def run_builder(tmp_path: Path) -> RunDirBuilder:
    return RunDirBuilder(root=tmp_path / "run")


@pytest.fixture
def run_dir(run_builder: RunDirBuilder) -> Path:
    return run_builder.build()
