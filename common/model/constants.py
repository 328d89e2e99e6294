STATS_BEFORE_FILE: str = "stats-before.log"
STATS_AFTER_FILE: str = "stats-after.log"
RESULTS_FILE: str = "results.log"
EXPLAIN_DIR: str = "explain"
BENCH_LOG_FILE: str = "bench.log"
SERVER_LOG_FILE: str = "pg.log"

# 0-based line offsets of the data rows inside a stats snapshot
BGWRITER_ROW_LINE: int = 2
DATABASE_ROW_LINE: int = 7

DEFAULT_QUERY_TIMEOUT: float = 300.0
QUERY_IDS: tuple[int, ...] = tuple(range(1, 23))

BGWRITER_COUNTERS: tuple[str, ...] = (
    "checkpoints_timed",
    "checkpoints_req",
    "buffers_checkpoint",
    "buffers_clean",
    "maxwritten_clean",
    "buffers_backend",
    "buffers_alloc",
)

DATABASE_COUNTERS: tuple[str, ...] = (
    "xact_commit",
    "xact_rollback",
    "blocks_read",
    "blocks_hit",
    "tuples_returned",
    "tuples_fetched",
    "tuples_inserted",
    "tuples_updated",
    "tuples_deleted",
)

STATS_COUNTERS: tuple[str, ...] = BGWRITER_COUNTERS + DATABASE_COUNTERS

HIT_RATIO: str = "hit_ratio"

PHASE_LOAD: str = "load"
PHASE_PKEYS: str = "pkeys"
PHASE_FKEYS: str = "fkeys"
PHASE_INDEXES: str = "indexes"
PHASE_ANALYZE: str = "analyze"
PHASE_BENCHMARK: str = "benchmark"

PHASES: tuple[str, ...] = (
    PHASE_LOAD,
    PHASE_PKEYS,
    PHASE_FKEYS,
    PHASE_INDEXES,
    PHASE_ANALYZE,
    PHASE_BENCHMARK,
)

RECORD_SEP: str = ";"
