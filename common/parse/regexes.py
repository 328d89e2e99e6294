import re
from dataclasses import dataclass


def _compile(pattern: str, flags: int = 0) -> re.Pattern[str]:
    return re.compile(pattern, flags)


def _pipe_row(*cols: str) -> str:
    """
    Build a psql-aligned row pattern: every column is right-aligned,
    separated by ' | '. A column spec is either a numeric counter name or
    a `name:text` pair for the identifier column.
    """
    parts: list[str] = []
    for col in cols:
        if col.endswith(":text"):
            parts.append(rf"\s+(?P<{col[:-5]}>[a-zA-Z_\-]+)\s+")
        else:
            parts.append(rf"\s+(?P<{col}>[0-9]+)\s")
    # the last column is not followed by a separator
    parts[-1] = parts[-1].removesuffix(r"\s").removesuffix(r"\s+")
    return "^" + r"\|".join(parts)


@dataclass(frozen=True, slots=True)
class _SnapshotRegexes:
    bgwriter_row: re.Pattern[str]
    database_row: re.Pattern[str]


@dataclass(frozen=True, slots=True)
class _ResultsRegexes:
    int_prefix: re.Pattern[str]
    float_prefix: re.Pattern[str]


@dataclass(frozen=True, slots=True)
class _PlanRegexes:
    digit: re.Pattern[str]


@dataclass(frozen=True, slots=True)
class _BenchLogRegexes:
    prepare: re.Pattern[str]
    load: re.Pattern[str]
    pkeys: re.Pattern[str]
    fkeys: re.Pattern[str]
    indexes: re.Pattern[str]
    analyze: re.Pattern[str]
    run: re.Pattern[str]
    finish: re.Pattern[str]


@dataclass(frozen=True, slots=True)
class _ServerLogRegexes:
    checkpoint_start: re.Pattern[str]
    checkpoint_complete: re.Pattern[str]


SNAPSHOT = _SnapshotRegexes(
    bgwriter_row=_compile(
        _pipe_row(
            "checkpoints_timed",
            "checkpoints_req",
            "buffers_checkpoint",
            "buffers_clean",
            "maxwritten_clean",
            "buffers_backend",
            "buffers_alloc",
        )
    ),
    database_row=_compile(
        _pipe_row(
            "datid",
            "datname:text",
            "numbackends",
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
    ),
)

RESULTS = _ResultsRegexes(
    int_prefix=_compile(r"^\s*(?P<num>[+-]?\d+)"),
    float_prefix=_compile(
        r"^\s*(?P<num>[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)"
    ),
)

PLAN = _PlanRegexes(digit=_compile(r"[0-9]"))

# "HH:MM:SS [elapsed] :   message", elapsed is a counter in seconds
_MARKER = r"\d{2}:\d{2}:\d{2} \[(?P<elapsed>\d+)\] :\s+"

BENCH_LOG = _BenchLogRegexes(
    prepare=_compile(_MARKER + r"preparing (?:TPC-H )?database"),
    load=_compile(_MARKER + r"loading data"),
    pkeys=_compile(_MARKER + r"creating primary keys"),
    fkeys=_compile(_MARKER + r"creating foreign keys"),
    indexes=_compile(_MARKER + r"creating indexes"),
    analyze=_compile(_MARKER + r"analyzing"),
    run=_compile(_MARKER + r"running (?:TPC-H )?benchmark"),
    finish=_compile(_MARKER + r"finished (?:TPC-H )?benchmark"),
)

_SERVER_PREFIX = (
    r"^(?P<date>\d{4}-\d{2}-\d{2}) (?P<time>\d{2}:\d{2}:\d{2})\.(?P<ms>\d{3}) "
    r"[A-Z]+ \d+ :[a-z0-9]+\.[a-z0-9]+\s+LOG:\s+"
)

SERVER_LOG = _ServerLogRegexes(
    checkpoint_start=_compile(_SERVER_PREFIX + r"checkpoint starting: (?P<cause>.*)$"),
    checkpoint_complete=_compile(
        _SERVER_PREFIX + r"checkpoint complete: wrote (?P<buffers>\d+) buffers"
    ),
)
