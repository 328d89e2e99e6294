from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, TypeAlias

from common.model.errors import MalformedResultsLine
from common.model.results import QueryResult
from common.model.types import PlanHash, QueryId, RunInput
from common.parse.coerce import coerce_float, coerce_int, strict_float, strict_int
from common.support.reporting import NullReporter, Reporter
from parsers._walker import LineWalker, ParsedLine, walk_lines
from parsers.plan import plan_hash

PlanHasher: TypeAlias = Callable[[Path], PlanHash]


@dataclass(frozen=True, slots=True)
class ResultLine:
    query_id: QueryId
    duration: float
    coerced: bool


def decode_result_line(text: str, *, strict: bool = False) -> ResultLine | None:
    """
    Decode '<query_id>=<duration>'. Lines without '=' are not results.

    Garbled lines (a driver killed mid-write) are coerced to a leading
    number or zero unless `strict` is set.
    """
    if "=" not in text:
        return None

    raw_id, raw_duration = text.split("=")[:2]

    qid = strict_int(raw_id)
    duration = strict_float(raw_duration)
    if qid is not None and duration is not None:
        return ResultLine(query_id=qid, duration=duration, coerced=False)

    if strict:
        raise MalformedResultsLine(f"unparsable results line: {text!r}")

    return ResultLine(
        query_id=qid if qid is not None else coerce_int(raw_id),
        duration=duration if duration is not None else coerce_float(raw_duration),
        coerced=True,
    )


@dataclass(slots=True)
class ResultsCollector:
    run: RunInput
    strict: bool
    hasher: PlanHasher
    reporter: Reporter
    queries: dict[QueryId, QueryResult] = field(default_factory=dict)

    def on_line(self, pl: ParsedLine) -> None:
        try:
            rec = decode_result_line(pl.text, strict=self.strict)
        except MalformedResultsLine as e:
            raise MalformedResultsLine(f"{pl.log_path}:{pl.lineno}: {e}") from None
        if rec is None:
            return

        if rec.coerced:
            self.reporter.info(
                f"WARNING: {pl.log_path}:{pl.lineno}: coerced {pl.text!r} "
                f"to query {rec.query_id} = {rec.duration}"
            )

        self.queries[rec.query_id] = QueryResult(
            duration=rec.duration,
            plan_hash=self.hasher(self.run.plan_path(rec.query_id)),
        )

    def finalize(self) -> dict[QueryId, QueryResult]:
        return dict(sorted(self.queries.items()))


def load_queries(
    run: RunInput,
    *,
    strict: bool = False,
    reporter: Reporter | None = None,
    walker: LineWalker = walk_lines,
    hasher: PlanHasher = plan_hash,
) -> dict[QueryId, QueryResult]:
    rep: Reporter = reporter if reporter is not None else NullReporter()
    collector = ResultsCollector(run=run, strict=strict, hasher=hasher, reporter=rep)

    walker(log_path=run.results_log, on_line=collector.on_line)

    return collector.finalize()
