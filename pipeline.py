from __future__ import annotations

import math
from pathlib import Path

from common.model.config import CollectConfig
from common.model.constants import (
    BENCH_LOG_FILE,
    EXPLAIN_DIR,
    RESULTS_FILE,
    SERVER_LOG_FILE,
    STATS_AFTER_FILE,
    STATS_BEFORE_FILE,
)
from common.model.errors import ConfigurationError
from common.model.results import RunAggregate
from common.model.types import RunInput
from common.support.reporting import NullReporter, Reporter
from analysis.outcomes import summarize_queries
from export.writers import append_record
from parsers.checkpoints import parse_checkpoints
from parsers.results import load_queries
from parsers.snapshot import load_stats
from parsers.timeline import parse_timeline


def resolve_run(input_dir: Path) -> RunInput:
    return RunInput(
        root=input_dir,
        stats_before=input_dir / STATS_BEFORE_FILE,
        stats_after=input_dir / STATS_AFTER_FILE,
        results_log=input_dir / RESULTS_FILE,
        explain_dir=input_dir / EXPLAIN_DIR,
        bench_log=input_dir / BENCH_LOG_FILE,
        server_log=input_dir / SERVER_LOG_FILE,
    )


def check_paths(cfg: CollectConfig) -> None:
    """
    Refuse to start unless the input is a directory and the output is new.
    """
    if not cfg.input_dir.exists():
        raise ConfigurationError(f"input directory '{cfg.input_dir}' does not exist")
    if not cfg.input_dir.is_dir():
        raise ConfigurationError(f"is not a directory: '{cfg.input_dir}'")
    if cfg.output_path.exists():
        raise ConfigurationError(f"output file '{cfg.output_path}' already exists")
    if not cfg.output_path.parent.is_dir():
        raise ConfigurationError(
            f"output directory '{cfg.output_path.parent}' does not exist"
        )
    if not math.isfinite(cfg.query_timeout) or cfg.query_timeout <= 0:
        raise ConfigurationError(
            f"query timeout must be a positive, finite number: {cfg.query_timeout}"
        )


def load_run(
    run: RunInput, *, strict: bool = False, reporter: Reporter | None = None
) -> RunAggregate:
    """
    Stats deltas and query results, before the shell log is consulted.
    """
    rep: Reporter = reporter if reporter is not None else NullReporter()

    stats = load_stats(run.stats_before, run.stats_after)
    queries = load_queries(run, strict=strict, reporter=rep)

    return RunAggregate(stats=stats.as_dict(), queries=queries)


def add_phases(
    agg: RunAggregate, log_path: Path, *, reporter: Reporter | None = None
) -> RunAggregate:
    phases = parse_timeline(log_path, reporter=reporter)
    return RunAggregate(stats=agg.stats | phases, queries=agg.queries)


def aggregate_run(
    input_dir: Path, *, strict: bool = False, reporter: Reporter | None = None
) -> RunAggregate:
    run = resolve_run(input_dir)
    agg = load_run(run, strict=strict, reporter=reporter)
    return add_phases(agg, run.bench_log, reporter=reporter)


def _report_checkpoints(run: RunInput, rep: Reporter) -> None:
    if not run.server_log.is_file():
        return

    cps = parse_checkpoints(run.server_log)
    if cps.empty:
        rep.info(f"No checkpoints found in {run.server_log}")
        return

    done = cps.dropna(subset=["end"])
    causes = ", ".join(f"{c}={n}" for c, n in cps["cause"].value_counts().items())
    rep.info(
        f"Checkpoints: {len(cps)} started, {len(done)} completed, "
        f"{int(done['buffers'].sum())} buffers written ({causes})"
    )


def execute_pipeline(cfg: CollectConfig, *, reporter: Reporter | None = None) -> RunAggregate:
    """
    Orchestrates one run: check paths -> aggregate -> append record.
    """
    rep: Reporter = reporter if reporter is not None else NullReporter()

    check_paths(cfg)
    rep.info(f"input directory: {cfg.input_dir}")
    rep.info(f"output file: {cfg.output_path}")

    rep.info("1. Aggregating run artifacts...")
    agg = aggregate_run(cfg.input_dir, strict=cfg.strict_results, reporter=rep)

    rep.info("2. Summarizing...")
    _report_checkpoints(resolve_run(cfg.input_dir), rep)

    summary = summarize_queries(
        agg.queries, timeout=cfg.query_timeout, query_ids=cfg.query_ids
    )
    rep.info(
        f"Queries: {len(summary.completed)} completed, "
        f"{len(summary.cancelled)} cancelled (timeout {cfg.query_timeout:g}s), "
        f"capped total {summary.capped_total:.2f}s"
    )

    rep.info("3. Writing record...")
    append_record(
        agg, cfg.output_path, timeout=cfg.query_timeout, query_ids=cfg.query_ids
    )
    rep.info(f"Record written to: {cfg.output_path}")

    return agg
