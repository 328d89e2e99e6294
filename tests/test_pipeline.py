from pathlib import Path

import pytest

from common.model.config import CollectConfig
from common.model.errors import (
    ConfigurationError,
    DivisionByZero,
    IncompleteAggregate,
    MalformedSnapshot,
    MissingArtifact,
)
from export.record import RECORD_COLUMNS
from pipeline import aggregate_run, execute_pipeline
from parsers.plan import plan_hash

from conftest import RunDirBuilder, counters


class ListReporter:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def info(self, msg: str) -> None:
        self.messages.append(msg)


def test_aggregate_merges_stats_and_phases(run_dir: Path):
    agg = aggregate_run(run_dir)

    assert agg.stats["blocks_hit"] == 90
    assert agg.stats["blocks_read"] == 10
    assert agg.stats["hit_ratio"] == 90.0
    assert agg.stats["checkpoints_timed"] == 5
    assert agg.stats["load"] == 300
    assert agg.stats["benchmark"] == 2940
    assert sorted(agg.queries) == list(range(1, 23))
    assert agg.queries[5].duration == 15.0
    assert agg.queries[5].plan_hash == plan_hash(run_dir / "explain" / "5")


def test_end_to_end_writes_header_and_record(run_dir: Path, tmp_path: Path):
    out = tmp_path / "result.csv"
    rep = ListReporter()

    execute_pipeline(CollectConfig(input_dir=run_dir, output_path=out), reporter=rep)

    header, row = out.read_text().splitlines()
    assert header.split(";") == list(RECORD_COLUMNS)
    fields = row.split(";")
    assert len(fields) == len(RECORD_COLUMNS)
    assert fields[:6] == ["300.00", "60.00", "30.00", "210.00", "60.00", "2940.00"]
    assert fields[6] == "11.00"
    assert fields[-1] == "90.0"
    assert any("22 completed, 0 cancelled" in m for m in rep.messages)


def test_timeout_marks_slow_queries_cancelled(run_builder: RunDirBuilder, tmp_path: Path):
    run_builder.results[3] = 300.0
    run_builder.results[4] = 299.5
    run_dir = run_builder.build()
    out = tmp_path / "result.csv"

    execute_pipeline(CollectConfig(input_dir=run_dir, output_path=out))

    fields = out.read_text().splitlines()[1].split(";")
    assert fields[RECORD_COLUMNS.index("query_3")] == ""
    assert fields[RECORD_COLUMNS.index("query_4")] == "299.50"
    assert len(fields[RECORD_COLUMNS.index("query_3_hash")]) == 32


def test_configured_timeout_is_used(run_dir: Path, tmp_path: Path):
    out = tmp_path / "result.csv"

    execute_pipeline(CollectConfig(input_dir=run_dir, output_path=out, query_timeout=20))

    fields = out.read_text().splitlines()[1].split(";")
    assert fields[RECORD_COLUMNS.index("query_9")] == "19.00"
    assert fields[RECORD_COLUMNS.index("query_10")] == ""


def test_existing_output_is_refused(run_dir: Path, tmp_path: Path):
    out = tmp_path / "result.csv"
    out.write_text("previous;run\n")

    with pytest.raises(ConfigurationError):
        execute_pipeline(CollectConfig(input_dir=run_dir, output_path=out))

    assert out.read_text() == "previous;run\n"


def test_missing_input_dir_is_refused(tmp_path: Path):
    with pytest.raises(ConfigurationError, match="does not exist"):
        execute_pipeline(
            CollectConfig(input_dir=tmp_path / "nope", output_path=tmp_path / "o.csv")
        )


def test_input_must_be_a_directory(tmp_path: Path):
    f = tmp_path / "file"
    f.write_text("")

    with pytest.raises(ConfigurationError, match="not a directory"):
        execute_pipeline(CollectConfig(input_dir=f, output_path=tmp_path / "o.csv"))


@pytest.mark.parametrize("timeout", [0.0, -1.0, float("nan"), float("inf")])
def test_unusable_timeout_is_refused(run_dir: Path, tmp_path: Path, timeout: float):
    out = tmp_path / "o.csv"

    with pytest.raises(ConfigurationError, match="timeout"):
        execute_pipeline(
            CollectConfig(input_dir=run_dir, output_path=out, query_timeout=timeout)
        )

    assert not out.exists()


def test_output_parent_must_exist(run_dir: Path, tmp_path: Path):
    with pytest.raises(ConfigurationError):
        execute_pipeline(
            CollectConfig(input_dir=run_dir, output_path=tmp_path / "x" / "o.csv")
        )


def test_missing_query_result_writes_nothing(run_builder: RunDirBuilder, tmp_path: Path):
    del run_builder.results[17]
    run_dir = run_builder.build()
    out = tmp_path / "result.csv"

    with pytest.raises(IncompleteAggregate):
        execute_pipeline(CollectConfig(input_dir=run_dir, output_path=out))

    assert not out.exists()


def test_missing_phase_writes_nothing(run_builder: RunDirBuilder, tmp_path: Path):
    run_builder.bench_log = "10:00:00 [0] :   loading data\n"
    run_dir = run_builder.build()
    out = tmp_path / "result.csv"

    with pytest.raises(IncompleteAggregate):
        execute_pipeline(CollectConfig(input_dir=run_dir, output_path=out))

    assert not out.exists()


def test_zero_block_activity_writes_nothing(run_builder: RunDirBuilder, tmp_path: Path):
    run_builder.after = counters(bg=5, db=50, blocks_hit=0, blocks_read=0)
    run_dir = run_builder.build()
    out = tmp_path / "result.csv"

    with pytest.raises(DivisionByZero):
        execute_pipeline(CollectConfig(input_dir=run_dir, output_path=out))

    assert not out.exists()


def test_corrupt_snapshot_writes_nothing(run_dir: Path, tmp_path: Path):
    (run_dir / "stats-after.log").write_text("garbage\n")
    out = tmp_path / "result.csv"

    with pytest.raises(MalformedSnapshot):
        execute_pipeline(CollectConfig(input_dir=run_dir, output_path=out))

    assert not out.exists()


def test_missing_plan_writes_nothing(run_dir: Path, tmp_path: Path):
    (run_dir / "explain" / "8").unlink()
    out = tmp_path / "result.csv"

    with pytest.raises(MissingArtifact):
        execute_pipeline(CollectConfig(input_dir=run_dir, output_path=out))

    assert not out.exists()


def test_checkpoint_summary_is_reported(run_dir: Path, tmp_path: Path):
    (run_dir / "pg.log").write_text(
        "2026-10-12 10:00:01.123 CEST 4242 :5f2a.1   LOG:  checkpoint starting: time\n"
        "2026-10-12 10:02:31.456 CEST 4242 :5f2a.2   LOG:  checkpoint complete: wrote 1500 buffers\n"
    )
    rep = ListReporter()

    execute_pipeline(
        CollectConfig(input_dir=run_dir, output_path=tmp_path / "o.csv"), reporter=rep
    )

    assert any(
        m.startswith("Checkpoints: 1 started, 1 completed, 1500 buffers") for m in rep.messages
    )
