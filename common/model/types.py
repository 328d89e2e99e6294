from typing import TypeAlias
from pathlib import Path
from dataclasses import dataclass

QueryId: TypeAlias = int
PhaseName: TypeAlias = str
CounterName: TypeAlias = str
PlanHash: TypeAlias = str


@dataclass(frozen=True, slots=True)
class RunInput:
    """
    Paths of the artifacts inside one benchmark run directory.
    """

    root: Path
    stats_before: Path
    stats_after: Path
    results_log: Path
    explain_dir: Path
    bench_log: Path
    server_log: Path

    def plan_path(self, query_id: QueryId) -> Path:
        return self.explain_dir / str(query_id)
