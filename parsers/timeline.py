"""
Phase durations from the benchmark driver's shell log (bench.log).

The driver prints one marker line per preparation step, each carrying an
elapsed-seconds counter:

    10:01:02 [100] : preparing TPC-H database
    10:01:02 [100] :   loading data
    10:01:52 [150] :   creating primary keys
    ...
    11:30:00 [5500] : finished TPC-H benchmark

A marker that closes a phase yields `counter - previous counter` under the
phase name bound to it in PHASE_MARKERS. Precondition: markers appear in
table order and at most once each. The scanner reports violations but does
not reorder, so a shuffled log still produces wrong attributions.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from common.model.constants import (
    PHASE_ANALYZE,
    PHASE_BENCHMARK,
    PHASE_FKEYS,
    PHASE_INDEXES,
    PHASE_LOAD,
    PHASE_PKEYS,
)
from common.model.results import PhaseDurations
from common.model.types import PhaseName
from common.parse.regexes import BENCH_LOG
from common.support.reporting import NullReporter, Reporter
from parsers._walker import LineWalker, ParsedLine, walk_lines


@dataclass(frozen=True, slots=True)
class PhaseMarker:
    name: str
    pattern: re.Pattern[str]
    closes: PhaseName | None


# Table order is the expected log order.
PHASE_MARKERS: tuple[PhaseMarker, ...] = (
    PhaseMarker("prepare", BENCH_LOG.prepare, None),
    PhaseMarker("load", BENCH_LOG.load, None),
    PhaseMarker("pkeys", BENCH_LOG.pkeys, PHASE_LOAD),
    PhaseMarker("fkeys", BENCH_LOG.fkeys, PHASE_PKEYS),
    PhaseMarker("indexes", BENCH_LOG.indexes, PHASE_FKEYS),
    PhaseMarker("analyze", BENCH_LOG.analyze, PHASE_INDEXES),
    PhaseMarker("run", BENCH_LOG.run, PHASE_ANALYZE),
    PhaseMarker("finish", BENCH_LOG.finish, PHASE_BENCHMARK),
)


@dataclass(frozen=True, slots=True)
class MarkerHit:
    index: int
    marker: PhaseMarker
    elapsed: int


def match_marker(
    text: str, markers: tuple[PhaseMarker, ...] = PHASE_MARKERS
) -> MarkerHit | None:
    for i, marker in enumerate(markers):
        m = marker.pattern.search(text)
        if m:
            return MarkerHit(index=i, marker=marker, elapsed=int(m.group("elapsed")))
    return None


@dataclass(slots=True)
class TimelineScanner:
    markers: tuple[PhaseMarker, ...]
    reporter: Reporter
    cursor: int = 0
    expected: int = 0
    phases: PhaseDurations = field(default_factory=dict)

    def on_line(self, pl: ParsedLine) -> None:
        hit = match_marker(pl.text, self.markers)
        if hit is None:
            return

        if hit.index < self.expected:
            self.reporter.info(
                f"WARNING: {pl.log_path}:{pl.lineno}: marker '{hit.marker.name}' "
                f"out of sequence, phase attribution may be wrong"
            )
        self.expected = hit.index + 1

        if hit.marker.closes is not None:
            self.phases[hit.marker.closes] = hit.elapsed - self.cursor
        self.cursor = hit.elapsed

    def finalize(self) -> PhaseDurations:
        return dict(self.phases)


def parse_timeline(
    log_path: Path,
    *,
    reporter: Reporter | None = None,
    walker: LineWalker = walk_lines,
    markers: tuple[PhaseMarker, ...] = PHASE_MARKERS,
) -> PhaseDurations:
    rep: Reporter = reporter if reporter is not None else NullReporter()
    scanner = TimelineScanner(markers=markers, reporter=rep)

    walker(log_path=log_path, on_line=scanner.on_line)

    return scanner.finalize()
