import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypedDict

import pandas as pd

from common.parse.regexes import SERVER_LOG
from parsers._walker import LineWalker, ParsedLine, walk_lines


class _CheckpointRow(TypedDict):
    start: pd.Timestamp
    end: pd.Timestamp | None
    cause: str
    buffers: int | None


OUT_COLS = pd.Index(["start", "end", "cause", "buffers"])


def _ts(m: re.Match[str]) -> pd.Timestamp | None:
    try:
        return pd.Timestamp(f"{m.group('date')} {m.group('time')}.{m.group('ms')}")
    except ValueError:
        return None


@dataclass(slots=True)
class CheckpointCollector:
    rows: list[_CheckpointRow] = field(default_factory=list)

    def on_line(self, pl: ParsedLine) -> None:
        text = pl.text.strip()

        m = SERVER_LOG.checkpoint_start.match(text)
        if m:
            start = _ts(m)
            if start is not None:
                self.rows.append(
                    {"start": start, "end": None, "cause": m.group("cause"), "buffers": None}
                )
            return

        m = SERVER_LOG.checkpoint_complete.match(text)
        if m and self.rows and self.rows[-1]["end"] is None:
            end = _ts(m)
            if end is None:
                return
            self.rows[-1]["end"] = end
            self.rows[-1]["buffers"] = int(m.group("buffers"))

    def finalize(self) -> pd.DataFrame:
        if not self.rows:
            return pd.DataFrame(columns=OUT_COLS)
        return pd.DataFrame(self.rows).reindex(columns=OUT_COLS)


def parse_checkpoints(log_path: Path, *, walker: LineWalker = walk_lines) -> pd.DataFrame:
    """
    Checkpoints found in a PostgreSQL server log, one row per 'checkpoint starting'.
    `end`/`buffers` stay empty for a checkpoint that never completed.
    """
    collector = CheckpointCollector()
    walker(log_path=log_path, on_line=collector.on_line)
    return collector.finalize()
