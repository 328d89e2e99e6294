from pathlib import Path

import pandas as pd

from common.model.constants import QUERY_IDS, RECORD_SEP
from common.model.results import RunAggregate
from common.model.types import QueryId
from export.record import build_record, record_columns


def _needs_header(path: Path) -> bool:
    return not path.exists() or path.stat().st_size == 0


def append_record(
    agg: RunAggregate,
    path: Path,
    *,
    timeout: float,
    query_ids: tuple[QueryId, ...] = QUERY_IDS,
) -> None:
    """
    Append one semicolon-separated record to `path`, writing the header
    first when the file is new or empty.

    The row is fully formatted before the file is opened, so a failure
    leaves `path` untouched.
    """
    row = build_record(agg, timeout=timeout, query_ids=query_ids)
    df = pd.DataFrame([row], columns=pd.Index(record_columns(query_ids)))

    df.to_csv(
        path,
        sep=RECORD_SEP,
        mode="a",
        header=_needs_header(path),
        index=False,
        lineterminator="\n",
    )
