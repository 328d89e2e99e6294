from dataclasses import dataclass
from pathlib import Path

from common.model.constants import DEFAULT_QUERY_TIMEOUT, QUERY_IDS


@dataclass(frozen=True, slots=True)
class CollectConfig:
    input_dir: Path
    output_path: Path
    query_timeout: float = DEFAULT_QUERY_TIMEOUT
    strict_results: bool = False
    query_ids: tuple[int, ...] = QUERY_IDS


@dataclass(frozen=True, slots=True)
class AppConfig:
    cfg: CollectConfig
    verbose: bool = True
