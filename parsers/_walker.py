from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

from common.model.errors import MissingArtifact


@dataclass(frozen=True, slots=True)
class ParsedLine:
    log_path: Path
    lineno: int
    text: str


LineHandler = Callable[[ParsedLine], None]


class LineWalker(Protocol):
    def __call__(self, *, log_path: Path, on_line: LineHandler) -> None: ...


def read_lines(path: Path) -> list[str]:
    """
    Read a required artifact as a list of lines (newlines kept).
    """
    if not path.is_file():
        raise MissingArtifact(f"required file not found: {path}")
    with path.open("r", errors="replace") as f:
        return f.readlines()


def walk_lines(*, log_path: Path, on_line: LineHandler) -> None:
    """
    Walk a required text artifact and emit ParsedLine items to a caller-supplied handler.
    """
    if not log_path.is_file():
        raise MissingArtifact(f"required file not found: {log_path}")

    with log_path.open("r", errors="replace") as f:
        for lineno, line in enumerate(f, start=1):
            on_line(
                ParsedLine(
                    log_path=log_path,
                    lineno=lineno,
                    text=line.rstrip("\n"),
                )
            )
