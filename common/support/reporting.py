import sys
from dataclasses import dataclass
from typing import Protocol, TextIO


class Reporter(Protocol):
    def info(self, msg: str) -> None: ...


@dataclass(frozen=True, slots=True)
class PrintReporter:
    stream: TextIO | None = None

    def info(self, msg: str) -> None:
        print(msg, file=self.stream if self.stream is not None else sys.stdout)


@dataclass(frozen=True, slots=True)
class NullReporter:
    def info(self, msg: str) -> None:
        return
