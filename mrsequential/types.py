"""Core data structures shared by the map, grouping and reduce stages."""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, NamedTuple, Tuple


class KeyValue(NamedTuple):
    """Intermediate record emitted by the map function."""

    key: str
    value: str


class Group(NamedTuple):
    """All values emitted for one key, in post-sort order."""

    key: str
    values: Tuple[str, ...]


class OutputRecord(NamedTuple):
    """One reduced result per distinct key."""

    key: str
    value: str

    def format_line(self) -> str:
        return f"{self.key} {self.value}\n"


MapFunction = Callable[[str, str], Iterable[Any]]
ReduceFunction = Callable[[str, list], Any]


@dataclass(frozen=True)
class TransformPair:
    """The application-specific map and reduce callables for one job."""

    map_function: MapFunction
    reduce_function: ReduceFunction
    source: str = "<inline>"

    def __str__(self):
        return f"TransformPair({self.source})"
