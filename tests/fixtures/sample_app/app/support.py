"""Case metadata and enum mixins."""

from abc import abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Label:
    text: str


@dataclass(frozen=True)
class Badge:
    color: str = "gray"


class Deprecated:
    def __init__(self) -> None:
        self.since = "2.0"


class Unbuildable:
    def __init__(self) -> None:
        raise RuntimeError("cannot build")


class HasLabel:
    def display_name(self) -> str:
        return str(self.name).title()  # type: ignore[attr-defined]


class HasColor:
    @abstractmethod
    def color(self) -> str: ...
