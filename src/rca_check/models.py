"""Data models for rust-code-analysis space trees and check-run annotations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple

# Name rust-code-analysis-cli gives to spaces without an identifier
ANONYMOUS_NAME = "<anonymous>"
UNNAMED_LABEL = "unnamed space"


def _number(value: Any) -> float | int:
    # bool is an int subclass; a metric is never a flag
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {value!r}")
    return value


def _metric(value: Any) -> Optional[float | int]:
    # the tool writes NaN metrics (e.g. on empty spaces) as null
    if value is None:
        return None
    return _number(value)


@dataclass(frozen=True)
class Cyclomatic:
    sum: Optional[float]
    average: Optional[float]

    @classmethod
    def from_dict(cls, data: dict) -> Cyclomatic:
        return cls(sum=_metric(data["sum"]), average=_metric(data["average"]))


@dataclass(frozen=True)
class Halstead:
    n1: Optional[float]
    N1: Optional[float]
    n2: Optional[float]
    N2: Optional[float]
    length: Optional[float]
    estimated_program_length: Optional[float]
    purity_ratio: Optional[float]
    vocabulary: Optional[float]
    volume: Optional[float]
    difficulty: Optional[float]
    level: Optional[float]
    effort: Optional[float]
    time: Optional[float]
    bugs: Optional[float]

    @classmethod
    def from_dict(cls, data: dict) -> Halstead:
        return cls(**{name: _metric(data[name]) for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class Loc:
    sloc: Optional[float]
    ploc: Optional[float]
    lloc: Optional[float]
    cloc: Optional[float]
    blank: Optional[float]

    @classmethod
    def from_dict(cls, data: dict) -> Loc:
        return cls(**{name: _metric(data[name]) for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class Nom:
    functions: Optional[float]
    closures: Optional[float]
    total: Optional[float]

    @classmethod
    def from_dict(cls, data: dict) -> Nom:
        return cls(**{name: _metric(data[name]) for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class MaintainabilityIndex:
    mi_original: Optional[float]
    mi_sei: Optional[float]
    mi_visual_studio: Optional[float]

    @classmethod
    def from_dict(cls, data: dict) -> MaintainabilityIndex:
        return cls(**{name: _metric(data[name]) for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class Metrics:
    """Metrics bundle attached to exactly one space.

    Values are carried through as reported; nothing here checks that they
    are consistent with each other.
    """

    nargs: Optional[float]
    nexits: Optional[float]
    cognitive: Optional[float]
    cyclomatic: Cyclomatic
    halstead: Halstead
    loc: Loc
    nom: Nom
    mi: MaintainabilityIndex

    @classmethod
    def from_dict(cls, data: dict) -> Metrics:
        return cls(
            nargs=_metric(data["nargs"]),
            nexits=_metric(data["nexits"]),
            cognitive=_metric(data["cognitive"]),
            cyclomatic=Cyclomatic.from_dict(data["cyclomatic"]),
            halstead=Halstead.from_dict(data["halstead"]),
            loc=Loc.from_dict(data["loc"]),
            nom=Nom.from_dict(data["nom"]),
            mi=MaintainabilityIndex.from_dict(data["mi"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "nargs": self.nargs,
            "nexits": self.nexits,
            "cognitive": self.cognitive,
            "cyclomatic": dict(vars(self.cyclomatic)),
            "halstead": dict(vars(self.halstead)),
            "loc": dict(vars(self.loc)),
            "nom": dict(vars(self.nom)),
            "mi": dict(vars(self.mi)),
        }


@dataclass(frozen=True)
class Space:
    """One lexical scope: a whole file, or a function/closure/impl inside it.

    The top-level space of each record is the file itself; its ``name`` is
    the file path. ``spaces`` holds the nested scopes in source order.
    """

    name: Optional[str]
    kind: str
    start_line: int
    end_line: int
    metrics: Metrics
    spaces: Tuple[Space, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> Space:
        """Decode a whole space tree.

        Raises:
            KeyError, TypeError, ValueError: If any node lacks the expected shape
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        name = data["name"]
        if name is not None and not isinstance(name, str):
            raise TypeError(f"space name must be a string, got {name!r}")
        children = data["spaces"]
        if not isinstance(children, list):
            raise TypeError("spaces must be a list")
        return cls(
            name=name,
            kind=str(data["kind"]),
            start_line=int(_number(data["start_line"])),
            end_line=int(_number(data["end_line"])),
            metrics=Metrics.from_dict(data["metrics"]),
            spaces=tuple(cls.from_dict(child) for child in children),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "kind": self.kind,
            "spaces": [child.to_dict() for child in self.spaces],
            "metrics": self.metrics.to_dict(),
        }

    @property
    def is_leaf(self) -> bool:
        return not self.spaces

    @property
    def display_name(self) -> str:
        """Name to show to humans; anonymous spaces get a readable label."""
        if not self.name or self.name == ANONYMOUS_NAME:
            return UNNAMED_LABEL
        return self.name

    def walk(self) -> Iterator[Space]:
        """Yield every descendant depth-first in document order (self excluded)."""
        for child in self.spaces:
            yield child
            yield from child.walk()


@dataclass(frozen=True)
class Annotation:
    """A check-run annotation tying a message to a line range of one file."""

    path: str
    start_line: int
    end_line: int
    annotation_level: str
    title: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "annotation_level": self.annotation_level,
            "title": self.title,
            "message": self.message,
        }
