"""Result type for explicit, stage-by-stage error handling.

Every release stage returns either ``Ok(value)`` or ``Err(error)``. The
orchestrator inspects the result and stops at the first ``Err``, so no
stage needs to raise and no caller needs a try/except around a stage.

Usage:
    def read_version(path: Path) -> Result[str, str]:
        if not path.exists():
            return Err(f"missing {path.name}")
        return Ok("1.4.0")

    match read_version(Path("package.json")):
        case Ok(version):
            print(f"releasing v{version}")
        case Err(reason):
            print(f"cannot release: {reason}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        """No error to transform; returns self."""
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Transform the error, e.g. to tag it with the stage that failed."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]
