from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, TypeAlias


@dataclass(frozen=True, slots=True)
class Resolved:
    """The parameter is a class dependency and an instance was built for it."""

    instance: Any


@dataclass(frozen=True, slots=True)
class UseDefault:
    """The parameter is a class dependency but declares a default; bind the default."""


@dataclass(frozen=True, slots=True)
class NotAClassDependency:
    """The parameter is not satisfied by building a class; fall back to supplied values."""


USE_DEFAULT: Final = UseDefault()
NOT_A_CLASS_DEPENDENCY: Final = NotAClassDependency()

DependencyOutcome: TypeAlias = Resolved | UseDefault | NotAClassDependency
