from __future__ import annotations

import datetime
import decimal
import inspect
import pathlib
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeGuard

from sigwire._internal.type_checks import is_protocol_class, is_runtime_class


class ParameterContext(str, Enum):
    """Scope of a named parameter-to-class binding."""

    CONSTRUCTOR = "constructor"
    """Apply to constructor parameters and free callables."""

    METHOD = "method"
    """Apply to parameters of designated post-construction methods."""

    COMMON = "common"
    """Apply everywhere, after the context-specific bindings."""


class BindingMode(str, Enum):
    """How supplied override values are matched to parameters."""

    NAMED = "named"
    """Look supplied values up by parameter name."""

    POSITIONAL = "positional"
    """Consume supplied values in order, skipping auto-built class parameters."""


@dataclass(frozen=True, slots=True)
class ClassDependencyPolicy:
    """Internal policy deciding whether a declared type denotes a buildable class."""

    ignored_base_types: tuple[type[Any], ...] = (
        pathlib.PurePath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
    )

    def is_class_dependency(self, candidate: object) -> TypeGuard[type[Any]]:
        """Return true when a declared type can be auto-built by the container.

        Args:
            candidate: Declared parameter type being checked.

        """
        if candidate is Any or not is_runtime_class(candidate):
            return False
        if candidate.__module__ == "builtins":
            return False
        if issubclass(candidate, type):
            return False
        return not issubclass(candidate, self.ignored_base_types)

    def is_constructible(self, candidate: type[Any]) -> bool:
        """Return true when the class can be instantiated.

        Abstract classes and protocol classes are rejected.
        """
        return not inspect.isabstract(candidate) and not is_protocol_class(candidate)
