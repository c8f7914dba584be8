from __future__ import annotations

import types
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_non_public_name(name: str) -> bool:
    """Return true for attribute names that are private by convention.

    Args:
        name: Attribute name to check.

    """
    return name.startswith("_") and not (name.startswith("__") and name.endswith("__"))


def is_protocol_class(candidate: type[Any]) -> bool:
    """Return true for ``typing.Protocol`` subclasses that declare a protocol.

    Args:
        candidate: Class to check.

    """
    return bool(getattr(candidate, "_is_protocol", False))


def supports_instance_checks(candidate: type[Any]) -> bool:
    """Return true when ``isinstance(value, candidate)`` cannot raise ``TypeError``.

    Protocols support instance checks only when decorated with ``@runtime_checkable``.

    Args:
        candidate: Class to check.

    """
    if not is_protocol_class(candidate):
        return True
    return bool(getattr(candidate, "_is_runtime_protocol", False))


__all__ = [
    "is_non_public_name",
    "is_protocol_class",
    "is_runtime_class",
    "supports_instance_checks",
]
