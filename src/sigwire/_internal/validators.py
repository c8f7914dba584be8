from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from sigwire._internal.policies import ParameterContext
from sigwire._internal.registry import NO_OVERRIDES, OverrideParameters
from sigwire.exceptions import SigWireInvalidRegistrationError


class RegistrationValidator:
    """Validates registration arguments before they reach the registry."""

    def validate_parameters(self, parameters: object) -> OverrideParameters:
        """Return override parameters, rejecting anything but mappings and sequences."""
        if parameters is None:
            return NO_OVERRIDES
        if isinstance(parameters, Mapping):
            non_string_keys = [key for key in parameters if not isinstance(key, str)]
            if non_string_keys:
                msg = f"Override parameter names must be strings, got {non_string_keys!r}."
                raise SigWireInvalidRegistrationError(msg)
            return dict(parameters)
        if isinstance(parameters, Sequence) and not isinstance(parameters, (str, bytes)):
            return tuple(parameters)
        msg = (
            "Override parameters must be a mapping of parameter names to values or a "
            f"sequence of values, got {type(parameters).__name__}."
        )
        raise SigWireInvalidRegistrationError(msg)

    def validate_context(self, context: object) -> ParameterContext:
        """Return the binding context named by ``context``."""
        try:
            return ParameterContext(context)
        except ValueError:
            allowed = ", ".join(f"'{member.value}'" for member in ParameterContext)
            msg = f"'{context}' is an invalid parameter context; expected one of {allowed}."
            raise SigWireInvalidRegistrationError(msg) from None

    def validate_alias(self, alias: object) -> None:
        """Validate that a closure alias is a non-empty string."""
        if not isinstance(alias, str) or not alias:
            msg = f"Closure alias must be a non-empty string, got {alias!r}."
            raise SigWireInvalidRegistrationError(msg)

    def validate_callable(self, function: Any) -> Callable[..., Any]:
        """Validate that a closure is callable."""
        if not callable(function):
            msg = f"Closure must be callable, got {function!r}."
            raise SigWireInvalidRegistrationError(msg)
        return function
