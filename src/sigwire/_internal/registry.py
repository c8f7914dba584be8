from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from sigwire._internal.class_locator import ClassReference
from sigwire._internal.policies import ParameterContext

OverrideParameters: TypeAlias = Mapping[str, Any] | Sequence[Any]
"""Supplied values for a parameter list, keyed by name or given in order."""

NO_OVERRIDES: OverrideParameters = ()


@dataclass(slots=True)
class ClassRegistration:
    """Override parameters and the designated method registered for one class."""

    constructor_parameters: OverrideParameters | None = None
    """Values supplied to the constructor, or ``None`` when not registered."""
    method_name: str | None = None
    """Designated post-construction method, or ``None`` when not registered."""
    method_parameters: OverrideParameters | None = None
    """Values supplied to the designated method."""


@dataclass(frozen=True, slots=True)
class ClosureRegistration:
    """A callable registered under an alias with its override parameters."""

    function: Callable[..., Any]
    parameters: OverrideParameters = NO_OVERRIDES


@dataclass(slots=True)
class Registry:
    """Store class, closure, and type-binding registrations.

    Keys are unique: registering the same class slot, alias, or binding context
    again replaces the previous entry. The registry holds no instances.
    """

    _classes: dict[type[Any], ClassRegistration] = field(default_factory=dict)
    _closures: dict[str, ClosureRegistration] = field(default_factory=dict)
    _type_bindings: dict[ParameterContext, dict[str, ClassReference]] = field(
        default_factory=dict,
    )

    def register_constructor(self, cls: type[Any], parameters: OverrideParameters) -> None:
        """Set constructor override parameters for a class.

        Args:
            cls: Class whose constructor receives the overrides.
            parameters: Supplied values for the constructor.

        """
        self._classes.setdefault(cls, ClassRegistration()).constructor_parameters = parameters

    def register_method(
        self,
        cls: type[Any],
        method_name: str,
        parameters: OverrideParameters,
    ) -> None:
        """Set the designated method and its override parameters for a class.

        Args:
            cls: Class whose method is designated.
            method_name: Name of the method invoked after construction.
            parameters: Supplied values for the method.

        """
        registration = self._classes.setdefault(cls, ClassRegistration())
        registration.method_name = method_name
        registration.method_parameters = parameters

    def register_closure(
        self,
        alias: str,
        function: Callable[..., Any],
        parameters: OverrideParameters,
    ) -> None:
        """Store a callable under an alias.

        Args:
            alias: Name used by ``call_closure``.
            function: Callable to invoke.
            parameters: Supplied values for the callable.

        """
        self._closures[alias] = ClosureRegistration(function=function, parameters=parameters)

    def set_type_bindings(
        self,
        context: ParameterContext,
        bindings: Mapping[str, ClassReference],
    ) -> None:
        """Replace the parameter-name-to-class bindings of a context.

        Args:
            context: Binding context to replace.
            bindings: Mapping of parameter name to class or dotted class path.

        """
        self._type_bindings[context] = dict(bindings)

    def find_class(self, cls: type[Any]) -> ClassRegistration | None:
        """Return the registration of a class, if any.

        Args:
            cls: Class to look up.

        """
        return self._classes.get(cls)

    def find_closure(self, alias: str) -> ClosureRegistration | None:
        """Return the closure registered under an alias, if any.

        Args:
            alias: Alias to look up.

        """
        return self._closures.get(alias)

    def find_type_binding(
        self,
        context: ParameterContext,
        parameter_name: str,
    ) -> ClassReference | None:
        """Return the class bound to a parameter name in a context, if any.

        Args:
            context: Binding context to search.
            parameter_name: Parameter name to look up.

        """
        return self._type_bindings.get(context, {}).get(parameter_name)
