from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from inspect import Parameter
from typing import Any

from sigwire._internal.introspection import CallableSignature, ParameterInfo
from sigwire._internal.policies import BindingMode, ParameterContext
from sigwire._internal.registry import OverrideParameters
from sigwire._internal.resolvers.dependencies import DependencyResolver
from sigwire._internal.resolvers.outcomes import Resolved, UseDefault
from sigwire._internal.settings import ResolutionSettings
from sigwire.exceptions import SigWireResolutionError

logger = logging.getLogger(__name__)

_MISSING: Any = object()


@dataclass(slots=True)
class ResolvedArguments:
    """Final argument values for one parameter list, in declaration order."""

    parameters: tuple[ParameterInfo, ...] = ()
    values: dict[str, Any] = field(default_factory=dict)
    instances_resolved: int = 0
    """How many parameters the dependency resolver satisfied (built or defaulted)."""

    @property
    def args(self) -> tuple[Any, ...]:
        """Values for positional-only and positional-or-keyword parameters."""
        return tuple(
            self.values[parameter.name]
            for parameter in self.parameters
            if parameter.kind is not Parameter.KEYWORD_ONLY
        )

    @property
    def kwargs(self) -> dict[str, Any]:
        """Values for keyword-only parameters."""
        return {
            parameter.name: self.values[parameter.name]
            for parameter in self.parameters
            if parameter.kind is Parameter.KEYWORD_ONLY
        }

    def call(self, function: Callable[..., Any]) -> Any:
        """Call ``function`` with the resolved arguments.

        Args:
            function: Callable matching the resolved signature.

        """
        return function(*self.args, **self.kwargs)


@dataclass(slots=True)
class ParameterResolver:
    """Bind a callable's whole parameter list to concrete values."""

    dependency_resolver: DependencyResolver
    settings: ResolutionSettings

    def resolve(
        self,
        signature: CallableSignature,
        supplied: OverrideParameters,
        context: ParameterContext,
    ) -> ResolvedArguments:
        """Produce a value for every parameter of ``signature``.

        Each parameter is first offered to the dependency resolver. Parameters it
        does not satisfy take the supplied value, else the declared default.

        Args:
            signature: Parameters to bind.
            supplied: Override values, by name in named mode or in order in
                positional mode.
            context: ``constructor`` or ``method``; selects type bindings.

        Raises:
            SigWireResolutionError: If a parameter has no class dependency, no
                supplied value and no default.

        """
        binding_mode = self.settings.binding_mode
        named_values, ordered_values = self._normalize_supplied(signature, supplied, binding_mode)
        resolved = ResolvedArguments(parameters=signature.parameters)
        frame = resolved.values

        for parameter in signature.parameters:
            outcome = self.dependency_resolver.resolve(signature, parameter, frame, context)
            if isinstance(outcome, Resolved):
                frame[parameter.name] = outcome.instance
                resolved.instances_resolved += 1
                continue
            if isinstance(outcome, UseDefault):
                source = "supplied" if parameter.name in named_values else "default"
                frame[parameter.name] = named_values.get(parameter.name, parameter.default)
                resolved.instances_resolved += 1
                self._log_binding(signature, parameter, source)
                continue

            if binding_mode is BindingMode.POSITIONAL:
                index = parameter.position - resolved.instances_resolved
                value = ordered_values[index] if index < len(ordered_values) else _MISSING
            else:
                value = named_values.get(parameter.name, _MISSING)

            source = "supplied"
            if value is _MISSING and parameter.has_default:
                value = parameter.default
                source = "default"
            elif value is _MISSING:
                msg = (
                    f"Resolution failed: parameter '{parameter.name}' of "
                    f"'{signature.qualified_name}' has no class dependency, no default "
                    "and no supplied value."
                )
                raise SigWireResolutionError(
                    msg,
                    parameter_name=parameter.name,
                    callable_name=signature.qualified_name,
                )
            frame[parameter.name] = value
            self._log_binding(signature, parameter, source)

        logger.debug(
            "Resolved %d parameter(s) of '%s' (%d from dependencies)",
            len(frame),
            signature.qualified_name,
            resolved.instances_resolved,
        )
        return resolved

    def _log_binding(
        self,
        signature: CallableSignature,
        parameter: ParameterInfo,
        source: str,
    ) -> None:
        logger.debug(
            "Bound parameter '%s' of '%s' from %s value",
            parameter.name,
            signature.qualified_name,
            source,
        )

    def _normalize_supplied(
        self,
        signature: CallableSignature,
        supplied: OverrideParameters,
        binding_mode: BindingMode,
    ) -> tuple[Mapping[str, Any], Sequence[Any]]:
        if binding_mode is BindingMode.POSITIONAL:
            if isinstance(supplied, Mapping):
                return {}, list(supplied.values())
            return {}, list(supplied)

        if isinstance(supplied, Mapping):
            return supplied, ()
        if not supplied:
            return {}, ()
        msg = (
            f"Parameters for '{signature.qualified_name}' were supplied as a sequence, "
            "but named binding is enabled. Pass a mapping of parameter names or call "
            "disable_named_parameter()."
        )
        raise SigWireResolutionError(msg, callable_name=signature.qualified_name)
