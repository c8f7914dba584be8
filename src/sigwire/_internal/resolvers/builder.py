from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from sigwire._internal.class_locator import ClassLocator
from sigwire._internal.introspection import TypeIntrospector
from sigwire._internal.policies import ClassDependencyPolicy, ParameterContext
from sigwire._internal.registry import NO_OVERRIDES, OverrideParameters, Registry
from sigwire._internal.resolvers.dependencies import DependencyResolver
from sigwire._internal.resolvers.parameters import ParameterResolver
from sigwire._internal.settings import ResolutionSettings
from sigwire.exceptions import SigWireLookupError

logger = logging.getLogger(__name__)

CALL_ON_ATTRIBUTE = "CALL_ON"
"""Class attribute naming the method to call after construction when none is registered."""


@dataclass(frozen=True, slots=True)
class BuildResult:
    """A freshly built instance and the return value of its designated method."""

    instance: Any
    returned: Any = None


@dataclass(slots=True)
class InstanceBuilder:
    """Build class instances and invoke designated post-construction methods."""

    registry: Registry
    introspector: TypeIntrospector
    settings: ResolutionSettings
    class_locator: ClassLocator = field(default_factory=ClassLocator)
    policy: ClassDependencyPolicy = field(default_factory=ClassDependencyPolicy)
    parameter_resolver: ParameterResolver = field(init=False)

    def __post_init__(self) -> None:
        dependency_resolver = DependencyResolver(
            registry=self.registry,
            introspector=self.introspector,
            class_locator=self.class_locator,
            build_instance=self._build_dependency,
        )
        self.parameter_resolver = ParameterResolver(
            dependency_resolver=dependency_resolver,
            settings=self.settings,
        )

    def build(self, cls: type[Any]) -> BuildResult:
        """Construct ``cls`` and run its designated method, if any.

        Args:
            cls: Class to instantiate.

        Raises:
            SigWireLookupError: If the class cannot be instantiated.
            SigWireResolutionError: If a constructor or method parameter cannot be resolved.

        """
        if not self.policy.is_constructible(cls):
            msg = (
                f"Class '{cls.__qualname__}' is abstract or a protocol and cannot be "
                "instantiated."
            )
            raise SigWireLookupError(msg)

        registration = self.registry.find_class(cls)
        instance = self._construct(
            cls,
            registration.constructor_parameters if registration else None,
        )

        method_name = registration.method_name if registration else None
        if method_name is None:
            method_name = getattr(cls, CALL_ON_ATTRIBUTE, None)
        if not isinstance(method_name, str) or not method_name:
            return BuildResult(instance=instance)

        attribute_name = self.introspector.find_method(
            cls,
            method_name,
            allow_private=self.settings.allow_private_method_access,
        )
        if attribute_name is None:
            logger.debug(
                "Skipping designated method '%s': '%s' does not declare it",
                method_name,
                cls.__qualname__,
            )
            return BuildResult(instance=instance)

        returned = self._invoke_method(
            cls,
            instance,
            attribute_name,
            registration.method_parameters if registration else None,
        )
        return BuildResult(instance=instance, returned=returned)

    def invoke(self, function: Callable[..., Any], parameters: OverrideParameters) -> Any:
        """Resolve a free callable's parameters and call it.

        Args:
            function: Callable to invoke.
            parameters: Supplied values for the callable.

        """
        signature = self.introspector.callable_signature(function)
        arguments = self.parameter_resolver.resolve(
            signature,
            parameters,
            ParameterContext.CONSTRUCTOR,
        )
        return arguments.call(function)

    def _construct(self, cls: type[Any], parameters: OverrideParameters | None) -> Any:
        signature = self.introspector.constructor_signature(cls)
        if signature is None:
            return cls()
        arguments = self.parameter_resolver.resolve(
            signature,
            parameters if parameters is not None else NO_OVERRIDES,
            ParameterContext.CONSTRUCTOR,
        )
        return arguments.call(cls)

    def _invoke_method(
        self,
        cls: type[Any],
        instance: Any,
        attribute_name: str,
        parameters: OverrideParameters | None,
    ) -> Any:
        bound_method = getattr(instance, attribute_name)
        signature = self.introspector.method_signature(cls, bound_method, attribute_name)
        arguments = self.parameter_resolver.resolve(
            signature,
            parameters if parameters is not None else NO_OVERRIDES,
            ParameterContext.METHOD,
        )
        logger.debug("Calling '%s.%s'", cls.__qualname__, attribute_name)
        return arguments.call(bound_method)

    def _build_dependency(self, cls: type[Any]) -> Any:
        return self.build(cls).instance
