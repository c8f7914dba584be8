from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar, overload

from typing_extensions import Self

from sigwire._internal.class_locator import ClassLocator, ClassReference
from sigwire._internal.introspection import SignatureIntrospector, TypeIntrospector
from sigwire._internal.policies import BindingMode, ParameterContext
from sigwire._internal.registry import NO_OVERRIDES, OverrideParameters, Registry
from sigwire._internal.resolvers.builder import BuildResult, InstanceBuilder
from sigwire._internal.settings import ResolutionSettings
from sigwire._internal.validators import RegistrationValidator
from sigwire.exceptions import (
    SigWireClosureNotRegisteredError,
    SigWireInvalidRegistrationError,
    SigWireMethodNotFoundError,
)

F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger(__name__)


class Container:
    """Register override parameters and build objects by reading their signatures.

    Classes are built by inspecting constructor parameters. Every parameter
    whose declared type is a non-builtin class is built recursively, unless it
    declares a default or an instance of the same class was already bound
    earlier in the same parameter list. Other parameters take the registered
    override values, then their defaults.

    Nothing is cached: ``get_instance``, ``call_method`` and nested
    dependencies always produce new objects. A class may also designate a
    method to call right after construction, either through
    ``register_method`` or a ``CALL_ON`` class attribute.
    """

    def __init__(
        self,
        *,
        binding_mode: BindingMode = BindingMode.NAMED,
        allow_private_method_access: bool = False,
        introspector: TypeIntrospector | None = None,
    ) -> None:
        """Initialize a container with an empty registry.

        Args:
            binding_mode: How override values are matched to parameters.
            allow_private_method_access: Allow designated methods whose names
                start with an underscore.
            introspector: Custom ``TypeIntrospector``; defaults to
                ``SignatureIntrospector``.

        Examples:
            .. code-block:: python

                container = Container()

                positional_container = Container(binding_mode=BindingMode.POSITIONAL)

        """
        self._settings = ResolutionSettings(
            binding_mode=BindingMode(binding_mode),
            allow_private_method_access=allow_private_method_access,
        )
        self._registry = Registry()
        self._class_locator = ClassLocator()
        self._validator = RegistrationValidator()
        self._introspector: TypeIntrospector = introspector or SignatureIntrospector()
        self._builder = InstanceBuilder(
            registry=self._registry,
            introspector=self._introspector,
            settings=self._settings,
            class_locator=self._class_locator,
        )

    @property
    def binding_mode(self) -> BindingMode:
        """Return the active binding mode."""
        return self._settings.binding_mode

    @property
    def private_method_access_allowed(self) -> bool:
        """Return whether non-public designated methods may be invoked."""
        return self._settings.allow_private_method_access

    # region Registration Methods
    def register_class(
        self,
        cls: ClassReference,
        parameters: OverrideParameters | None = None,
    ) -> Self:
        """Register constructor override parameters for a class.

        Re-registering the same class replaces the previous constructor
        parameters and keeps any registered method.

        Args:
            cls: Class or dotted class path.
            parameters: Override values for the constructor, by name or in order.

        Raises:
            SigWireClassNotFoundError: If ``cls`` does not name a class.
            SigWireInvalidRegistrationError: If ``parameters`` is not a mapping
                or a sequence.

        Examples:
            .. code-block:: python

                container.register_class(Mailer, {"host": "smtp.example.com"})
                mailer = container.get_instance(Mailer)

        """
        resolved_cls = self._class_locator.locate(cls)
        normalized = self._validator.validate_parameters(parameters)
        self._registry.register_constructor(resolved_cls, normalized)
        logger.debug("Registered constructor parameters for '%s'", resolved_cls.__qualname__)
        return self

    def register_method(
        self,
        cls: ClassReference,
        method: str,
        parameters: OverrideParameters | None = None,
    ) -> Self:
        """Designate the method called after construction and its override parameters.

        A registered method takes precedence over the class's ``CALL_ON``
        attribute.

        Args:
            cls: Class or dotted class path.
            method: Method name declared by the class.
            parameters: Override values for the method, by name or in order.

        Raises:
            SigWireClassNotFoundError: If ``cls`` does not name a class.
            SigWireMethodNotFoundError: If the class does not declare ``method``.
            SigWireInvalidRegistrationError: If ``method`` is empty or
                ``parameters`` is not a mapping or a sequence.

        """
        resolved_cls = self._class_locator.locate(cls)
        if not isinstance(method, str) or not method:
            msg = f"register_method() parameter 'method' must be a non-empty string, got {method!r}."
            raise SigWireInvalidRegistrationError(msg)
        if self._introspector.find_method(resolved_cls, method, allow_private=True) is None:
            msg = f"Class '{resolved_cls.__qualname__}' does not declare method '{method}'."
            raise SigWireMethodNotFoundError(msg)

        normalized = self._validator.validate_parameters(parameters)
        self._registry.register_method(resolved_cls, method, normalized)
        logger.debug("Registered method '%s.%s'", resolved_cls.__qualname__, method)
        return self

    @overload
    def register_closure(
        self,
        alias: str,
        function: Callable[..., Any],
        parameters: OverrideParameters | None = None,
    ) -> Self: ...

    @overload
    def register_closure(
        self,
        alias: str,
        function: None = None,
        parameters: OverrideParameters | None = None,
    ) -> Callable[[F], F]: ...

    def register_closure(
        self,
        alias: str,
        function: Callable[..., Any] | None = None,
        parameters: OverrideParameters | None = None,
    ) -> Self | Callable[[F], F]:
        """Register a callable under an alias for ``call_closure``.

        Supports direct calls and decorator form.

        Args:
            alias: Name used to call the closure.
            function: Callable to register, or ``None`` to return a decorator.
            parameters: Override values for the callable, by name or in order.

        Returns:
            The container in direct mode or a decorator in decorator mode.

        Raises:
            SigWireInvalidRegistrationError: If ``alias`` is empty, ``function``
                is not callable, or ``parameters`` is not a mapping or a sequence.

        Examples:
            .. code-block:: python

                @container.register_closure("greet", parameters={"name": "Ada"})
                def greet(name: str, clock: Clock) -> str:
                    return f"{clock.now()}: hello {name}"


                container.call_closure("greet")

        """
        self._validator.validate_alias(alias)
        normalized = self._validator.validate_parameters(parameters)

        def decorator(decorated: F) -> F:
            self.register_closure(alias, decorated, normalized)
            return decorated

        if function is None:
            return decorator

        self._validator.validate_callable(function)
        self._registry.register_closure(alias, function, normalized)
        logger.debug("Registered closure '%s'", alias)
        return self

    def register_param_to_class(
        self,
        context: ParameterContext | str,
        bindings: Mapping[str, ClassReference],
    ) -> Self:
        """Bind parameter names to classes for parameters without a usable type.

        Bindings apply only when a parameter has no non-builtin declared type.
        Context-specific bindings (``constructor`` or ``method``) are consulted
        before ``common`` bindings. Registering a context again replaces all of
        its bindings.

        Args:
            context: ``constructor``, ``method`` or ``common``.
            bindings: Mapping of parameter name to class or dotted class path.

        Raises:
            SigWireInvalidRegistrationError: If ``context`` is not one of the
                three contexts or ``bindings`` is not a mapping.

        Examples:
            .. code-block:: python

                container.register_param_to_class("common", {"mailer": Mailer})

        """
        resolved_context = self._validator.validate_context(context)
        if not isinstance(bindings, Mapping):
            msg = (
                "register_param_to_class() parameter 'bindings' must be a mapping of "
                f"parameter names to classes, got {type(bindings).__name__}."
            )
            raise SigWireInvalidRegistrationError(msg)
        self._registry.set_type_bindings(resolved_context, bindings)
        logger.debug(
            "Registered %d %s parameter binding(s)",
            len(bindings),
            resolved_context.value,
        )
        return self

    def allow_private_method_access(self) -> Self:
        """Allow designated methods whose names start with an underscore."""
        self._settings.allow_private_method_access = True
        logger.info("Private method access enabled")
        return self

    def disable_named_parameter(self) -> Self:
        """Match override values to parameters by order instead of by name.

        In positional mode the next unconsumed override value goes to the next
        parameter that is not satisfied by building a class dependency.
        """
        self._settings.binding_mode = BindingMode.POSITIONAL
        logger.info("Switched to positional parameter binding")
        return self

    # endregion Registration Methods

    # region Resolution Methods
    def get_instance(self, cls: ClassReference) -> Any:
        """Build a new instance of ``cls`` with all dependencies wired.

        The designated method, if any, is also called; its return value is
        discarded.

        Args:
            cls: Class or dotted class path.

        Returns:
            A new instance.

        Raises:
            SigWireLookupError: If the class cannot be found or built.
            SigWireResolutionError: If a parameter cannot be resolved.

        """
        return self._build(cls).instance

    def call_method(self, cls: ClassReference) -> Any:
        """Build ``cls`` and return what its designated method returns.

        Args:
            cls: Class or dotted class path.

        Returns:
            The designated method's return value, or ``None`` when the class has
            no designated method.

        Raises:
            SigWireLookupError: If the class or method cannot be found or built.
            SigWireResolutionError: If a parameter cannot be resolved.

        """
        return self._build(cls).returned

    def call_closure(self, closure: str | Callable[..., Any]) -> Any:
        """Resolve a callable's parameters and call it.

        Args:
            closure: Registered alias, or a callable to invoke without overrides.

        Returns:
            The callable's return value.

        Raises:
            SigWireClosureNotRegisteredError: If an alias is not registered.
            SigWireResolutionError: If a parameter cannot be resolved.

        """
        if isinstance(closure, str):
            registration = self._registry.find_closure(closure)
            if registration is None:
                msg = f"Closure '{closure}' is not registered."
                raise SigWireClosureNotRegisteredError(msg)
            return self._builder.invoke(registration.function, registration.parameters)

        self._validator.validate_callable(closure)
        return self._builder.invoke(closure, NO_OVERRIDES)

    # endregion Resolution Methods

    def _build(self, cls: ClassReference) -> BuildResult:
        return self._builder.build(self._class_locator.locate(cls))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(binding_mode={self._settings.binding_mode.value!r}, "
            f"allow_private_method_access={self._settings.allow_private_method_access!r})"
        )


__all__ = ["Container"]
