from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from typing_extensions import Self

from sigwire._internal.class_locator import ClassReference
from sigwire._internal.container import Container
from sigwire._internal.policies import ParameterContext
from sigwire._internal.registry import OverrideParameters
from sigwire._internal.validators import RegistrationValidator
from sigwire.exceptions import SigWireContainerNotSetError

F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _RegistrationOperation:
    """Container registration operation replayed by ContainerContext."""

    description: str
    apply: Callable[[Container], object]


@dataclass(frozen=True, slots=True)
class _ContextState:
    """Binding and recorded operations captured by ``ContainerContext._snapshot``."""

    container: Container | None
    operations: tuple[_RegistrationOperation, ...]


class ContainerContext:
    """Proxy registrations and resolution through a process-global container.

    ``ContainerContext`` supports a deferred-registration workflow: registrations
    called before binding are recorded and replayed when ``set_current`` binds an
    actual container. Resolution APIs still require a bound container.

    The binding is process-global for this instance (not task-local/thread-local),
    which is convenient for application startup but important for tests that run
    in parallel. Call ``reset`` to end the binding.
    """

    def __init__(self) -> None:
        self._container: Container | None = None
        self._operations: list[_RegistrationOperation] = []
        self._validator = RegistrationValidator()

    def set_current(self, container: Container) -> None:
        """Bind the active container and replay all deferred registrations.

        Args:
            container: Container to bind as the active target.

        Notes:
            Existing recorded operations are replayed immediately in original
            order. Future registration calls are recorded and also applied
            eagerly to the bound container.

        """
        self._container = container
        for operation in self._operations:
            logger.debug("Replaying %s on %r", operation.description, container)
            operation.apply(container)

    def get_current(self) -> Container:
        """Return the bound container.

        Returns:
            The currently bound container.

        Raises:
            SigWireContainerNotSetError: If no container has been bound yet.

        """
        if self._container is None:
            msg = (
                "Container is not set for container_context. "
                "Call container_context.set_current(container) before using container_context."
            )
            raise SigWireContainerNotSetError(msg)
        return self._container

    def reset(self) -> None:
        """Unbind the current container and forget recorded registrations."""
        self._container = None
        self._operations.clear()

    def _snapshot(self) -> _ContextState:
        return _ContextState(container=self._container, operations=tuple(self._operations))

    def _restore(self, state: _ContextState) -> None:
        """Rebind the captured container and drop operations recorded since the snapshot.

        Unlike ``reset``, registrations recorded before the snapshot are kept, so
        import-time registrations survive for the next binding.
        """
        self._container = state.container
        self._operations[:] = state.operations

    def _record_operation(self, operation: _RegistrationOperation) -> Self:
        if self._container is not None:
            operation.apply(self._container)
        self._operations.append(operation)
        return self

    # region Registration Methods
    def register_class(
        self,
        cls: ClassReference,
        parameters: OverrideParameters | None = None,
    ) -> Self:
        """Record and apply ``Container.register_class``.

        Args:
            cls: Class or dotted class path.
            parameters: Override values for the constructor.

        """
        normalized = self._validator.validate_parameters(parameters)
        return self._record_operation(
            _RegistrationOperation(
                description=f"register_class({cls!r})",
                apply=lambda container: container.register_class(cls, normalized),
            ),
        )

    def register_method(
        self,
        cls: ClassReference,
        method: str,
        parameters: OverrideParameters | None = None,
    ) -> Self:
        """Record and apply ``Container.register_method``.

        Args:
            cls: Class or dotted class path.
            method: Method name declared by the class.
            parameters: Override values for the method.

        """
        normalized = self._validator.validate_parameters(parameters)
        return self._record_operation(
            _RegistrationOperation(
                description=f"register_method({cls!r}, {method!r})",
                apply=lambda container: container.register_method(cls, method, normalized),
            ),
        )

    def register_closure(
        self,
        alias: str,
        function: Callable[..., Any] | None = None,
        parameters: OverrideParameters | None = None,
    ) -> Self | Callable[[F], F]:
        """Record and apply ``Container.register_closure`` with direct/decorator forms.

        Args:
            alias: Name used to call the closure.
            function: Callable to register, or ``None`` to return a decorator.
            parameters: Override values for the callable.

        """
        self._validator.validate_alias(alias)
        normalized = self._validator.validate_parameters(parameters)

        def decorator(decorated: F) -> F:
            self.register_closure(alias, decorated, normalized)
            return decorated

        if function is None:
            return decorator

        registered = self._validator.validate_callable(function)
        return self._record_operation(
            _RegistrationOperation(
                description=f"register_closure({alias!r})",
                apply=lambda container: container.register_closure(alias, registered, normalized),
            ),
        )

    def register_param_to_class(
        self,
        context: ParameterContext | str,
        bindings: Mapping[str, ClassReference],
    ) -> Self:
        """Record and apply ``Container.register_param_to_class``.

        Args:
            context: ``constructor``, ``method`` or ``common``.
            bindings: Mapping of parameter name to class or dotted class path.

        """
        resolved_context = self._validator.validate_context(context)
        bindings_copy = dict(bindings)
        return self._record_operation(
            _RegistrationOperation(
                description=f"register_param_to_class({resolved_context.value!r})",
                apply=lambda container: container.register_param_to_class(
                    resolved_context,
                    bindings_copy,
                ),
            ),
        )

    def allow_private_method_access(self) -> Self:
        """Record and apply ``Container.allow_private_method_access``."""
        return self._record_operation(
            _RegistrationOperation(
                description="allow_private_method_access()",
                apply=Container.allow_private_method_access,
            ),
        )

    def disable_named_parameter(self) -> Self:
        """Record and apply ``Container.disable_named_parameter``."""
        return self._record_operation(
            _RegistrationOperation(
                description="disable_named_parameter()",
                apply=Container.disable_named_parameter,
            ),
        )

    # endregion Registration Methods

    # region Resolution Methods
    def get_instance(self, cls: ClassReference) -> Any:
        """Build an instance through the bound container.

        Args:
            cls: Class or dotted class path.

        """
        return self.get_current().get_instance(cls)

    def call_method(self, cls: ClassReference) -> Any:
        """Build ``cls`` through the bound container and return its method's result.

        Args:
            cls: Class or dotted class path.

        """
        return self.get_current().call_method(cls)

    def call_closure(self, closure: str | Callable[..., Any]) -> Any:
        """Call a closure through the bound container.

        Args:
            closure: Registered alias or callable.

        """
        return self.get_current().call_closure(closure)

    # endregion Resolution Methods


container_context = ContainerContext()
