from __future__ import annotations

import inspect
import logging
import types
from collections.abc import Callable
from dataclasses import dataclass, field
from inspect import Parameter
from typing import Any, Protocol, Union, get_args, get_origin, get_type_hints

from sigwire._internal.markers import is_parent_annotation, is_self_annotation, unwrap_annotated
from sigwire._internal.policies import ClassDependencyPolicy
from sigwire._internal.type_checks import is_non_public_name
from sigwire.exceptions import SigWireLookupError, SigWirePrivateMethodAccessError

logger = logging.getLogger(__name__)

_MISSING_ANNOTATION: Any = object()
_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)
_CONSTRUCTOR_MEMBER_NAMES = ("__init__", "__new__")


@dataclass(frozen=True, slots=True)
class ParameterInfo:
    """Describe one formal parameter of a constructible unit."""

    name: str
    """Parameter name as declared."""
    position: int
    """Zero-based declaration index among the resolvable parameters."""
    kind: Any = Parameter.POSITIONAL_OR_KEYWORD
    """The ``inspect.Parameter`` kind, used to pass the value positionally or by keyword."""
    declared_type: Any = None
    """Unwrapped declared type, or ``None`` when the parameter has no usable annotation."""
    is_builtin: bool = True
    """True when the declared type is missing, primitive, or not a buildable class."""
    has_default: bool = False
    """True when the parameter declares a default value."""
    default: Any = None
    """The declared default value; meaningful only when ``has_default`` is true."""


@dataclass(frozen=True, slots=True)
class CallableSignature:
    """Ordered parameter metadata for a constructor, method, or free callable."""

    owner: Any
    """Declaring class for constructors and methods, the callable itself otherwise."""
    owner_name: str
    callable_name: str
    parameters: tuple[ParameterInfo, ...] = field(default_factory=tuple)

    @property
    def qualified_name(self) -> str:
        """Return a ``Owner.callable`` style name for diagnostics."""
        if self.owner_name == self.callable_name:
            return self.callable_name
        return f"{self.owner_name}.{self.callable_name}"


class TypeIntrospector(Protocol):
    """Capability interface the resolver components use to inspect user code."""

    def constructor_signature(self, cls: type[Any]) -> CallableSignature | None:
        """Return constructor parameters, or ``None`` when the class has no constructor.

        Args:
            cls: Class whose constructor is inspected.

        """

    def method_signature(
        self,
        cls: type[Any],
        bound_method: Callable[..., Any],
        method_name: str,
    ) -> CallableSignature:
        """Return parameters of a bound method, excluding the instance parameter.

        Args:
            cls: Class that was instantiated.
            bound_method: Method bound to the new instance.
            method_name: Attribute name of the method on the class.

        """

    def callable_signature(self, function: Callable[..., Any]) -> CallableSignature:
        """Return parameters of a free callable.

        Args:
            function: Callable whose parameters are inspected.

        """

    def find_method(
        self,
        cls: type[Any],
        method_name: str,
        *,
        allow_private: bool,
    ) -> str | None:
        """Return the attribute name under which ``cls`` declares ``method_name``.

        Args:
            cls: Class to search.
            method_name: Method name as designated by the user.
            allow_private: Whether non-public methods may be returned.

        """

    def parent_class(self, cls: type[Any]) -> type[Any] | None:
        """Return the direct base class, or ``None`` when it is ``object``.

        Args:
            cls: Class whose base is requested.

        """


@dataclass(slots=True)
class SignatureIntrospector:
    """Default ``TypeIntrospector`` built on ``inspect.signature`` and ``get_type_hints``."""

    policy: ClassDependencyPolicy = field(default_factory=ClassDependencyPolicy)

    def constructor_signature(self, cls: type[Any]) -> CallableSignature | None:
        """Return constructor parameters, or ``None`` when the class has no constructor.

        Args:
            cls: Class whose constructor is inspected.

        """
        if cls.__init__ is object.__init__ and cls.__new__ is object.__new__:
            return None

        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError) as error:
            msg = f"Unable to inspect constructor of '{cls.__qualname__}': {error}"
            raise SigWireLookupError(msg) from error

        owner = self._declaring_class(cls, _CONSTRUCTOR_MEMBER_NAMES)
        annotations = self._constructor_hints(cls)
        return CallableSignature(
            owner=owner,
            owner_name=owner.__qualname__,
            callable_name="__init__",
            parameters=self._build_parameters(signature, annotations),
        )

    def method_signature(
        self,
        cls: type[Any],
        bound_method: Callable[..., Any],
        method_name: str,
    ) -> CallableSignature:
        """Return parameters of a bound method, excluding the instance parameter.

        Args:
            cls: Class that was instantiated.
            bound_method: Method bound to the new instance.
            method_name: Attribute name of the method on the class.

        """
        owner = self._declaring_class(cls, (method_name,))
        return CallableSignature(
            owner=owner,
            owner_name=owner.__qualname__,
            callable_name=method_name,
            parameters=self._build_parameters(
                self._signature(bound_method),
                self._type_hints(bound_method),
            ),
        )

    def callable_signature(self, function: Callable[..., Any]) -> CallableSignature:
        """Return parameters of a free callable.

        Args:
            function: Callable whose parameters are inspected.

        """
        name = getattr(function, "__qualname__", None) or repr(function)
        return CallableSignature(
            owner=function,
            owner_name=name,
            callable_name=name,
            parameters=self._build_parameters(
                self._signature(function),
                self._type_hints(function),
            ),
        )

    def find_method(
        self,
        cls: type[Any],
        method_name: str,
        *,
        allow_private: bool,
    ) -> str | None:
        """Return the attribute name under which ``cls`` declares ``method_name``.

        Args:
            cls: Class to search.
            method_name: Method name as designated by the user.
            allow_private: Whether non-public methods may be returned.

        Raises:
            SigWirePrivateMethodAccessError: If the method is non-public and
                ``allow_private`` is false.

        """
        candidates = [method_name]
        if method_name.startswith("__") and not method_name.endswith("__"):
            # name-mangled private methods
            candidates.extend(f"_{klass.__name__.lstrip('_')}{method_name}" for klass in cls.__mro__)

        for attribute_name in candidates:
            if not callable(getattr(cls, attribute_name, None)):
                continue
            if is_non_public_name(attribute_name) and not allow_private:
                msg = (
                    f"Method '{cls.__qualname__}.{method_name}' is not public. "
                    "Call allow_private_method_access() to invoke it."
                )
                raise SigWirePrivateMethodAccessError(msg)
            return attribute_name
        return None

    def parent_class(self, cls: type[Any]) -> type[Any] | None:
        """Return the direct base class, or ``None`` when it is ``object``.

        Args:
            cls: Class whose base is requested.

        """
        base = cls.__mro__[1] if len(cls.__mro__) > 1 else None
        if base is None or base is object:
            return None
        return base

    def _build_parameters(
        self,
        signature: inspect.Signature,
        annotations: dict[str, Any],
    ) -> tuple[ParameterInfo, ...]:
        resolvable = [
            parameter
            for parameter in signature.parameters.values()
            if parameter.kind not in _VARIADIC_KINDS
        ]
        parameters: list[ParameterInfo] = []
        for position, parameter in enumerate(resolvable):
            declared_type = self._declared_type(parameter, annotations)
            has_default = parameter.default is not Parameter.empty
            parameters.append(
                ParameterInfo(
                    name=parameter.name,
                    position=position,
                    kind=parameter.kind,
                    declared_type=declared_type,
                    is_builtin=self._is_builtin(declared_type),
                    has_default=has_default,
                    default=parameter.default if has_default else None,
                ),
            )
        return tuple(parameters)

    def _declared_type(self, parameter: Parameter, annotations: dict[str, Any]) -> Any:
        annotation = annotations.get(parameter.name, _MISSING_ANNOTATION)
        if annotation is _MISSING_ANNOTATION:
            annotation = parameter.annotation
            if annotation is Parameter.empty:
                return None
            if isinstance(annotation, str):
                logger.debug(
                    "Ignoring unresolved annotation %r of parameter '%s'",
                    annotation,
                    parameter.name,
                )
                return None
        return self._unwrap_optional(unwrap_annotated(annotation))

    def _unwrap_optional(self, annotation: Any) -> Any:
        origin = get_origin(annotation)
        if origin is not Union and origin is not types.UnionType:
            return annotation
        members = [member for member in get_args(annotation) if member is not type(None)]
        if len(members) != 1:
            return annotation
        return unwrap_annotated(members[0])

    def _is_builtin(self, declared_type: Any) -> bool:
        if declared_type is None:
            return True
        if is_self_annotation(declared_type) or is_parent_annotation(declared_type):
            return False
        return not self.policy.is_class_dependency(declared_type)

    def _signature(self, function: Callable[..., Any]) -> inspect.Signature:
        try:
            return inspect.signature(function)
        except (TypeError, ValueError) as error:
            name = getattr(function, "__qualname__", repr(function))
            msg = f"Unable to inspect parameters of '{name}': {error}"
            raise SigWireLookupError(msg) from error

    def _type_hints(self, function: Callable[..., Any]) -> dict[str, Any]:
        try:
            return get_type_hints(function, include_extras=True)
        except (AttributeError, NameError, TypeError) as error:
            logger.debug(
                "Falling back to raw annotations for '%s': %s",
                getattr(function, "__qualname__", repr(function)),
                error,
            )
            return {}

    def _constructor_hints(self, cls: type[Any]) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for member_name in _CONSTRUCTOR_MEMBER_NAMES:
            member = getattr(cls, member_name)
            if member is getattr(object, member_name):
                continue
            for name, annotation in self._type_hints(member).items():
                merged.setdefault(name, annotation)
        for name, annotation in self._type_hints(cls).items():
            merged.setdefault(name, annotation)
        return merged

    def _declaring_class(self, cls: type[Any], member_names: tuple[str, ...]) -> type[Any]:
        for klass in cls.__mro__:
            if klass is object:
                break
            if any(member_name in vars(klass) for member_name in member_names):
                return klass
        return cls
