from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from sigwire._internal.class_locator import ClassLocator
from sigwire._internal.introspection import CallableSignature, ParameterInfo, TypeIntrospector
from sigwire._internal.markers import is_parent_annotation, is_self_annotation
from sigwire._internal.policies import ParameterContext
from sigwire._internal.registry import Registry
from sigwire._internal.resolvers.outcomes import (
    NOT_A_CLASS_DEPENDENCY,
    USE_DEFAULT,
    DependencyOutcome,
    Resolved,
)
from sigwire._internal.type_checks import supports_instance_checks
from sigwire.exceptions import SigWireLoopedDependencyError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DependencyResolver:
    """Decide whether one parameter is a class dependency and build it when it is.

    ``build_instance`` re-enters the instance builder, so nested dependencies
    are wired by the same rules as the top-level class. No instance is cached:
    each call builds a new object graph.
    """

    registry: Registry
    introspector: TypeIntrospector
    class_locator: ClassLocator
    build_instance: Callable[[type[Any]], Any]

    def resolve(
        self,
        signature: CallableSignature,
        parameter: ParameterInfo,
        frame: Mapping[str, Any],
        context: ParameterContext,
    ) -> DependencyOutcome:
        """Return the outcome for one parameter of ``signature``.

        Args:
            signature: Signature declaring the parameter; its owner is the requester.
            parameter: Parameter being resolved.
            frame: Values already bound for earlier parameters of the same list.
            context: ``constructor`` or ``method``.

        Raises:
            SigWireLoopedDependencyError: If the parameter requests its own owner.

        """
        candidate = self.candidate_class(signature, parameter, context)
        if candidate is None:
            return NOT_A_CLASS_DEPENDENCY

        if candidate is signature.owner:
            msg = (
                f"Looped dependency detected: parameter '{parameter.name}' of "
                f"'{signature.qualified_name}' requests '{candidate.__qualname__}' itself."
            )
            raise SigWireLoopedDependencyError(
                msg,
                parameter_name=parameter.name,
                callable_name=signature.qualified_name,
            )

        if supports_instance_checks(candidate) and any(
            isinstance(value, candidate) for value in frame.values()
        ):
            # a second parameter of the same class must be supplied explicitly
            return NOT_A_CLASS_DEPENDENCY

        if parameter.has_default:
            return USE_DEFAULT

        logger.debug(
            "Building '%s' for parameter '%s' of '%s'",
            candidate.__qualname__,
            parameter.name,
            signature.qualified_name,
        )
        return Resolved(self.build_instance(candidate))

    def candidate_class(
        self,
        signature: CallableSignature,
        parameter: ParameterInfo,
        context: ParameterContext,
    ) -> type[Any] | None:
        """Return the class a parameter denotes, or ``None``.

        Lookup order is the declared non-builtin type, then a binding for the
        parameter name under ``context``, then a binding under ``common``.

        Args:
            signature: Signature declaring the parameter.
            parameter: Parameter being resolved.
            context: ``constructor`` or ``method``.

        """
        if not parameter.is_builtin:
            declared = self._declared_class(signature, parameter)
            if declared is not None:
                return declared

        for binding_context in (context, ParameterContext.COMMON):
            bound = self._bound_class(binding_context, parameter.name)
            if bound is not None:
                return bound
        return None

    def _declared_class(
        self,
        signature: CallableSignature,
        parameter: ParameterInfo,
    ) -> type[Any] | None:
        declared_type = parameter.declared_type
        owner = signature.owner
        if is_self_annotation(declared_type):
            return owner if isinstance(owner, type) else None
        if is_parent_annotation(declared_type):
            return self.introspector.parent_class(owner) if isinstance(owner, type) else None
        return declared_type

    def _bound_class(self, context: ParameterContext, parameter_name: str) -> type[Any] | None:
        reference = self.registry.find_type_binding(context, parameter_name)
        if reference is None:
            return None
        bound = self.class_locator.find(reference)
        if bound is None:
            logger.warning(
                "Ignoring %s binding for parameter '%s': '%s' is not an importable class",
                context.value,
                parameter_name,
                reference,
            )
        return bound
