from __future__ import annotations


class SigWireError(Exception):
    """Represent a base class for all sigwire-specific failures.

    Catch this type when you want to handle any sigwire error path without
    matching each concrete exception class individually.
    """


class SigWireInvalidRegistrationError(SigWireError):
    """Signal invalid registration or container configuration.

    Raised by registration APIs such as ``Container.register_class``,
    ``Container.register_closure`` and ``Container.register_param_to_class``
    when arguments are invalid. A rejected registration leaves the container
    unchanged.

    Typical fixes include passing a class (or an importable dotted class path),
    a callable closure, and override parameters given as a mapping or a
    sequence.
    """


class SigWireLookupError(SigWireError):
    """Signal that a class or method cannot be located or constructed.

    Raised at the introspection boundary while resolving ``get_instance``,
    ``call_method`` or ``call_closure`` and aborts the whole top-level call.
    """


class SigWireClassNotFoundError(SigWireLookupError):
    """Signal that a class reference does not name an importable class.

    Class references may be class objects or dotted import paths such as
    ``"app.services.Mailer"``. The path must import and must point to a class.
    """


class SigWireMethodNotFoundError(SigWireLookupError):
    """Signal that a class does not declare the requested method.

    Raised by ``Container.register_method`` when the method name is not a
    callable attribute of the class.
    """


class SigWirePrivateMethodAccessError(SigWireLookupError):
    """Signal invocation of a non-public designated method.

    Methods whose name starts with an underscore are non-public. Call
    ``Container.allow_private_method_access()`` to invoke them as
    post-construction methods.
    """


class SigWireClosureNotRegisteredError(SigWireLookupError):
    """Signal that ``call_closure`` received an unknown alias.

    Register the callable first with ``Container.register_closure(alias, ...)``
    or pass the callable itself to ``call_closure``.
    """


class SigWireResolutionError(SigWireError):
    """Signal that a parameter value cannot be produced.

    Raised when a required parameter is not a class dependency, has no default
    value and no supplied override. ``parameter_name`` and ``callable_name``
    identify the failing parameter for diagnostics.
    """

    def __init__(
        self,
        message: str,
        *,
        parameter_name: str | None = None,
        callable_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.parameter_name = parameter_name
        self.callable_name = callable_name


class SigWireLoopedDependencyError(SigWireResolutionError):
    """Signal a parameter that requests the class declaring it.

    The check only covers the direct case: a constructor or method parameter
    whose class is the declaring class itself (including ``typing.Self``).
    Longer cycles across several classes are not detected and end with
    ``RecursionError``.
    """


class SigWireContainerNotSetError(SigWireError):
    """Signal use of ``container_context`` before a container is bound.

    Raised by ``ContainerContext.get_current`` and proxy resolution operations.

    Typical fix is calling ``container_context.set_current(container)`` during
    application startup before resolution calls.
    """
