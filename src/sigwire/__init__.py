from sigwire.container import Container
from sigwire.container_context import ContainerContext, container_context
from sigwire.exceptions import (
    SigWireClassNotFoundError,
    SigWireClosureNotRegisteredError,
    SigWireContainerNotSetError,
    SigWireError,
    SigWireInvalidRegistrationError,
    SigWireLookupError,
    SigWireLoopedDependencyError,
    SigWireMethodNotFoundError,
    SigWirePrivateMethodAccessError,
    SigWireResolutionError,
)
from sigwire.introspection import TypeIntrospector
from sigwire.markers import Parent
from sigwire.policies import BindingMode, ParameterContext

__all__ = [
    "BindingMode",
    "Container",
    "ContainerContext",
    "ParameterContext",
    "Parent",
    "SigWireClassNotFoundError",
    "SigWireClosureNotRegisteredError",
    "SigWireContainerNotSetError",
    "SigWireError",
    "SigWireInvalidRegistrationError",
    "SigWireLookupError",
    "SigWireLoopedDependencyError",
    "SigWireMethodNotFoundError",
    "SigWirePrivateMethodAccessError",
    "SigWireResolutionError",
    "TypeIntrospector",
    "container_context",
]
