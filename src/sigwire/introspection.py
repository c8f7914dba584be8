from sigwire._internal.introspection import (
    CallableSignature,
    ParameterInfo,
    SignatureIntrospector,
    TypeIntrospector,
)

__all__ = ["CallableSignature", "ParameterInfo", "SignatureIntrospector", "TypeIntrospector"]
