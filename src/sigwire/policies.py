from sigwire._internal.policies import BindingMode, ParameterContext

__all__ = ["BindingMode", "ParameterContext"]
