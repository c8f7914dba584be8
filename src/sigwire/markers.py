from sigwire._internal.markers import Parent

__all__ = ["Parent"]
