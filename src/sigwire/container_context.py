from sigwire._internal.container_context import ContainerContext, container_context

__all__ = ["ContainerContext", "container_context"]
