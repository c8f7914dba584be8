from __future__ import annotations

from typing import Annotated, Any, get_args, get_origin

from typing_extensions import Self


class Parent:
    """Annotate a parameter that should receive an instance of the declaring class's base.

    The marker resolves against the class that declares the constructor or
    method, not the class being resolved. When that class derives directly
    from ``object`` the marker does not name a class dependency and the
    parameter falls back to supplied values or its default.

    Examples:
        .. code-block:: python

            class Repository:
                def __init__(self) -> None: ...


            class CachedRepository(Repository):
                def __init__(self, inner: Parent) -> None:
                    self.inner = inner

    """

    def __new__(cls, *_args: object, **_kwargs: object) -> Parent:
        msg = "Parent is an annotation marker and cannot be instantiated."
        raise TypeError(msg)


def unwrap_annotated(annotation: Any) -> Any:
    """Recursively unwrap Annotated[T, ...] into T.

    Args:
        annotation: Annotation value to inspect or normalize.

    """
    if get_origin(annotation) is not Annotated:
        return annotation
    return unwrap_annotated(get_args(annotation)[0])


def is_self_annotation(annotation: Any) -> bool:
    """Return true for ``typing.Self`` and ``typing_extensions.Self``.

    Args:
        annotation: Annotation value to inspect.

    """
    if annotation is Self:
        return True
    annotation_module = getattr(annotation, "__module__", None)
    if annotation_module not in {"typing", "typing_extensions"}:
        return False

    annotation_name = getattr(
        annotation,
        "__qualname__",
        getattr(annotation, "_name", getattr(annotation, "__name__", None)),
    )
    return annotation_name == "Self"


def is_parent_annotation(annotation: Any) -> bool:
    """Return true for the ``Parent`` marker.

    Args:
        annotation: Annotation value to inspect.

    """
    return annotation is Parent
