from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from sigwire.container import Container
from sigwire.container_context import container_context
from sigwire.policies import BindingMode

_SIGWIRE_MARKER = "sigwire"


def pytest_configure(config: pytest.Config) -> None:
    """Register the ``sigwire`` marker.

    Args:
        config: Pytest configuration object.

    """
    config.addinivalue_line(
        "markers",
        f"{_SIGWIRE_MARKER}(binding_mode='named', allow_private_method_access=False): "
        "configure the container provided by the sigwire_container fixture.",
    )


@pytest.fixture()
def sigwire_container(request: pytest.FixtureRequest) -> Iterator[Container]:
    """Create a per-test container and bind it to ``container_context``.

    Container options can be set with ``@pytest.mark.sigwire(...)``, which
    accepts the keyword arguments of ``Container``. After the test the previous
    binding is restored and registrations recorded during the test are dropped,
    so they never leak between tests.

    Args:
        request: Pytest fixture request, used to read the ``sigwire`` marker.

    Yields:
        A new ``Container`` bound as ``container_context``'s current container.
        Registrations recorded before the test, such as those made at import
        time, are replayed onto it.

    """
    options: dict[str, Any] = {}
    marker = request.node.get_closest_marker(_SIGWIRE_MARKER)
    if marker is not None:
        options.update(marker.kwargs)
    if "binding_mode" in options:
        options["binding_mode"] = BindingMode(options["binding_mode"])

    container = Container(**options)
    state = container_context._snapshot()  # noqa: SLF001
    container_context.set_current(container)
    try:
        yield container
    finally:
        container_context._restore(state)  # noqa: SLF001
