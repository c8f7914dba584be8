"""Shared pytest fixtures for sigwire tests."""

import pytest

from sigwire.container import Container
from sigwire.policies import BindingMode


@pytest.fixture()
def container() -> Container:
    """Default container with named parameter binding."""
    return Container()


@pytest.fixture()
def positional_container() -> Container:
    """Container matching override values by order."""
    return Container(binding_mode=BindingMode.POSITIONAL)
