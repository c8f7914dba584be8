from __future__ import annotations

import pytest

import sigwire
from sigwire.container import Container
from sigwire.container_context import ContainerContext
from sigwire.exceptions import (
    SigWireContainerNotSetError,
    SigWireInvalidRegistrationError,
    SigWireMethodNotFoundError,
)
from sigwire.policies import BindingMode


class _Mailer:
    def __init__(self, host: str = "localhost") -> None:
        self.host = host


class _Newsletter:
    def __init__(self, mailer: _Mailer) -> None:
        self.mailer = mailer

    def send(self, subject: str) -> str:
        return f"{subject} via {self.mailer.host}"


class _Coordinates:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


def test_top_level_container_context_export_is_available() -> None:
    assert isinstance(sigwire.container_context, ContainerContext)


def test_resolution_without_container_raises() -> None:
    context = ContainerContext()

    with pytest.raises(SigWireContainerNotSetError):
        context.get_current()
    with pytest.raises(SigWireContainerNotSetError):
        context.get_instance(_Mailer)
    with pytest.raises(SigWireContainerNotSetError):
        context.call_closure(len)


def test_deferred_registrations_are_replayed_on_set_current() -> None:
    context = ContainerContext()
    context.register_class(_Mailer, {"host": "smtp.example.com"})
    context.register_method(_Newsletter, "send", {"subject": "Weekly"})

    context.set_current(Container())

    assert context.get_instance(_Mailer).host == "smtp.example.com"
    assert context.call_method(_Newsletter) == "Weekly via smtp.example.com"


def test_registrations_after_binding_are_applied_eagerly() -> None:
    context = ContainerContext()
    container = Container()
    context.set_current(container)

    context.register_class(_Mailer, {"host": "eager"})

    assert container.get_instance(_Mailer).host == "eager"


def test_replay_targets_every_bound_container_in_order() -> None:
    context = ContainerContext()
    context.register_class(_Mailer, {"host": "first"})
    context.register_class(_Mailer, {"host": "second"})
    first = Container()
    second = Container()

    context.set_current(first)
    context.set_current(second)

    assert first.get_instance(_Mailer).host == "second"
    assert second.get_instance(_Mailer).host == "second"
    assert context.get_current() is second


def test_mode_toggles_are_replayed() -> None:
    context = ContainerContext()
    context.disable_named_parameter()
    context.allow_private_method_access()
    context.register_class(_Coordinates, [3, 4])
    container = Container()

    context.set_current(container)

    assert container.binding_mode is BindingMode.POSITIONAL
    assert container.private_method_access_allowed is True
    coordinates = context.get_instance(_Coordinates)
    assert (coordinates.x, coordinates.y) == (3, 4)


def test_param_to_class_bindings_are_replayed() -> None:
    context = ContainerContext()
    context.register_param_to_class("common", {"mailer": _Mailer})
    context.set_current(Container())

    def notify(mailer) -> str:  # type: ignore[no-untyped-def]  # noqa: ANN001
        return mailer.host

    assert context.call_closure(notify) == "localhost"


def test_register_closure_direct_and_decorator_forms() -> None:
    context = ContainerContext()

    @context.register_closure("host", parameters={"suffix": "!"})
    def host(mailer: _Mailer, suffix: str) -> str:
        return mailer.host + suffix

    context.register_closure("upper", lambda: "UP")
    context.set_current(Container())

    assert context.call_closure("host") == "localhost!"
    assert context.call_closure("upper") == "UP"
    assert host(_Mailer("direct"), "?") == "direct?"


def test_invalid_registrations_fail_before_recording() -> None:
    context = ContainerContext()

    with pytest.raises(SigWireInvalidRegistrationError):
        context.register_param_to_class("global", {})
    with pytest.raises(SigWireInvalidRegistrationError):
        context.register_closure("", len)
    with pytest.raises(SigWireInvalidRegistrationError):
        context.register_class(_Mailer, "host")  # type: ignore[arg-type]

    context.set_current(Container())


def test_replay_surfaces_container_errors() -> None:
    context = ContainerContext()
    context.register_method(_Mailer, "missing")

    with pytest.raises(SigWireMethodNotFoundError):
        context.set_current(Container())


def test_reset_forgets_container_and_registrations() -> None:
    context = ContainerContext()
    context.register_class(_Mailer, {"host": "recorded"})
    context.set_current(Container())

    context.reset()

    with pytest.raises(SigWireContainerNotSetError):
        context.get_current()
    context.set_current(Container())
    assert context.get_instance(_Mailer).host == "localhost"


def test_restore_keeps_registrations_recorded_before_snapshot() -> None:
    context = ContainerContext()
    context.register_class(_Mailer, {"host": "recorded"})
    state = context._snapshot()
    context.set_current(Container())
    context.register_class(_Mailer, {"host": "temporary"})

    context._restore(state)

    with pytest.raises(SigWireContainerNotSetError):
        context.get_current()
    context.set_current(Container())
    assert context.get_instance(_Mailer).host == "recorded"
