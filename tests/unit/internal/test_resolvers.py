from __future__ import annotations

import logging
from inspect import Parameter
from typing import Any

import pytest

from sigwire._internal.class_locator import ClassLocator
from sigwire._internal.introspection import CallableSignature, ParameterInfo, SignatureIntrospector
from sigwire._internal.policies import BindingMode, ParameterContext
from sigwire._internal.registry import Registry
from sigwire._internal.resolvers.dependencies import DependencyResolver
from sigwire._internal.resolvers.outcomes import (
    NOT_A_CLASS_DEPENDENCY,
    USE_DEFAULT,
    Resolved,
)
from sigwire._internal.resolvers.parameters import ParameterResolver
from sigwire._internal.settings import ResolutionSettings
from sigwire.exceptions import SigWireLoopedDependencyError, SigWireResolutionError


class Logger:
    pass


class FileLogger(Logger):
    pass


class Handler:
    pass


def _signature(owner: Any, *parameters: ParameterInfo) -> CallableSignature:
    return CallableSignature(
        owner=owner,
        owner_name="Handler",
        callable_name="__init__",
        parameters=parameters,
    )


def _class_parameter(name: str, position: int, cls: type[Any], **kwargs: Any) -> ParameterInfo:
    return ParameterInfo(name=name, position=position, declared_type=cls, is_builtin=False, **kwargs)


def _builtin_parameter(name: str, position: int, **kwargs: Any) -> ParameterInfo:
    return ParameterInfo(name=name, position=position, declared_type=int, **kwargs)


@pytest.fixture()
def registry() -> Registry:
    return Registry()


@pytest.fixture()
def built() -> list[type[Any]]:
    return []


@pytest.fixture()
def dependency_resolver(registry: Registry, built: list[type[Any]]) -> DependencyResolver:
    def build_instance(cls: type[Any]) -> Any:
        built.append(cls)
        return cls()

    return DependencyResolver(
        registry=registry,
        introspector=SignatureIntrospector(),
        class_locator=ClassLocator(),
        build_instance=build_instance,
    )


def _parameter_resolver(
    dependency_resolver: DependencyResolver,
    binding_mode: BindingMode = BindingMode.NAMED,
) -> ParameterResolver:
    return ParameterResolver(
        dependency_resolver=dependency_resolver,
        settings=ResolutionSettings(binding_mode=binding_mode),
    )


class TestDependencyResolver:
    def test_builtin_parameter_is_not_a_class_dependency(
        self,
        dependency_resolver: DependencyResolver,
    ) -> None:
        parameter = _builtin_parameter("count", 0)

        outcome = dependency_resolver.resolve(
            _signature(Handler, parameter),
            parameter,
            {},
            ParameterContext.CONSTRUCTOR,
        )

        assert outcome is NOT_A_CLASS_DEPENDENCY

    def test_class_parameter_is_built(
        self,
        dependency_resolver: DependencyResolver,
        built: list[type[Any]],
    ) -> None:
        parameter = _class_parameter("logger", 0, Logger)

        outcome = dependency_resolver.resolve(
            _signature(Handler, parameter),
            parameter,
            {},
            ParameterContext.CONSTRUCTOR,
        )

        assert isinstance(outcome, Resolved)
        assert isinstance(outcome.instance, Logger)
        assert built == [Logger]

    def test_class_parameter_with_default_uses_default_without_building(
        self,
        dependency_resolver: DependencyResolver,
        built: list[type[Any]],
    ) -> None:
        parameter = _class_parameter("logger", 0, Logger, has_default=True)

        outcome = dependency_resolver.resolve(
            _signature(Handler, parameter),
            parameter,
            {},
            ParameterContext.CONSTRUCTOR,
        )

        assert outcome is USE_DEFAULT
        assert built == []

    def test_instance_already_in_frame_is_not_built_again(
        self,
        dependency_resolver: DependencyResolver,
        built: list[type[Any]],
    ) -> None:
        parameter = _class_parameter("backup", 1, Logger)

        outcome = dependency_resolver.resolve(
            _signature(Handler, parameter),
            parameter,
            {"primary": FileLogger()},
            ParameterContext.CONSTRUCTOR,
        )

        assert outcome is NOT_A_CLASS_DEPENDENCY
        assert built == []

    def test_parameter_requesting_owner_raises_looped_error(
        self,
        dependency_resolver: DependencyResolver,
    ) -> None:
        parameter = _class_parameter("handler", 0, Handler, has_default=True)

        with pytest.raises(SigWireLoopedDependencyError) as error:
            dependency_resolver.resolve(
                _signature(Handler, parameter),
                parameter,
                {},
                ParameterContext.CONSTRUCTOR,
            )

        assert error.value.parameter_name == "handler"
        assert error.value.callable_name == "Handler.__init__"

    def test_context_binding_wins_over_common_binding(
        self,
        dependency_resolver: DependencyResolver,
        registry: Registry,
    ) -> None:
        registry.set_type_bindings(ParameterContext.METHOD, {"logger": FileLogger})
        registry.set_type_bindings(ParameterContext.COMMON, {"logger": Logger})
        parameter = ParameterInfo(name="logger", position=0)
        signature = _signature(Handler, parameter)

        method_candidate = dependency_resolver.candidate_class(
            signature,
            parameter,
            ParameterContext.METHOD,
        )
        constructor_candidate = dependency_resolver.candidate_class(
            signature,
            parameter,
            ParameterContext.CONSTRUCTOR,
        )

        assert method_candidate is FileLogger
        assert constructor_candidate is Logger

    def test_declared_type_wins_over_binding(
        self,
        dependency_resolver: DependencyResolver,
        registry: Registry,
    ) -> None:
        registry.set_type_bindings(ParameterContext.COMMON, {"logger": FileLogger})
        parameter = _class_parameter("logger", 0, Logger)

        candidate = dependency_resolver.candidate_class(
            _signature(Handler, parameter),
            parameter,
            ParameterContext.CONSTRUCTOR,
        )

        assert candidate is Logger

    def test_unimportable_binding_is_ignored_with_warning(
        self,
        dependency_resolver: DependencyResolver,
        registry: Registry,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        registry.set_type_bindings(ParameterContext.COMMON, {"logger": "missing.module.Logger"})
        parameter = ParameterInfo(name="logger", position=0)

        with caplog.at_level(logging.WARNING, logger="sigwire"):
            candidate = dependency_resolver.candidate_class(
                _signature(Handler, parameter),
                parameter,
                ParameterContext.CONSTRUCTOR,
            )

        assert candidate is None
        assert "missing.module.Logger" in caplog.text


class TestParameterResolver:
    def test_named_values_fill_non_dependency_parameters(
        self,
        dependency_resolver: DependencyResolver,
    ) -> None:
        signature = _signature(
            Handler,
            _class_parameter("logger", 0, Logger),
            _builtin_parameter("level", 1),
            _builtin_parameter("retries", 2, has_default=True, default=3),
        )

        resolved = _parameter_resolver(dependency_resolver).resolve(
            signature,
            {"level": 10},
            ParameterContext.CONSTRUCTOR,
        )

        assert isinstance(resolved.values["logger"], Logger)
        assert resolved.values["level"] == 10
        assert resolved.values["retries"] == 3
        assert resolved.instances_resolved == 1

    def test_named_value_replaces_default_of_class_parameter(
        self,
        dependency_resolver: DependencyResolver,
    ) -> None:
        replacement = FileLogger()
        signature = _signature(
            Handler,
            _class_parameter("logger", 0, Logger, has_default=True, default=None),
        )

        resolved = _parameter_resolver(dependency_resolver).resolve(
            signature,
            {"logger": replacement},
            ParameterContext.CONSTRUCTOR,
        )

        assert resolved.values["logger"] is replacement
        assert resolved.instances_resolved == 1

    def test_positional_index_skips_resolved_dependencies(
        self,
        dependency_resolver: DependencyResolver,
    ) -> None:
        signature = _signature(
            Handler,
            _builtin_parameter("first", 0),
            _class_parameter("logger", 1, Logger),
            _builtin_parameter("second", 2),
        )

        resolved = _parameter_resolver(dependency_resolver, BindingMode.POSITIONAL).resolve(
            signature,
            [1, 2],
            ParameterContext.CONSTRUCTOR,
        )

        assert resolved.args[0] == 1
        assert isinstance(resolved.args[1], Logger)
        assert resolved.args[2] == 2

    def test_positional_mode_accepts_mapping_values_in_order(
        self,
        dependency_resolver: DependencyResolver,
    ) -> None:
        signature = _signature(Handler, _builtin_parameter("a", 0), _builtin_parameter("b", 1))

        resolved = _parameter_resolver(dependency_resolver, BindingMode.POSITIONAL).resolve(
            signature,
            {"z": 1, "y": 2},
            ParameterContext.CONSTRUCTOR,
        )

        assert resolved.args == (1, 2)

    def test_positional_default_fills_missing_tail(
        self,
        dependency_resolver: DependencyResolver,
    ) -> None:
        signature = _signature(
            Handler,
            _builtin_parameter("a", 0),
            _builtin_parameter("b", 1, has_default=True, default=7),
        )

        resolved = _parameter_resolver(dependency_resolver, BindingMode.POSITIONAL).resolve(
            signature,
            [5],
            ParameterContext.CONSTRUCTOR,
        )

        assert resolved.args == (5, 7)

    def test_missing_value_raises_resolution_error(
        self,
        dependency_resolver: DependencyResolver,
    ) -> None:
        signature = _signature(Handler, _builtin_parameter("level", 0))

        with pytest.raises(SigWireResolutionError, match="level") as error:
            _parameter_resolver(dependency_resolver).resolve(
                signature,
                {},
                ParameterContext.CONSTRUCTOR,
            )

        assert error.value.parameter_name == "level"

    def test_sequence_in_named_mode_raises(self, dependency_resolver: DependencyResolver) -> None:
        signature = _signature(Handler, _builtin_parameter("level", 0))

        with pytest.raises(SigWireResolutionError, match="disable_named_parameter"):
            _parameter_resolver(dependency_resolver).resolve(
                signature,
                [1],
                ParameterContext.CONSTRUCTOR,
            )

    def test_keyword_only_values_are_passed_as_kwargs(
        self,
        dependency_resolver: DependencyResolver,
    ) -> None:
        signature = _signature(
            Handler,
            _builtin_parameter("a", 0),
            ParameterInfo(name="b", position=1, kind=Parameter.KEYWORD_ONLY),
        )

        resolved = _parameter_resolver(dependency_resolver).resolve(
            signature,
            {"a": 1, "b": 2},
            ParameterContext.CONSTRUCTOR,
        )

        assert resolved.args == (1,)
        assert resolved.kwargs == {"b": 2}

    def test_each_fallback_binding_is_logged_with_its_source(
        self,
        dependency_resolver: DependencyResolver,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        signature = _signature(
            Handler,
            _builtin_parameter("level", 0),
            _builtin_parameter("retries", 1, has_default=True, default=3),
        )

        with caplog.at_level(logging.DEBUG, logger="sigwire"):
            _parameter_resolver(dependency_resolver).resolve(
                signature,
                {"level": 10},
                ParameterContext.CONSTRUCTOR,
            )

        assert "Bound parameter 'level' of 'Handler.__init__' from supplied value" in caplog.text
        assert "Bound parameter 'retries' of 'Handler.__init__' from default value" in caplog.text
