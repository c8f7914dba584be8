from __future__ import annotations

from dataclasses import dataclass

from sigwire._internal.policies import BindingMode


@dataclass(slots=True)
class ResolutionSettings:
    """Container-wide switches shared by the resolver components."""

    binding_mode: BindingMode = BindingMode.NAMED
    """How supplied values are matched to parameters."""
    allow_private_method_access: bool = False
    """Whether non-public designated methods may be invoked."""
