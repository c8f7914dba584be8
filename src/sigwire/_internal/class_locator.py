from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Any, TypeAlias

from sigwire._internal.type_checks import is_runtime_class
from sigwire.exceptions import SigWireClassNotFoundError

ClassReference: TypeAlias = type[Any] | str
"""A class object or a dotted import path such as ``"app.services.Mailer"``."""


@dataclass(slots=True)
class ClassLocator:
    """Turn class references into class objects."""

    def locate(self, reference: ClassReference) -> type[Any]:
        """Return the class named by ``reference``.

        Args:
            reference: Class object or dotted import path.

        Raises:
            SigWireClassNotFoundError: If the reference does not name an importable class.

        """
        if is_runtime_class(reference):
            return reference
        if not isinstance(reference, str):
            msg = f"Expected a class or a dotted class path, got {reference!r}."
            raise SigWireClassNotFoundError(msg)

        module_name, _, attribute_path = reference.rpartition(".")
        if not module_name:
            msg = f"Class '{reference}' is not a dotted import path."
            raise SigWireClassNotFoundError(msg)

        candidate = self._import_attribute(reference, module_name, attribute_path)
        if not is_runtime_class(candidate):
            msg = f"'{reference}' does not name a class."
            raise SigWireClassNotFoundError(msg)
        return candidate

    def find(self, reference: ClassReference) -> type[Any] | None:
        """Return the class named by ``reference`` or ``None`` when it cannot be located.

        Args:
            reference: Class object or dotted import path.

        """
        try:
            return self.locate(reference)
        except SigWireClassNotFoundError:
            return None

    def _import_attribute(self, reference: str, module_name: str, attribute_name: str) -> Any:
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            # nested class path such as "package.module.Outer.Inner"
            parent_name, _, outer_name = module_name.rpartition(".")
            if not parent_name:
                msg = f"Class '{reference}' cannot be imported."
                raise SigWireClassNotFoundError(msg) from None
            outer = self._import_attribute(reference, parent_name, outer_name)
            return self._get_attribute(reference, outer, attribute_name)
        return self._get_attribute(reference, module, attribute_name)

    def _get_attribute(self, reference: str, owner: Any, attribute_name: str) -> Any:
        try:
            return getattr(owner, attribute_name)
        except AttributeError:
            msg = f"Class '{reference}' cannot be imported."
            raise SigWireClassNotFoundError(msg) from None
