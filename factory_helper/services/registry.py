"""Resolve dotted model names to SQLAlchemy model classes."""

import importlib
import inspect as pyinspect
from typing import Any

from sqlalchemy import inspect as sa_inspect


def split_name(name: str) -> tuple[str, str]:
    """Split ``pkg.module.Class`` (or ``pkg.module:Class``) into module and class."""
    if ":" in name:
        module, _, attr = name.partition(":")
    else:
        module, _, attr = name.rpartition(".")
    return module, attr


class TypeRegistry:
    """Capability queries over classes reachable by dotted name."""

    def __init__(self, base: type | str):
        self._base = base

    @property
    def base(self) -> type:
        """The declarative base every model must subclass."""
        if isinstance(self._base, str):
            self._base = self.load(self._base)
        return self._base

    def type_exists(self, name: str) -> bool:
        """Return True if ``name`` resolves to a class.

        A missing module or attribute means the type does not exist; errors
        raised while executing an existing module propagate to the caller.
        """
        module_name, attr = split_name(name.strip())
        if not module_name or not attr:
            return False
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            if exc.name and (module_name == exc.name or module_name.startswith(exc.name + ".")):
                return False
            raise
        return pyinspect.isclass(getattr(module, attr, None))

    def load(self, name: str) -> type:
        module_name, attr = split_name(name.strip())
        cls = getattr(importlib.import_module(module_name), attr)
        if not pyinspect.isclass(cls):
            raise TypeError(f"'{name}' is not a class")
        return cls

    def is_subtype_of(self, cls: type, base: type | None = None) -> bool:
        """Strict subclass check against the declarative base."""
        base = base or self.base
        return cls is not base and issubclass(cls, base)

    def is_concrete(self, cls: type) -> bool:
        """Mapped, non-abstract classes can be instantiated as rows."""
        if pyinspect.isabstract(cls) or cls.__dict__.get("__abstract__", False):
            return False
        return sa_inspect(cls, raiseerr=False) is not None

    def instantiate(self, cls: type) -> Any:
        return cls()
