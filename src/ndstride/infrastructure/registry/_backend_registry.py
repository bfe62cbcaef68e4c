"""
Backend registry of canonical array implementations.

Each implementation registers one canonical instance under its
`implementation_key()`. The instance is used as a factory (`new_array`,
`construct_array`) and as the coercion target (`coerce_param`) when
capability dispatch needs a fallback representation.

Design
------
- Keys are write-once: registering a second instance under an existing key
  raises unless ``overwrite=True`` is passed explicitly.
- The process-wide `backend_registry` is populated at import time with the
  two NDArray kinds (``"ndarray"`` and ``"ndarray-double"``); later
  registrations are expected to happen at startup, before concurrent reads.

Usage example
-------------
    backend_registry.register(MyArray.empty())
    impl = canonical("my-array")
    impl.construct_array([[1, 2], [3, 4]])
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ...domain._capabilities import IImplementation
from ...domain._element_kind import ElementKind
from .._config import default_implementation_key
from ..ndarray import NDArray


class BackendRegistry:
    """
    Mapping from implementation key to canonical instance.

    Notes
    -----
    - Instances must implement `IImplementation`.
    - Lookups of unknown keys raise `LookupError` listing the known keys.
    """

    def __init__(self) -> None:
        self._instances: Dict[str, Any] = {}

    def register(self, instance: Any, *, overwrite: bool = False) -> Any:
        """
        Register `instance` under its own implementation key.

        Parameters
        ----------
        instance : IImplementation
            Canonical instance of the implementation.
        overwrite : bool, optional
            If False (default), raises if the key is already registered.

        Returns
        -------
        Any
            `instance`, so the method can be used in expressions.

        Raises
        ------
        TypeError
            If `instance` does not implement `IImplementation`.
        ValueError
            If the key is empty or already registered.
        """
        if not isinstance(instance, IImplementation):
            raise TypeError(
                f"{type(instance).__name__} does not implement IImplementation"
            )
        key = instance.implementation_key()
        if not isinstance(key, str) or not key:
            raise ValueError("Implementation key must be a non-empty string")
        if not overwrite and key in self._instances:
            raise ValueError(f"Implementation already registered: {key!r}")
        self._instances[key] = instance
        return instance

    def canonical(self, key: str) -> Any:
        """Return the canonical instance registered under `key`."""
        try:
            return self._instances[key]
        except KeyError:
            available = ", ".join(sorted(self._instances)) or "<none>"
            raise LookupError(
                f"Unknown implementation key: {key!r}. Available: {available}"
            ) from None

    def keys(self) -> tuple[str, ...]:
        """Return registered implementation keys (sorted)."""
        return tuple(sorted(self._instances))

    def __contains__(self, key: object) -> bool:
        return key in self._instances


backend_registry = BackendRegistry()
"""Process-wide registry consulted by capability dispatch."""


def register_implementation(instance: Any, *, overwrite: bool = False) -> Any:
    """Register `instance` in the process-wide registry."""
    return backend_registry.register(instance, overwrite=overwrite)


def canonical(key: Optional[str] = None) -> Any:
    """
    Return a canonical instance from the process-wide registry.

    When `key` is omitted, the implementation of the configured default
    element kind is returned.
    """
    return backend_registry.canonical(key or default_implementation_key())


for _kind in ElementKind:
    register_implementation(NDArray((), _kind))
