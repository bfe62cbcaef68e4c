"""
Element-kind descriptors.

An element kind declares how an NDArray's backing store holds its values:

- `ElementKind.DOUBLE`: unboxed double-precision storage. Kernels run on the
  primitive path (vectorized NumPy arithmetic, no per-element objects).
- `ElementKind.OBJECT`: boxed generic storage holding arbitrary Python
  objects. Kernels run on the generic path (per-value dispatch).

The kind is the state value used to select specialized control paths, so it
must stay hashable and cheap to compare.
"""

from enum import Enum
from typing import Any, Union

import numpy as np


class ElementKind(Enum):
    """
    Enumeration of supported storage element kinds.

    Attributes
    ----------
    DOUBLE : ElementKind
        Primitive float64 storage, default value ``0.0``.
    OBJECT : ElementKind
        Generic object storage, default value ``None`` (absent).
    """

    DOUBLE = "double"
    OBJECT = "object"

    @property
    def dtype(self) -> np.dtype:
        """NumPy dtype of a backing store holding this kind."""
        return np.dtype(np.float64) if self is ElementKind.DOUBLE else np.dtype(object)

    @property
    def default_value(self) -> Any:
        """Value a freshly allocated store is initialized with."""
        return 0.0 if self is ElementKind.DOUBLE else None

    @property
    def element_type(self) -> type:
        """Python type every stored element is guaranteed to have."""
        return float if self is ElementKind.DOUBLE else object

    @property
    def implementation_key(self) -> str:
        """Backend registry key of the NDArray representation with this kind."""
        return "ndarray-double" if self is ElementKind.DOUBLE else "ndarray"

    def is_primitive(self) -> bool:
        return self is ElementKind.DOUBLE

    @classmethod
    def parse(cls, kind: Union["ElementKind", str]) -> "ElementKind":
        """
        Normalize a user-facing kind identifier.

        Parameters
        ----------
        kind : ElementKind | str
            Either an `ElementKind`, or one of the strings ``"double"``,
            ``"ndarray-double"``, ``"object"``, ``"ndarray"``, ``"generic"``
            (case-insensitive).

        Returns
        -------
        ElementKind
            The normalized element kind.

        Raises
        ------
        ValueError
            If the identifier is not recognized.
        """
        if isinstance(kind, ElementKind):
            return kind
        key = str(kind).strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        raise ValueError(
            f"Invalid element kind {kind!r}. Expected one of {sorted(_ALIASES)}"
        )

    def __str__(self) -> str:
        return self.value


_ALIASES = {
    "double": ElementKind.DOUBLE,
    "ndarray-double": ElementKind.DOUBLE,
    "float64": ElementKind.DOUBLE,
    "object": ElementKind.OBJECT,
    "ndarray": ElementKind.OBJECT,
    "generic": ElementKind.OBJECT,
}
