"""
Array construction from arbitrary data.

`construct` is the single entry point used by coercion, `construct_array`
and the public API. It accepts:

- NDArrays and views of either element kind (copied, never aliased),
- `numpy.ndarray` instances,
- nested Python lists / tuples,
- foreign representations implementing `IDimensionInfo` plus an element or
  major-slice sequence,
- scalars, which yield rank-0 arrays.

The full shape is validated before any storage is allocated, so ragged input
fails with `InconsistentShapeError` without side effects.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

import numpy as np

from ...domain._element_kind import ElementKind
from ...domain._errors import InconsistentShapeError
from .._config import default_element_kind
from ..interop import _nested as interop
from ._ndarray import NDArray
from ._ndarray_core import NDArrayCore


def _resolve_kind(source: Any, kind: Optional[Union[ElementKind, str]]) -> ElementKind:
    if kind is not None:
        return ElementKind.parse(kind)
    if isinstance(source, NDArrayCore):
        return source.element_kind
    return default_element_kind()


def construct(
    source: Any, kind: Optional[Union[ElementKind, str]] = None
) -> NDArray:
    """
    Build a new owning array holding the data of `source`.

    Parameters
    ----------
    source : Any
        Array-like data or a scalar.
    kind : ElementKind | str, optional
        Element kind of the result. When omitted, NDArray sources keep their
        own kind and everything else uses the configured default kind.

    Returns
    -------
    NDArray
        Contiguous, mutable array with the shape of `source`.

    Raises
    ------
    InconsistentShapeError
        If `source` is ragged or a foreign representation's element sequence
        does not match its reported shape.
    InvalidShapeError
        If a reported shape is malformed.
    TypeError, ValueError
        If an element cannot be stored as a double (double kind only).
    """
    kind = _resolve_kind(source, kind)
    shape = interop.validate_shape(source)
    out = NDArray(shape, kind)
    n = out.element_count()
    if n == 0:
        return out

    if isinstance(source, NDArrayCore):
        out.data[:] = source._as_numpy_view().ravel()
        return out

    if isinstance(source, np.ndarray):
        out.data[:] = np.asarray(source, dtype=kind.dtype).ravel()
        return out

    if not shape:
        out._raw_set(0, interop.get_0d(source))
        return out

    values = list(interop.element_seq(source))
    if len(values) != n:
        raise InconsistentShapeError(
            f"{type(source).__name__} of shape {shape!r} yielded "
            f"{len(values)} elements, expected {n}"
        )
    if kind is ElementKind.DOUBLE:
        out.data[:] = np.fromiter(values, dtype=np.float64, count=n)
    else:
        for pos, value in enumerate(values):
            out._raw_set(pos, value)
    return out


def empty_ndarray(
    shape: Sequence[int], kind: Optional[Union[ElementKind, str]] = None
) -> NDArray:
    """
    Return a new array of `shape` holding default values.

    Double arrays start at ``0.0``, object arrays at ``None``.
    """
    return NDArray(shape, kind)
