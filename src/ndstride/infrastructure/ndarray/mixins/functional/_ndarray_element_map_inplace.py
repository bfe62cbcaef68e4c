"""
Element-kind-specific implementations of `element_map_` / `element_map_indexed_`.

Mutable map rule
----------------
For every element slot:

- if the slot holds an independently mutable array (`IMutableMap` with
  ``is_mutable()`` true), that array is mapped in place and the slot keeps
  pointing at it, so every other holder of the nested array observes the
  change;
- otherwise the slot is replaced by ``f``'s result.

Only object storage can hold nested arrays, so the double path always
replaces. On the indexed variant, nested arrays receive the outer
coordinates prefixed to their own. Co-iterated elements that are arrays are
co-iterated with the nested array; scalar co-elements are passed unchanged
to every nested call.

Kernels write through their compiled loop and always replace slots.
Replacement values are written only after every result is computed.
"""

from itertools import repeat
from typing import Any, Callable, Optional, Sequence

import numpy as np

from .....domain._capabilities import IMutableMap
from .....domain._element_kind import ElementKind
from ....interop._nested import is_array_like
from ..._index_mapper import iter_indices, iter_offsets
from ..._ndarray_builder import ndarray_control_path
from ..._specialize import Kernel

from ._base import NDArrayMixinFunctional as NDF
from ._ndarray_element_map import map_values

__all__: list = []


def _nested(
    f: Callable[..., Any], ys: Sequence[Any], outer: Optional[tuple]
) -> tuple:
    arrays = [y for y in ys if is_array_like(y)]

    def g(*args: Any) -> Any:
        if outer is None:
            head, rest = args[:1], args[1:]
        else:
            inner, x, *rest = args
            head = (outer + tuple(inner), x)
        it = iter(rest)
        return f(*head, *(next(it) if is_array_like(y) else y for y in ys))

    return g, arrays


def _map_double_(self, name, f, others, indexed):
    self._require_mutable(name)
    co = self._co_operands(others)
    if isinstance(f, Kernel):
        return f.compile(ElementKind.DOUBLE, indexed=indexed)(self, self, *co)
    results = map_values(f, [self, *co], indexed)
    if results:
        values = np.fromiter(results, dtype=np.float64, count=len(results))
        self._as_numpy_view()[...] = values.reshape(self.shape)
    return self


def _map_object_(self, name, f, others, indexed):
    self._require_mutable(name)
    co = self._co_operands(others)
    if isinstance(f, Kernel):
        return f.compile(ElementKind.OBJECT, indexed=indexed)(self, self, *co)

    data = self.data
    positions = list(iter_offsets(self.shape, self.strides, self.offset))
    indices = iter_indices(self.shape) if indexed else repeat(None)
    seqs = [o.element_seq() for o in co]
    rows = zip(*seqs) if seqs else repeat(())

    replaced = []
    for pos, idx, ys in zip(positions, indices, rows):
        x = data[pos]
        if isinstance(x, IMutableMap) and x.is_mutable():
            g, arrays = _nested(f, ys, idx)
            if indexed:
                x.element_map_indexed_(g, *arrays)
            else:
                x.element_map_(g, *arrays)
        elif indexed:
            replaced.append((pos, f(idx, x, *ys)))
        else:
            replaced.append((pos, f(x, *ys)))

    for pos, value in replaced:
        self._raw_set(pos, value)
    return self


@ndarray_control_path(NDF, NDF.element_map_, ElementKind.DOUBLE)
def ndarray_element_map_inplace_double(self, f: Callable[..., Any], *others: Any):
    """In-place map over float64 storage (every slot is replaced)."""
    return _map_double_(self, "element_map_", f, others, indexed=False)


@ndarray_control_path(NDF, NDF.element_map_, ElementKind.OBJECT)
def ndarray_element_map_inplace_object(self, f: Callable[..., Any], *others: Any):
    """In-place map over object storage, recursing into mutable nested arrays."""
    return _map_object_(self, "element_map_", f, others, indexed=False)


@ndarray_control_path(NDF, NDF.element_map_indexed_, ElementKind.DOUBLE)
def ndarray_element_map_indexed_inplace_double(
    self, f: Callable[..., Any], *others: Any
):
    """Indexed in-place map over float64 storage."""
    return _map_double_(self, "element_map_indexed_", f, others, indexed=True)


@ndarray_control_path(NDF, NDF.element_map_indexed_, ElementKind.OBJECT)
def ndarray_element_map_indexed_inplace_object(
    self, f: Callable[..., Any], *others: Any
):
    """Indexed in-place map over object storage; nested arrays see full paths."""
    return _map_object_(self, "element_map_indexed_", f, others, indexed=True)
