"""
Element-kind-specific implementations of `element_map` / `element_map_indexed`.

Both methods produce a new owning array of the receiver's shape and element
kind. A `Kernel` argument runs its compiled instantiation for the receiver's
kind. Its body receives the flat index under `element_map` and the
coordinate tuple under `element_map_indexed`. A plain callable
is applied element by element; the double path then stores all results with
one `numpy.fromiter` call, the object path stores each result as-is.
"""

from typing import Any, Callable, Sequence

import numpy as np

from .....domain._element_kind import ElementKind
from ..._index_mapper import iter_indices
from ..._ndarray_builder import ndarray_control_path
from ..._specialize import Kernel

from ._base import NDArrayMixinFunctional as NDF

__all__: list = []


def map_values(
    f: Callable[..., Any], arrays: Sequence[Any], indexed: bool
) -> list:
    """
    Apply `f` across co-iterated arrays in row-major order.

    Every result is computed before the caller writes anything back.
    """
    seqs = [a.element_seq() for a in arrays]
    if indexed:
        return [
            f(idx, *values)
            for idx, values in zip(iter_indices(arrays[0].shape), zip(*seqs))
        ]
    return [f(*values) for values in zip(*seqs)]


def _map_double(self, f, others, indexed):
    co = self._co_operands(others)
    out = self._new(self.shape)
    if isinstance(f, Kernel):
        return f.compile(ElementKind.DOUBLE, indexed=indexed)(out, self, *co)
    results = map_values(f, [self, *co], indexed)
    if results:
        out.data[:] = np.fromiter(results, dtype=np.float64, count=len(results))
    return out


def _map_object(self, f, others, indexed):
    co = self._co_operands(others)
    out = self._new(self.shape)
    if isinstance(f, Kernel):
        return f.compile(ElementKind.OBJECT, indexed=indexed)(out, self, *co)
    for pos, value in enumerate(map_values(f, [self, *co], indexed)):
        out._raw_set(pos, value)
    return out


@ndarray_control_path(NDF, NDF.element_map, ElementKind.DOUBLE)
def ndarray_element_map_double(self, f: Callable[..., Any], *others: Any):
    """Map into a new float64 array (results stored with one `numpy.fromiter`)."""
    return _map_double(self, f, others, indexed=False)


@ndarray_control_path(NDF, NDF.element_map, ElementKind.OBJECT)
def ndarray_element_map_object(self, f: Callable[..., Any], *others: Any):
    """Map into a new object array, storing each result as-is."""
    return _map_object(self, f, others, indexed=False)


@ndarray_control_path(NDF, NDF.element_map_indexed, ElementKind.DOUBLE)
def ndarray_element_map_indexed_double(self, f: Callable[..., Any], *others: Any):
    """Indexed map into a new float64 array."""
    return _map_double(self, f, others, indexed=True)


@ndarray_control_path(NDF, NDF.element_map_indexed, ElementKind.OBJECT)
def ndarray_element_map_indexed_object(self, f: Callable[..., Any], *others: Any):
    """Indexed map into a new object array."""
    return _map_object(self, f, others, indexed=True)
