"""
Element-kind-specific implementations of `element_seq`.

The double path reads the whole logical layout through one NumPy view and
converts it to Python floats in a single call. The object path walks the
row-major offsets and returns the stored objects unchanged.
"""

from .....domain._element_kind import ElementKind
from ..._index_mapper import iter_offsets
from ..._ndarray_builder import ndarray_control_path

from ._base import NDArrayMixinFunctional as NDF

__all__: list = []


@ndarray_control_path(NDF, NDF.element_seq, ElementKind.DOUBLE)
def ndarray_element_seq_double(self) -> list:
    """Read every element through one NumPy view as Python floats."""
    return self._as_numpy_view().ravel().tolist()


@ndarray_control_path(NDF, NDF.element_seq, ElementKind.OBJECT)
def ndarray_element_seq_object(self) -> list:
    """Collect the stored objects in row-major order."""
    data = self.data
    return [data[p] for p in iter_offsets(self.shape, self.strides, self.offset)]
