"""
Whole-array reductions: `element_sum` and `element_product`.

The double path reduces the float64 buffer with NumPy; the object path folds
the element sequence with ``+`` / ``*``.
"""

from ..._specialize import specialize_reduction

from ._base import NDArrayMixinArithmetic as NDA

__all__: list = []


@specialize_reduction(NDA, NDA.element_sum)
def _element_sum(ops, values):
    """Sum of all elements (0 for an empty array)."""
    return ops.sum(values)


@specialize_reduction(NDA, NDA.element_product)
def _element_product(ops, values):
    """Product of all elements (1 for an empty array)."""
    return ops.product(values)
