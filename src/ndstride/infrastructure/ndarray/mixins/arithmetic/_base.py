"""
Element-wise arithmetic mixin defining the public NDArray arithmetic API.

Every method here is declared without a body and implemented by the
specialization generator, which registers a primitive (float64) and a
generic (object) instantiation per method:

- `_ndarray_elementwise` : add, sub, mul, div (copying and in-place)
- `_ndarray_scaling`     : scale, add_scaled, add_product (copying and in-place)
- `_ndarray_reduction`   : element_sum, element_product

Operand handling
----------------
Operands may be scalars, nested sequences, NumPy arrays, NDArrays of either
element kind or foreign representations. Each operand is coerced into the
receiver's representation, then broadcast to the receiver's shape; the
receiver's shape never changes.

Copying methods return a new owning array and leave the receiver untouched.
Methods with a trailing underscore write into the receiver and return it;
they raise `CapabilityNotImplementedError` on immutable arrays.
"""

from typing import Any
from abc import ABC


class NDArrayMixinArithmetic(ABC):
    """Element-wise arithmetic and reductions for `NDArrayCore` hosts."""

    def add(self, other: Any) -> Any:
        """Return ``self + other`` element-wise."""

    def add_(self, other: Any) -> Any:
        """In-place `add`."""

    def sub(self, other: Any) -> Any:
        """Return ``self - other`` element-wise."""

    def sub_(self, other: Any) -> Any:
        """In-place `sub`."""

    def mul(self, other: Any) -> Any:
        """Return ``self * other`` element-wise."""

    def mul_(self, other: Any) -> Any:
        """In-place `mul`."""

    def div(self, other: Any) -> Any:
        """
        Return ``self / other`` element-wise (true division).

        Double storage follows IEEE semantics (division by zero yields
        ``inf`` or ``nan``); object storage raises `ZeroDivisionError` as the
        element type does.
        """

    def div_(self, other: Any) -> Any:
        """In-place `div`."""

    def scale(self, factor: Any) -> Any:
        """Return ``self * factor``."""

    def scale_(self, factor: Any) -> Any:
        """In-place `scale`."""

    def add_scaled(self, a: Any, factor: Any) -> Any:
        """
        Return ``self + a * factor``.

        Parameters
        ----------
        a : Any
            Array-like operand, broadcast to this shape.
        factor : Any
            Scale applied to `a`; a scalar or anything broadcastable.
        """

    def add_scaled_(self, a: Any, factor: Any) -> Any:
        """In-place `add_scaled`."""

    def add_product(self, a: Any, b: Any) -> Any:
        """Return ``self + a * b`` element-wise."""

    def add_product_(self, a: Any, b: Any) -> Any:
        """In-place `add_product`."""

    def element_sum(self) -> Any:
        """
        Return the sum of all elements.

        The sum of an empty array is 0. On object storage the elements are
        added with ``+`` left to right, so a `TypeError` from the elements
        (e.g. absent ``None`` slots) propagates.
        """

    def element_product(self) -> Any:
        """Return the product of all elements (1 for an empty array)."""
