"""
Functional map/reduce mixin defining the public NDArray functional API.

This module declares `NDArrayMixinFunctional`, which specifies the
Functional Map/Reduce and Mutable Map capabilities:

- `element_seq`           : row-major element sequence
- `element_map`           : new array from ``f(x, *others_x)``
- `element_map_indexed`   : new array from ``f(index, x, *others_x)``
- `element_reduce`        : left fold, with or without a seed
- `element_map_`          : in-place `element_map`
- `element_map_indexed_`  : in-place `element_map_indexed`

Element-wise methods are implemented per element kind in
`_ndarray_element_map` and selected at runtime from ``self.element_kind``.
`f` may be a plain callable or a `Kernel`; kernels run their compiled
instantiation for the receiver's kind.

Co-iterated arrays (`others`) are coerced into the receiver's
representation and must have exactly the receiver's shape; they are not
broadcast.
"""

from functools import reduce
from typing import Any, Callable, Iterable
from abc import ABC

from .....domain._errors import ShapeMismatchError


class NDArrayMixinFunctional(ABC):
    """Functional operations for `NDArrayCore` hosts."""

    def _co_operands(self, others: Iterable[Any]) -> list:
        operands = []
        for other in others:
            o = self.coerce_param(other)
            if o.shape != self.shape:
                raise ShapeMismatchError(self.shape, o.shape)
            operands.append(o)
        return operands

    def element_seq(self) -> Iterable[Any]:
        """
        Return the elements in row-major logical order.

        Works for any layout (views, transposes, broadcasts); broadcast
        repeats are yielded once per logical position.
        """

    def element_map(self, f: Callable[..., Any], *others: Any) -> Any:
        """
        Return a new array of ``f(x, *others_x)`` for every element.

        Parameters
        ----------
        f : Callable | Kernel
            Element function, or a `Kernel` whose body receives
            ``(ops, idx, x, *others_x)``.
        *others : Any
            Co-iterated arrays with the same shape as this array.

        Returns
        -------
        NDArray
            New owning array with this array's shape and element kind.

        Raises
        ------
        ShapeMismatchError
            If a co-iterated array has a different shape.
        """

    def element_map_indexed(self, f: Callable[..., Any], *others: Any) -> Any:
        """
        Return a new array of ``f(index, x, *others_x)`` for every element.

        `index` is the full coordinate tuple of the element. A `Kernel` body
        receives the coordinates as its `idx` argument.
        """

    def element_map_(self, f: Callable[..., Any], *others: Any) -> Any:
        """
        Apply `f` to every element in place and return this array.

        Mutable map rule: a slot whose value is itself an independently
        mutable array is mapped in place (so other holders of that array see
        the change); any other slot is replaced by the new value.

        Raises
        ------
        CapabilityNotImplementedError
            If this array is immutable.
        ShapeMismatchError
            If a co-iterated array has a different shape.
        """

    def element_map_indexed_(self, f: Callable[..., Any], *others: Any) -> Any:
        """
        Indexed variant of `element_map_`.

        Nested mutable arrays receive the outer coordinates prefixed to their
        own, so `f` always sees the full path to the value.
        """

    def element_reduce(self, f: Callable[[Any, Any], Any], *init: Any) -> Any:
        """
        Left-fold `f` over the row-major element sequence.

        Parameters
        ----------
        f : Callable[[Any, Any], Any]
            Binary accumulator function.
        *init : Any
            Optional seed (at most one value).

        Raises
        ------
        TypeError
            If more than one seed is given, or if the array is empty and no
            seed is given.
        """
        if len(init) > 1:
            raise TypeError(
                f"element_reduce expected at most 1 seed, got {len(init)}"
            )
        return reduce(f, self.element_seq(), *init)
