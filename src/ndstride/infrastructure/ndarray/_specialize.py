"""
Type-specialization of element-wise kernels.

A kernel is written once, as a *body* over "the current element value(s)"
and "the current flat index", against an abstract operation namespace
(`ops`). This module instantiates each body into one concrete loop per
element kind:

- primitive path (`ElementKind.DOUBLE`): the body runs once, with every
  operand presented as a float64 NumPy array of the target's shape and the
  flat index as an integer array. Arithmetic goes straight to NumPy ufuncs;
  no per-element Python objects are created.
- generic path (`ElementKind.OBJECT`): the body runs once per element, with
  plain Python values and an `int` index. Arithmetic goes through the
  `operator` / `math` functions, so any value implementing the matching
  dunder methods takes part.

Both instantiations of one body must produce element-wise equal results for
the same logical input. The instantiation is chosen once per call from the
operands' declared element kinds, never per element.

Example
-------
    @Kernel
    def add_product(ops, idx, x, a, b):
        return ops.add(x, ops.mul(a, b))

    add_product(target, x, a, b)   # writes x + a*b into target

Notes
-----
- Co-iterated operands must share the target's shape (`ShapeMismatchError`).
- Results are fully computed before anything is written back, so a target
  that aliases one of its operands (views, transposes) is updated safely.
- Zero-size targets run no loop and are returned untouched.
"""

from __future__ import annotations

import math
import operator
from functools import reduce
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

import numpy as np

from ...domain._element_kind import ElementKind
from ...domain._errors import ShapeMismatchError
from ._index_mapper import iter_indices, iter_offsets
from ._ndarray_builder import ndarray_control_path


class ElementOps:
    """
    Operation namespace a kernel body is written against.

    Subclasses bind every name to a concrete implementation for one element
    kind. Bodies must only use these names (plus ordinary Python control
    flow that does not branch on element values) to stay portable across
    both paths.
    """

    kind: ElementKind

    add: Callable[[Any, Any], Any]
    sub: Callable[[Any, Any], Any]
    mul: Callable[[Any, Any], Any]
    div: Callable[[Any, Any], Any]
    neg: Callable[[Any], Any]
    abs: Callable[[Any], Any]
    sqrt: Callable[[Any], Any]
    exp: Callable[[Any], Any]
    log: Callable[[Any], Any]
    sin: Callable[[Any], Any]
    cos: Callable[[Any], Any]
    sum: Callable[[Any], Any]
    product: Callable[[Any], Any]


class DoubleOps(ElementOps):
    """Vectorized float64 operations (primitive path)."""

    kind = ElementKind.DOUBLE

    add = staticmethod(np.add)
    sub = staticmethod(np.subtract)
    mul = staticmethod(np.multiply)
    div = staticmethod(np.true_divide)
    neg = staticmethod(np.negative)
    abs = staticmethod(np.abs)
    sqrt = staticmethod(np.sqrt)
    exp = staticmethod(np.exp)
    log = staticmethod(np.log)
    sin = staticmethod(np.sin)
    cos = staticmethod(np.cos)

    @staticmethod
    def sum(values: np.ndarray) -> float:
        return float(np.sum(values))

    @staticmethod
    def product(values: np.ndarray) -> float:
        return float(np.prod(values))


def _fold(op: Callable[[Any, Any], Any], empty: Any) -> Callable[[Sequence[Any]], Any]:
    def folded(values: Sequence[Any]) -> Any:
        values = list(values)
        if not values:
            return empty
        return reduce(op, values)

    return folded


class ObjectOps(ElementOps):
    """Per-value operations dispatched on the values themselves (generic path)."""

    kind = ElementKind.OBJECT

    add = staticmethod(operator.add)
    sub = staticmethod(operator.sub)
    mul = staticmethod(operator.mul)
    div = staticmethod(operator.truediv)
    neg = staticmethod(operator.neg)
    abs = staticmethod(operator.abs)
    sqrt = staticmethod(math.sqrt)
    exp = staticmethod(math.exp)
    log = staticmethod(math.log)
    sin = staticmethod(math.sin)
    cos = staticmethod(math.cos)
    sum = staticmethod(_fold(operator.add, 0))
    product = staticmethod(_fold(operator.mul, 1))


ELEMENT_OPS: Dict[ElementKind, ElementOps] = {
    ElementKind.DOUBLE: DoubleOps(),
    ElementKind.OBJECT: ObjectOps(),
}


def select_kind(arrays: Iterable[Any]) -> ElementKind:
    """Primitive path only when every array declares double storage."""
    for a in arrays:
        if a.element_kind is not ElementKind.DOUBLE:
            return ElementKind.OBJECT
    return ElementKind.DOUBLE


def _check_co_iteration(target: Any, operands: Sequence[Any]) -> None:
    for a in operands:
        if a.shape != target.shape:
            raise ShapeMismatchError(target.shape, a.shape)


def _primitive_loop(body: Callable[..., Any], indexed: bool = False) -> Callable[..., Any]:
    ops = ELEMENT_OPS[ElementKind.DOUBLE]

    def loop(target: Any, *operands: Any) -> Any:
        _check_co_iteration(target, operands)
        n = target.element_count()
        if n == 0:
            return target
        values = [np.asarray(a._as_numpy_view(), dtype=np.float64) for a in operands]
        if indexed:
            idx = tuple(np.indices(target.shape))
        else:
            idx = np.arange(n).reshape(target.shape)
        result = np.asarray(body(ops, idx, *values), dtype=np.float64)
        out = target._as_numpy_view()
        if np.may_share_memory(out, result):
            result = result.copy()
        np.copyto(out, np.broadcast_to(result, target.shape), casting="unsafe")
        return target

    return loop


def _generic_loop(body: Callable[..., Any], indexed: bool = False) -> Callable[..., Any]:
    ops = ELEMENT_OPS[ElementKind.OBJECT]

    def loop(target: Any, *operands: Any) -> Any:
        _check_co_iteration(target, operands)
        n = target.element_count()
        if n == 0:
            return target
        streams = [iter_offsets(a.shape, a.strides, a.offset) for a in operands]
        indices = iter_indices(target.shape) if indexed else range(n)
        results = []
        for idx, (pos, *positions) in zip(
            indices,
            zip(iter_offsets(target.shape, target.strides, target.offset), *streams),
        ):
            values = [a._raw_get(p) for a, p in zip(operands, positions)]
            results.append((pos, body(ops, idx, *values)))
        for pos, value in results:
            target._raw_set(pos, value)
        return target

    return loop


class Kernel:
    """
    An element-wise algorithm with one compiled instantiation per element kind.

    Parameters
    ----------
    body : Callable
        ``body(ops, idx, *values) -> value``. `ops` is an `ElementOps`
        namespace, `idx` the current flat (row-major) index (its
        coordinates for loops compiled with ``indexed=True``), `values` the
        current element of each operand.
    name : str, optional
        Name used for the compiled loops. Defaults to ``body.__name__``.
    """

    def __init__(self, body: Callable[..., Any], name: Optional[str] = None) -> None:
        self._body = body
        self.__name__ = name or getattr(body, "__name__", "kernel")
        self.__doc__ = getattr(body, "__doc__", None)
        self._compiled: Dict[tuple, Callable[..., Any]] = {}

    @property
    def body(self) -> Callable[..., Any]:
        return self._body

    def compile(self, kind: Any, *, indexed: bool = False) -> Callable[..., Any]:
        """
        Return the loop specialized for `kind`, building it on first use.

        The returned callable has the signature ``loop(target, *operands)``
        and returns `target` after writing every result into it.

        With ``indexed=True`` the body's `idx` is the coordinate tuple of the
        current element instead of its flat index. On the primitive path it
        is a tuple of integer arrays, one per axis (as `numpy.indices`
        produces); on the generic path a tuple of ints.
        """
        kind = ElementKind.parse(kind)
        key = (kind, bool(indexed))
        loop = self._compiled.get(key)
        if loop is None:
            if kind.is_primitive():
                loop = _primitive_loop(self._body, indexed)
            else:
                loop = _generic_loop(self._body, indexed)
            suffix = "_indexed" if indexed else ""
            loop.__name__ = f"{self.__name__}{suffix}_{kind.value}"
            self._compiled[key] = loop
        return loop

    def __call__(self, target: Any, *operands: Any) -> Any:
        return self.compile(select_kind((target, *operands)))(target, *operands)

    def __repr__(self) -> str:
        return f"Kernel({self.__name__})"


class Reduction:
    """
    A whole-sequence reduction with one instantiation per element kind.

    ``body(ops, values)`` receives the full row-major element sequence: a
    flat float64 array on the primitive path, a list on the generic path.
    """

    def __init__(self, body: Callable[..., Any], name: Optional[str] = None) -> None:
        self._body = body
        self.__name__ = name or getattr(body, "__name__", "reduction")
        self.__doc__ = getattr(body, "__doc__", None)

    def compile(self, kind: Any) -> Callable[[Any], Any]:
        kind = ElementKind.parse(kind)
        body = self._body
        ops = ELEMENT_OPS[kind]
        if kind.is_primitive():

            def reduce_primitive(a: Any) -> Any:
                values = np.asarray(a._as_numpy_view(), dtype=np.float64).ravel()
                return body(ops, values)

            return reduce_primitive

        def reduce_generic(a: Any) -> Any:
            return body(ops, list(a.element_seq()))

        return reduce_generic

    def __call__(self, a: Any) -> Any:
        return self.compile(a.element_kind)(a)


def specialize(
    cls: type,
    method: Callable[..., Any],
    *,
    in_place: bool,
    kinds: Sequence[ElementKind] = tuple(ElementKind),
) -> Callable[[Any], Kernel]:
    """
    Register a kernel body as the per-kind control paths of ``cls.method``.

    The installed method has the signature ``method(self, *args)``. Each
    argument is coerced into the receiver's representation and broadcast to
    its shape, then the body runs with the receiver's current element first:
    ``body(ops, idx, self_value, *arg_values)``.

    Parameters
    ----------
    cls : type
        Mixin class declaring `method`.
    method : Callable
        The declared method (its name and docstring are kept).
    in_place : bool
        If True, results are written into the receiver (which must be
        mutable) and the receiver is returned. Otherwise the receiver is
        cloned first and the clone is returned.
    kinds : Sequence[ElementKind], optional
        Element kinds to register. Defaults to all kinds.

    Returns
    -------
    Callable
        Decorator taking the body (or a `Kernel`) and returning the `Kernel`.
    """
    name = method.__name__

    def decorator(body: Any) -> Kernel:
        kernel = body if isinstance(body, Kernel) else Kernel(body, name)
        for kind in kinds:
            ndarray_control_path(cls, method, kind)(
                _bind_as_method(kernel.compile(kind), name, in_place)
            )
        return kernel

    return decorator


def _bind_as_method(
    loop: Callable[..., Any], name: str, in_place: bool
) -> Callable[..., Any]:
    def run(self: Any, *args: Any) -> Any:
        operands = [self._prepare_operand(a) for a in args]
        if in_place:
            self._require_mutable(name)
            return loop(self, self, *operands)
        return loop(self.clone(), self, *operands)

    run.__name__ = loop.__name__
    return run


def specialize_reduction(
    cls: type,
    method: Callable[..., Any],
    *,
    kinds: Sequence[ElementKind] = tuple(ElementKind),
) -> Callable[[Any], Reduction]:
    """
    Register a reduction body as the per-kind control paths of ``cls.method``.

    The installed method takes no arguments besides the receiver and returns
    ``body(ops, values)`` over the receiver's row-major elements.
    """
    name = method.__name__

    def decorator(body: Any) -> Reduction:
        reduction = body if isinstance(body, Reduction) else Reduction(body, name)
        for kind in kinds:
            compiled = reduction.compile(kind)
            compiled.__name__ = f"{name}_{ElementKind.parse(kind).value}"
            ndarray_control_path(cls, method, kind)(compiled)
        return reduction

    return decorator
