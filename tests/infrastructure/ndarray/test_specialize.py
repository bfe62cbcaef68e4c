import math
import unittest
from unittest import TestCase

import numpy as np

from src.ndstride.domain._element_kind import ElementKind
from src.ndstride.domain._errors import ShapeMismatchError
from src.ndstride.infrastructure.ndarray import (
    DoubleOps,
    Kernel,
    ObjectOps,
    Reduction,
    construct,
    empty_ndarray,
)
from src.ndstride.infrastructure.ndarray._specialize import select_kind


@Kernel
def add_product(ops, idx, x, a, b):
    return ops.add(x, ops.mul(a, b))


@Kernel
def poly(ops, idx, x):
    return ops.add(ops.mul(x, x), ops.sqrt(ops.abs(x)))


class Fraction2:
    """Minimal value type supporting only the dunders a kernel needs."""

    def __init__(self, n):
        self.n = n

    def __add__(self, other):
        return Fraction2(self.n + getattr(other, "n", other))

    def __mul__(self, other):
        return Fraction2(self.n * getattr(other, "n", other))

    def __eq__(self, other):
        return self.n == getattr(other, "n", other)


class TestKernelInstantiation(TestCase):
    def test_compile_is_cached_per_kind(self):
        self.assertIs(poly.compile("double"), poly.compile(ElementKind.DOUBLE))
        self.assertIsNot(poly.compile("double"), poly.compile("object"))
        self.assertEqual(poly.compile("object").__name__, "poly_object")

    def test_indexed_loops_are_cached_separately(self):
        indexed = poly.compile("double", indexed=True)
        self.assertIs(indexed, poly.compile(ElementKind.DOUBLE, indexed=True))
        self.assertIsNot(indexed, poly.compile("double"))
        self.assertEqual(indexed.__name__, "poly_indexed_double")

    def test_indexed_paths_agree(self):
        @Kernel
        def diagonal(ops, idx, x):
            return ops.mul(x, ops.add(idx[0], ops.mul(idx[1], idx[1])))

        outs = []
        for kind in ("double", "object"):
            x = construct([[1, 2, 3], [4, 5, 6]], kind)
            diagonal.compile(kind, indexed=True)(x, x)
            outs.append(x.to_nested())
        self.assertEqual(outs[0], outs[1])
        self.assertEqual(outs[0], [[0, 2, 12], [4, 10, 30]])

    def test_paths_agree(self):
        data = [[1.0, 4.0], [9.0, -16.0]]
        outs = []
        for kind in ("double", "object"):
            x = construct(data, kind)
            poly(x, x)
            outs.append(x.to_nested())
        np.testing.assert_allclose(outs[0], outs[1])
        self.assertEqual(outs[0][0], [2.0, 18.0])

    def test_add_product(self):
        for kind in ("double", "object"):
            target = empty_ndarray([1], kind)
            add_product(target, construct([1], kind), construct([2], kind), construct([3], kind))
            self.assertEqual(target.to_nested(), [7])

    def test_add_product_ten(self):
        x = construct([4], "double")
        add_product(x, x, construct([2], "double"), construct([3], "double"))
        self.assertEqual(x.to_nested(), [10.0])

    def test_selection_happens_once_from_declared_kinds(self):
        d = construct([1.0], "double")
        o = construct([1.0], "object")
        self.assertIs(select_kind([d, d]), ElementKind.DOUBLE)
        self.assertIs(select_kind([d, o]), ElementKind.OBJECT)

    def test_mixed_kinds_use_generic_path(self):
        target = empty_ndarray([2], "double")
        add_product(target, construct([1, 1], "object"), construct([2, 3], "double"), construct([1, 1], "object"))
        self.assertEqual(target.to_nested(), [3.0, 4.0])

    def test_generic_path_dispatches_on_values(self):
        target = empty_ndarray([2], "object")
        a = construct([Fraction2(1), Fraction2(2)], "object")
        b = construct([3, 4], "object")
        x = construct([Fraction2(0), Fraction2(1)], "object")
        add_product(target, x, a, b)
        self.assertEqual([v.n for v in target.element_seq()], [3, 9])

    def test_co_iteration_requires_identical_shapes(self):
        target = empty_ndarray([2], "double")
        with self.assertRaises(ShapeMismatchError):
            add_product(target, construct([1, 2], "double"), construct([1], "double"), construct([1, 2], "double"))

    def test_zero_length_is_noop(self):
        target = empty_ndarray([0], "double")
        self.assertIs(poly(target, target), target)

    def test_index_is_flat_position(self):
        @Kernel
        def position(ops, idx, x):
            return ops.add(ops.mul(x, 0), idx)

        for kind in ("double", "object"):
            a = empty_ndarray([2, 3], kind)
            if kind == "object":
                a.fill_(0)
            position(a, a)
            self.assertEqual(list(a.element_seq()), [0, 1, 2, 3, 4, 5])

    def test_aliased_target_and_operand(self):
        for kind in ("double", "object"):
            a = construct([[1, 2], [3, 4]], kind)
            Kernel(lambda ops, idx, x: x)(a, a.transpose())
            self.assertEqual(a.to_nested(), [[1, 3], [2, 4]])


class TestOps(TestCase):
    def test_double_ops_are_vectorized(self):
        v = np.array([1.0, 4.0])
        np.testing.assert_array_equal(DoubleOps.sqrt(v), [1.0, 2.0])
        self.assertEqual(DoubleOps.sum(v), 5.0)
        self.assertEqual(DoubleOps.product(np.array([])), 1.0)

    def test_object_ops_fold(self):
        self.assertEqual(ObjectOps.sum([]), 0)
        self.assertEqual(ObjectOps.product([]), 1)
        self.assertEqual(ObjectOps.sum(["a", "b"]), "ab")
        self.assertEqual(ObjectOps.sqrt(9), 3.0)
        self.assertAlmostEqual(ObjectOps.exp(0.0), math.exp(0.0))


class TestReduction(TestCase):
    def test_reduction_per_kind(self):
        maximum = Reduction(
            lambda ops, values: max(values) if len(values) else None, "maximum"
        )
        self.assertEqual(maximum(construct([[1, 5], [3, 2]], "double")), 5.0)
        self.assertEqual(maximum(construct([[1, 5], [3, 2]], "object")), 5)
        self.assertIsNone(maximum(empty_ndarray([0], "object")))


if __name__ == "__main__":
    unittest.main()
