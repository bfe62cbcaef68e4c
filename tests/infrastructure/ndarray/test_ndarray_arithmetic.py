import unittest
from unittest import TestCase

import numpy as np

from src.ndstride.domain._element_kind import ElementKind
from src.ndstride.domain._errors import IncompatibleShapeError
from src.ndstride.infrastructure.ndarray import construct, empty_ndarray


class _BothKindsMixin:
    KINDS = ("double", "object")

    def _each(self, data):
        for kind in self.KINDS:
            yield kind, construct(data, kind)


class TestElementwise(TestCase, _BothKindsMixin):
    def test_add_scalar_then_sub_row(self):
        for kind, a in self._each([[1, 2], [3, 4]]):
            a.add_(10).sub_([3, 4])
            self.assertEqual(a.to_nested(), [[8, 8], [10, 10]])

    def test_add_then_sub_vector(self):
        for kind, a in self._each([1, 2]):
            a.add_(10)
            a.sub_(construct([3, 4], "object"))
            self.assertEqual(a.to_nested(), [8, 8])

    def test_copying_ops_leave_receiver(self):
        for kind, a in self._each([2, 4]):
            self.assertEqual(a.add(1).to_nested(), [3, 5])
            self.assertEqual(a.sub(1).to_nested(), [1, 3])
            self.assertEqual(a.mul([2, 3]).to_nested(), [4, 12])
            self.assertEqual(a.div(2).to_nested(), [1, 2])
            self.assertEqual(a.to_nested(), [2, 4])

    def test_result_keeps_receiver_kind(self):
        a = construct([1, 2], "double")
        b = construct([1, 2], "object")
        self.assertIs(a.add(b).element_kind, ElementKind.DOUBLE)
        self.assertIs(b.add(a).element_kind, ElementKind.OBJECT)

    def test_div_by_zero_per_kind(self):
        with np.errstate(divide="ignore"):
            d = construct([1.0], "double").div(0)
        self.assertEqual(d.get(0), float("inf"))
        with self.assertRaises(ZeroDivisionError):
            construct([1], "object").div(0)

    def test_operand_must_broadcast(self):
        with self.assertRaises(IncompatibleShapeError):
            construct([[1, 2], [3, 4]]).add([1, 2, 3])

    def test_in_place_through_broadcast_view(self):
        a = construct([1, 2], "double")
        a.broadcast([3, 2]).mul_(1)
        self.assertEqual(a.to_nested(), [1.0, 2.0])

    def test_object_values_use_their_operators(self):
        a = construct(["a", "b"], "object")
        self.assertEqual(a.add("!").to_nested(), ["a!", "b!"])
        self.assertEqual(a.mul(3).to_nested(), ["aaa", "bbb"])


class TestScaling(TestCase, _BothKindsMixin):
    def test_scale(self):
        for kind, a in self._each([[1, 2], [3, 4]]):
            self.assertEqual(a.scale(2).to_nested(), [[2, 4], [6, 8]])
            a.scale_(-1)
            self.assertEqual(a.to_nested(), [[-1, -2], [-3, -4]])

    def test_add_scaled(self):
        for kind, a in self._each([1, 2]):
            self.assertEqual(a.add_scaled([10, 20], 0.5).to_nested(), [6, 12])
            a.add_scaled_([1, 1], 3)
            self.assertEqual(a.to_nested(), [4, 5])

    def test_add_product(self):
        for kind, a in self._each([1]):
            self.assertEqual(a.add_product([2], [3]).to_nested(), [7])
        for kind, x in self._each([4]):
            x.add_product_(2, 3)
            self.assertEqual(x.to_nested(), [10])

    def test_add_product_with_self_operands(self):
        for kind, a in self._each([[1, 2], [3, 4]]):
            a.add_product_(a, a.transpose())
            self.assertEqual(a.to_nested(), [[2, 8], [9, 20]])


class TestReductions(TestCase, _BothKindsMixin):
    def test_element_sum(self):
        for kind, a in self._each([[1, 2], [3, 4]]):
            self.assertEqual(a.element_sum(), 10)

    def test_element_product(self):
        for kind, a in self._each([[1, 2], [3, 4]]):
            self.assertEqual(a.element_product(), 24)

    def test_empty_reductions(self):
        for kind in self.KINDS:
            a = empty_ndarray([0, 2], kind)
            self.assertEqual(a.element_sum(), 0)
            self.assertEqual(a.element_product(), 1)

    def test_sum_over_view(self):
        a = construct([1, 2], "double").broadcast([3, 2])
        self.assertEqual(a.element_sum(), 9.0)

    def test_sum_of_absent_values_raises(self):
        with self.assertRaises(TypeError):
            empty_ndarray([2], "object").element_sum()

    def test_double_sum_is_python_float(self):
        self.assertIsInstance(construct([1, 2], "double").element_sum(), float)


if __name__ == "__main__":
    unittest.main()
