import unittest
from unittest import TestCase

import numpy as np

from src.ndstride.domain._element_kind import ElementKind
from src.ndstride.domain._errors import ShapeMismatchError
from src.ndstride.infrastructure.ndarray import Kernel, construct, empty_ndarray


class TestElementSeq(TestCase):
    def test_row_major_order(self):
        for kind in ("double", "object"):
            a = construct([[1, 2], [3, 4]], kind)
            self.assertEqual(list(a.element_seq()), [1, 2, 3, 4])

    def test_follows_view_layout(self):
        a = construct([[1, 2], [3, 4]], "object")
        self.assertEqual(list(a.transpose().element_seq()), [1, 3, 2, 4])
        b = construct([1, 2], "double").broadcast([2, 2])
        self.assertEqual(list(b.element_seq()), [1.0, 2.0, 1.0, 2.0])

    def test_double_yields_python_floats(self):
        values = list(construct([1, 2], "double").element_seq())
        self.assertTrue(all(type(v) is float for v in values))

    def test_empty(self):
        self.assertEqual(list(empty_ndarray([0, 3], "double").element_seq()), [])


class TestElementMap(TestCase):
    def test_map_adds_one_on_both_paths(self):
        results = []
        for kind in ("double", "object"):
            a = construct([[1, 2], [3, 4]], kind)
            b = a.element_map(lambda x: x + 1)
            self.assertIs(b.element_kind, ElementKind.parse(kind))
            self.assertEqual(a.to_nested(), [[1, 2], [3, 4]])
            results.append(b.to_nested())
        self.assertEqual(results[0], [[2.0, 3.0], [4.0, 5.0]])
        self.assertEqual(results[0], results[1])

    def test_map_with_others(self):
        a = construct([1, 2, 3], "double")
        b = a.element_map(lambda x, y, z: x * y + z, [4, 5, 6], construct([1, 1, 1]))
        self.assertEqual(b.to_nested(), [5.0, 11.0, 19.0])

    def test_others_must_match_shape(self):
        a = construct([[1, 2], [3, 4]], "object")
        with self.assertRaises(ShapeMismatchError):
            a.element_map(lambda x, y: x + y, [1, 2])

    def test_object_map_calls_once_per_element(self):
        calls = []
        a = construct([["a", "b"], ["c", "d"]], "object")
        b = a.element_map(lambda s: calls.append(s) or s.upper())
        self.assertEqual(calls, ["a", "b", "c", "d"])
        self.assertEqual(b.to_nested(), [["A", "B"], ["C", "D"]])

    def test_map_over_transposed_view(self):
        a = construct([[1, 2], [3, 4]], "double")
        b = a.transpose().element_map(lambda x: x * 10)
        self.assertEqual(b.to_nested(), [[10.0, 30.0], [20.0, 40.0]])
        self.assertFalse(b.is_view())

    def test_map_rank_zero(self):
        self.assertEqual(construct(2, "object").element_map(lambda x: x ** 3).get(), 8)

    def test_map_with_kernel(self):
        @Kernel
        def shifted(ops, idx, x):
            return ops.add(x, idx)

        for kind in ("double", "object"):
            a = construct([[10, 10], [10, 10]], kind)
            self.assertEqual(
                a.element_map(shifted).to_nested(), [[10, 11], [12, 13]]
            )


class TestElementMapIndexed(TestCase):
    def test_indices_in_three_dimensions(self):
        for kind in ("double", "object"):
            a = empty_ndarray([2, 2, 2], kind)
            b = a.element_map_indexed(lambda idx, x: idx[0] * 100 + idx[1] * 10 + idx[2])
            self.assertEqual(
                list(b.element_seq()), [0, 1, 10, 11, 100, 101, 110, 111]
            )

    def test_indexed_with_others(self):
        a = construct([1, 2], "object")
        b = a.element_map_indexed(lambda idx, x, y: (idx, x, y), ["p", "q"])
        self.assertEqual(b.to_nested(), [((0,), 1, "p"), ((1,), 2, "q")])


    def test_indexed_kernel_receives_coordinates(self):
        @Kernel
        def encode(ops, idx, x):
            return ops.add(ops.mul(idx[0], 10), idx[1])

        for kind in ("double", "object"):
            a = empty_ndarray([2, 3], kind)
            self.assertEqual(
                a.element_map_indexed(encode).to_nested(), [[0, 1, 2], [10, 11, 12]]
            )

    def test_indexed_kernel_matches_plain_callable(self):
        @Kernel
        def where(ops, idx, x):
            return idx

        a = construct([["a", "b"], ["c", "d"]], "object")
        expected = [[(0, 0), (0, 1)], [(1, 0), (1, 1)]]
        self.assertEqual(a.element_map_indexed(where).to_nested(), expected)
        self.assertEqual(
            a.element_map_indexed(lambda idx, x: idx).to_nested(), expected
        )


class TestElementReduce(TestCase):
    def test_reduce_without_seed(self):
        a = construct([[1, 2], [3, 4]], "object")
        self.assertEqual(a.element_reduce(lambda acc, x: acc + x), 10)

    def test_reduce_with_seed(self):
        a = construct([1, 2, 3], "double")
        self.assertEqual(a.element_reduce(lambda acc, x: acc + [x], []), [1.0, 2.0, 3.0])

    def test_reduce_empty(self):
        a = empty_ndarray([0])
        self.assertEqual(a.element_reduce(lambda acc, x: acc + x, 5), 5)
        with self.assertRaises(TypeError):
            a.element_reduce(lambda acc, x: acc + x)

    def test_reduce_rejects_two_seeds(self):
        with self.assertRaises(TypeError):
            construct([1]).element_reduce(lambda a, b: a, 0, 1)

    def test_reduce_follows_logical_order(self):
        a = construct([["a", "b"], ["c", "d"]], "object")
        self.assertEqual(a.transpose().element_reduce(lambda s, x: s + x), "acbd")


class TestEquality(TestCase):
    def test_structural_equality_ignores_layout(self):
        a = construct([[1, 3], [2, 4]], "double")
        b = construct([[1, 2], [3, 4]], "object").transpose()
        self.assertTrue(a.equals(b))
        self.assertEqual(a, b)
        self.assertEqual(a, [[1, 3], [2, 4]])
        self.assertEqual(a, np.array([[1, 3], [2, 4]]))

    def test_inequality(self):
        a = construct([1, 2], "double")
        self.assertNotEqual(a, construct([1, 3], "double"))
        self.assertNotEqual(a, construct([[1, 2]], "double"))
        self.assertFalse(a.equals([[1, 2], [3]]))
        self.assertNotEqual(a, "ab")

    def test_elements_holding_numpy_arrays(self):
        a = empty_ndarray([1], "object")
        b = empty_ndarray([1], "object")
        a.set_((0,), np.array([1, 2]))
        b.set_((0,), np.array([1, 2]))
        self.assertTrue(a.equals(b))
        b.set_((0,), np.array([1, 3]))
        self.assertFalse(a.equals(b))
        b.set_((0,), np.array([1, 2, 3]))
        self.assertFalse(a.equals(b))

    def test_elements_holding_nested_arrays(self):
        a = empty_ndarray([2], "object")
        b = empty_ndarray([2], "object")
        for out in (a, b):
            out.set_((0,), construct([np.array([1.0, 2.0])], "object"))
            out.set_((1,), "tag")
        self.assertEqual(a, b)
        b.set_((1,), "other")
        self.assertNotEqual(a, b)

    def test_array_element_never_equals_scalar(self):
        a = empty_ndarray([1], "object")
        a.set_((0,), np.array([1, 1]))
        self.assertFalse(a.equals([1]))

    def test_tolerance(self):
        a = construct([[1.0, 2.0], [3.0, 4.0]], "double")
        b = construct([[1.0005, 2.0], [3.0, 3.9995]], "object")
        self.assertFalse(a.equals(b))
        self.assertTrue(a.equals(b, eps=1e-3))
        self.assertFalse(a.equals(b, eps=1e-4))
        self.assertFalse(a.equals([[1, 2], [3]], eps=1.0))

    def test_tolerance_ignores_non_numeric_elements(self):
        a = construct(["x", 1.0], "object")
        self.assertTrue(a.equals(["x", 1.01], eps=0.1))
        self.assertFalse(a.equals(["y", 1.0], eps=0.1))


if __name__ == "__main__":
    unittest.main()
