import unittest
from unittest import TestCase

import numpy as np

from src.ndstride.domain._errors import InconsistentShapeError, RankMismatchError
from src.ndstride.infrastructure.interop import (
    dimensionality,
    element_seq,
    get_0d,
    get_shape,
    is_array_like,
    major_slice_seq,
    to_nested,
    validate_shape,
)
from src.ndstride.infrastructure.ndarray import construct


class Rows:
    """Foreign representation exposing only major slices."""

    def __init__(self, rows):
        self._rows = rows

    def dimensionality(self):
        return 2

    def get_shape(self):
        return (len(self._rows), len(self._rows[0]))

    def dimension_count(self, axis):
        return self.get_shape()[axis]

    def is_scalar(self):
        return False

    def is_vector(self):
        return False

    def get_major_slice(self, i):
        return self._rows[i]

    def get_major_slice_view(self, i):
        return self._rows[i]

    def get_major_slice_seq(self):
        return list(self._rows)

    def get_slice(self, axis, i):
        raise NotImplementedError

    def get_slice_view(self, axis, i):
        raise NotImplementedError


class TestShapes(TestCase):
    def test_nested_sequences(self):
        self.assertEqual(get_shape([[1, 2, 3], [4, 5, 6]]), (2, 3))
        self.assertEqual(get_shape(((1,), (2,))), (2, 1))
        self.assertEqual(get_shape(5), ())
        self.assertEqual(get_shape("abc"), ())
        self.assertEqual(dimensionality([[[1]]]), 3)
        self.assertEqual(dimensionality([]), 1)

    def test_ragged(self):
        with self.assertRaises(InconsistentShapeError):
            validate_shape([[1], [2, 3]])
        with self.assertRaises(InconsistentShapeError):
            validate_shape([[1, 2], 3])

    def test_foreign_slices_are_checked(self):
        self.assertEqual(validate_shape(Rows([[1, 2], [3, 4]])), (2, 2))
        with self.assertRaises(InconsistentShapeError):
            validate_shape(Rows([[1, 2], [3]]))

    def test_numpy(self):
        self.assertEqual(get_shape(np.zeros((3, 0))), (3, 0))
        self.assertEqual(dimensionality(np.float64(1.0)), 0)


class TestSequences(TestCase):
    def test_element_seq(self):
        self.assertEqual(list(element_seq([[1, 2], [3, 4]])), [1, 2, 3, 4])
        self.assertEqual(list(element_seq(7)), [7])
        self.assertEqual(list(element_seq(np.array([[1, 2]]))), [1, 2])
        self.assertEqual(list(element_seq(Rows([[1, 2], [3, 4]]))), [1, 2, 3, 4])

    def test_major_slices(self):
        self.assertEqual(major_slice_seq([[1], [2]]), [[1], [2]])
        with self.assertRaises(RankMismatchError):
            major_slice_seq(3)

    def test_get_0d(self):
        self.assertEqual(get_0d(np.float64(2.5)), 2.5)
        self.assertEqual(get_0d(np.array(4)), 4)
        self.assertEqual(get_0d(construct(9, "object")), 9)
        self.assertEqual(get_0d("x"), "x")
        with self.assertRaises(RankMismatchError):
            get_0d(construct([1]))

    def test_to_nested(self):
        self.assertEqual(to_nested(((1, 2), (3, 4))), [[1, 2], [3, 4]])
        self.assertEqual(to_nested(Rows([[1, 2]])), [[1, 2]])
        self.assertEqual(to_nested(construct([1], "double")), [1.0])

    def test_is_array_like(self):
        self.assertTrue(is_array_like([]))
        self.assertTrue(is_array_like(np.zeros(2)))
        self.assertTrue(is_array_like(construct(1)))
        self.assertFalse(is_array_like(1.5))
        self.assertFalse(is_array_like("ab"))


if __name__ == "__main__":
    unittest.main()
