import unittest

from src.ndstride.domain._errors import (
    NDArrayError,
    InvalidShapeError,
    InconsistentShapeError,
    IndexOutOfBoundsError,
    RankMismatchError,
    ShapeMismatchError,
    IncompatibleShapeError,
    CapabilityNotImplementedError,
    FallbackWarning,
)


class TestErrorTaxonomy(unittest.TestCase):
    def test_builtin_bases(self):
        self.assertTrue(issubclass(InvalidShapeError, ValueError))
        self.assertTrue(issubclass(InconsistentShapeError, ValueError))
        self.assertTrue(issubclass(IndexOutOfBoundsError, IndexError))
        self.assertTrue(issubclass(RankMismatchError, IndexError))
        self.assertTrue(issubclass(ShapeMismatchError, ValueError))
        self.assertTrue(issubclass(IncompatibleShapeError, ShapeMismatchError))
        self.assertTrue(issubclass(CapabilityNotImplementedError, NotImplementedError))
        self.assertTrue(issubclass(FallbackWarning, RuntimeWarning))

    def test_all_errors_share_base(self):
        for cls in (
            InvalidShapeError,
            InconsistentShapeError,
            IndexOutOfBoundsError,
            RankMismatchError,
            ShapeMismatchError,
            IncompatibleShapeError,
            CapabilityNotImplementedError,
        ):
            self.assertTrue(issubclass(cls, NDArrayError), cls)

    def test_index_out_of_bounds_attributes(self):
        e = IndexOutOfBoundsError([2, 0], [2, 2])
        self.assertEqual(e.index, (2, 0))
        self.assertEqual(e.shape, (2, 2))
        self.assertIn("out of bounds", str(e))

    def test_shape_mismatch_attributes(self):
        e = ShapeMismatchError((2, 2), (3,))
        self.assertEqual(e.expected, (2, 2))
        self.assertEqual(e.actual, (3,))
        self.assertIn("(2, 2)", str(e))

    def test_incompatible_shape_message(self):
        e = IncompatibleShapeError((4,), (2, 3))
        self.assertEqual(e.source, (4,))
        self.assertEqual(e.target, (2, 3))
        self.assertIn("cannot broadcast", str(e))

    def test_capability_not_implemented_attributes(self):
        e = CapabilityNotImplementedError("set_", "ndarray")
        self.assertEqual(e.op, "set_")
        self.assertEqual(e.representation, "ndarray")
        self.assertIn("set_ is not implemented", str(e))

    def test_invalid_shape_reason(self):
        e = InvalidShapeError([-1], "dimension -1 is negative")
        self.assertIn("negative", str(e))


if __name__ == "__main__":
    unittest.main()
