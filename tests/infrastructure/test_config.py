import os
import unittest
from unittest import TestCase, mock

from src.ndstride.domain._element_kind import ElementKind
from src.ndstride.infrastructure._config import (
    ENV_DEFAULT_ELEMENT_KIND,
    ENV_WARN_ON_FALLBACK,
    default_element_kind,
    default_implementation_key,
    fallback_warnings_enabled,
)


class TestDefaultElementKind(TestCase):
    def test_unset_means_object(self):
        env = {k: v for k, v in os.environ.items() if k != ENV_DEFAULT_ELEMENT_KIND}
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertIs(default_element_kind(), ElementKind.OBJECT)
            self.assertEqual(default_implementation_key(), "ndarray")

    def test_read_at_call_time(self):
        with mock.patch.dict(os.environ, {ENV_DEFAULT_ELEMENT_KIND: "ndarray-double"}):
            self.assertIs(default_element_kind(), ElementKind.DOUBLE)
            self.assertEqual(default_implementation_key(), "ndarray-double")

    def test_invalid_value(self):
        with mock.patch.dict(os.environ, {ENV_DEFAULT_ELEMENT_KIND: "complex128"}):
            with self.assertRaises(ValueError):
                default_element_kind()


class TestFallbackWarningsFlag(TestCase):
    def test_truthy_values(self):
        for raw in ("1", "true", "YES", " on "):
            with mock.patch.dict(os.environ, {ENV_WARN_ON_FALLBACK: raw}):
                self.assertTrue(fallback_warnings_enabled(), raw)

    def test_falsy_values(self):
        for raw in ("0", "", "off", "no"):
            with mock.patch.dict(os.environ, {ENV_WARN_ON_FALLBACK: raw}):
                self.assertFalse(fallback_warnings_enabled(), raw)


if __name__ == "__main__":
    unittest.main()
