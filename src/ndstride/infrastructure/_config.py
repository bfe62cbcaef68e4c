"""
Environment-driven settings for ndstride.

Settings are read from the process environment at call time, so tests and
embedding applications can change them without reloading modules.

Environment variables
---------------------
NDSTRIDE_DEFAULT_ELEMENT_KIND
    Element kind used when an array is constructed with ``kind=None``.
    Accepts any identifier understood by `ElementKind.parse`. Defaults to
    ``"object"``.
NDSTRIDE_WARN_ON_FALLBACK
    When truthy (``1``, ``true``, ``yes``, ``on``), capability dispatch emits
    a `FallbackWarning` each time it coerces a value into the canonical
    implementation. Defaults to off.
"""

import os

from ..domain._element_kind import ElementKind

ENV_DEFAULT_ELEMENT_KIND = "NDSTRIDE_DEFAULT_ELEMENT_KIND"
ENV_WARN_ON_FALLBACK = "NDSTRIDE_WARN_ON_FALLBACK"

_TRUTHY = ("1", "true", "yes", "on")


def default_element_kind() -> ElementKind:
    """
    Return the configured default element kind.

    Raises
    ------
    ValueError
        If the environment variable holds an unknown kind identifier.
    """
    raw = os.environ.get(ENV_DEFAULT_ELEMENT_KIND, "")
    if not raw.strip():
        return ElementKind.OBJECT
    return ElementKind.parse(raw)


def default_implementation_key() -> str:
    """Registry key of the canonical implementation used for fallback."""
    return default_element_kind().implementation_key


def fallback_warnings_enabled() -> bool:
    return os.environ.get(ENV_WARN_ON_FALLBACK, "0").strip().lower() in _TRUTHY
