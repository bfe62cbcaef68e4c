"""
Array- and dispatch-related exceptions for ndstride.

This module defines the error taxonomy used across the NDArray engine. Every
condition listed here reflects a caller logic error (malformed shapes, ragged
input, out-of-range coordinates, incompatible operands, or a capability that
a representation does not provide). None of them are transient: they are
raised synchronously at the point of detection and are never retried or
downgraded.

Each concrete error also derives from the closest Python builtin (e.g.
`ValueError`, `IndexError`, `NotImplementedError`) so that generic callers
can keep catching the builtin categories.
"""

from typing import Optional, Sequence


class NDArrayError(Exception):
    """Base class for all ndstride errors."""


class InvalidShapeError(NDArrayError, ValueError):
    """
    Raised when a shape is malformed.

    A shape must be a sequence of non-negative integers. Negative dimensions,
    non-integer entries, or non-sequence shapes are rejected.
    """

    def __init__(self, shape: object, reason: str = "") -> None:
        msg = f"Invalid shape {shape!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.shape = shape


class InconsistentShapeError(NDArrayError, ValueError):
    """
    Raised when nested input is ragged.

    Coercion requires every major-axis slice of a source to share one shape.
    This error is raised eagerly, before any element is written into a new
    store.
    """


class IndexOutOfBoundsError(NDArrayError, IndexError):
    """
    Raised when an index coordinate lies outside its dimension.

    Attributes
    ----------
    index : tuple
        The offending index.
    shape : tuple[int, ...]
        Shape of the array being addressed.
    """

    def __init__(self, index: Sequence, shape: Sequence[int]) -> None:
        super().__init__(
            f"Index {tuple(index)!r} is out of bounds for shape {tuple(shape)!r}"
        )
        self.index = tuple(index)
        self.shape = tuple(shape)


class RankMismatchError(NDArrayError, IndexError):
    """Raised when an index has more coordinates than the array has dimensions."""

    def __init__(self, index: Sequence, rank: int) -> None:
        super().__init__(
            f"Index {tuple(index)!r} has {len(index)} coordinates "
            f"but the array has rank {rank}"
        )
        self.index = tuple(index)
        self.rank = rank


class ShapeMismatchError(NDArrayError, ValueError):
    """
    Raised when co-iterated arrays do not share an identical shape.

    Attributes
    ----------
    expected : tuple[int, ...]
        Shape of the first (target) array.
    actual : tuple[int, ...]
        Shape of the operand that disagreed.
    """

    def __init__(
        self,
        expected: Sequence[int],
        actual: Sequence[int],
        message: Optional[str] = None,
    ) -> None:
        super().__init__(
            message
            or f"Shape mismatch: expected {tuple(expected)!r}, got {tuple(actual)!r}"
        )
        self.expected = tuple(expected)
        self.actual = tuple(actual)


class IncompatibleShapeError(ShapeMismatchError):
    """Raised when an array cannot be broadcast to a requested shape."""

    def __init__(self, source: Sequence[int], target: Sequence[int]) -> None:
        super().__init__(
            target,
            source,
            f"Incompatible shapes, cannot broadcast {tuple(source)!r} "
            f"to {tuple(target)!r}",
        )
        self.source = tuple(source)
        self.target = tuple(target)


class CapabilityNotImplementedError(NDArrayError, NotImplementedError):
    """
    Raised when a representation lacks a capability and no fallback applies.

    Typical causes are mutation on an immutable representation, or a
    capability missing from both the representation and the canonical
    implementation it was coerced into.

    Attributes
    ----------
    op : str
        The operation that was attempted (e.g. "set_", "element_map_").
    representation : str
        Implementation key or type name of the representation.
    """

    def __init__(self, op: str, representation: str) -> None:
        super().__init__(
            f"{op} is not implemented for representation '{representation}'."
        )
        self.op = op
        self.representation = representation


class FallbackWarning(RuntimeWarning):
    """Emitted when capability dispatch falls back to a canonical implementation."""


__all__ = [
    NDArrayError.__name__,
    InvalidShapeError.__name__,
    InconsistentShapeError.__name__,
    IndexOutOfBoundsError.__name__,
    RankMismatchError.__name__,
    ShapeMismatchError.__name__,
    IncompatibleShapeError.__name__,
    CapabilityNotImplementedError.__name__,
    FallbackWarning.__name__,
]
