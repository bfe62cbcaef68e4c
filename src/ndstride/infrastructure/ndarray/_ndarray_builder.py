"""
NDArray control-path manager for element-kind-specific dispatch.

This module defines the shared control-path manager used to register and
resolve element-kind-specific implementations of NDArray methods.

The manager is created by specializing the generic `create_path_builder`
utility with the state attribute name ``"element_kind"``. As a result,
method dispatch is performed based on the runtime value of
``self.element_kind``, once per call.

Typical usage
-------------
Kind-specific implementations register themselves using this manager:

    @ndarray_control_path(NDArrayMixin, NDArrayMixin.op, ElementKind.DOUBLE)
    def op_double(self, ...): ...

    @ndarray_control_path(NDArrayMixin, NDArrayMixin.op, ElementKind.OBJECT)
    def op_object(self, ...): ...

Calling ``array.op(...)`` dispatches to the implementation whose registered
kind matches ``array.element_kind``. A missing path raises
`CapabilityNotImplementedError`.
"""

from typing import Any, Callable, Hashable

from ...domain._errors import CapabilityNotImplementedError
from ...domain.utils._control_path import create_path_builder

# Control-path manager that dispatches NDArray methods based on `self.element_kind`
ndarray_control_path_manager = create_path_builder("element_kind")


def _missing_control_path(method: Callable, state: Any) -> None:
    raise CapabilityNotImplementedError(method.__name__, str(state))


def ndarray_control_path(cls: type, method: Callable, kind: Hashable):
    """Register a control path that reports missing kinds as capability errors."""
    return ndarray_control_path_manager(
        cls, method, kind, trap_exception=_missing_control_path
    )
