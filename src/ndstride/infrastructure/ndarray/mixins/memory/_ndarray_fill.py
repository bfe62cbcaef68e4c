"""
Element-kind-specific fill and assign implementations.

`fill`, `fill_` and `assign_` share one kernel body that replaces the
current element with the (coerced, broadcast) source element. The
specialization generator registers a primitive (float64) and a generic
(object) instantiation for each method.
"""

from ..._specialize import specialize

from ._base import NDArrayMixinMemory as NDM

__all__: list = []


def _replace(ops, idx, current, value):
    """Replace the current element with the broadcast source element."""
    return value


specialize(NDM, NDM.fill, in_place=False)(_replace)
specialize(NDM, NDM.fill_, in_place=True)(_replace)
specialize(NDM, NDM.assign_, in_place=True)(_replace)
