"""
Kernels for binary element-wise arithmetic.

Each body is written once against `ElementOps`; `specialize` instantiates a
vectorized float64 loop and a per-element object loop for it and installs
both as control paths of the copying and the in-place method.
"""

from ..._specialize import specialize

from ._base import NDArrayMixinArithmetic as NDA

__all__: list = []


def _add(ops, idx, x, y):
    return ops.add(x, y)


def _sub(ops, idx, x, y):
    return ops.sub(x, y)


def _mul(ops, idx, x, y):
    return ops.mul(x, y)


def _div(ops, idx, x, y):
    """IEEE 754 on the double path; `ZeroDivisionError` on the object path."""
    return ops.div(x, y)


for _copying, _in_place, _body in (
    (NDA.add, NDA.add_, _add),
    (NDA.sub, NDA.sub_, _sub),
    (NDA.mul, NDA.mul_, _mul),
    (NDA.div, NDA.div_, _div),
):
    specialize(NDA, _copying, in_place=False)(_body)
    specialize(NDA, _in_place, in_place=True)(_body)
