"""
Kernels for scaled and fused multiply-add updates.

- ``scale(factor)``          : x * factor
- ``add_scaled(a, factor)``  : x + a * factor
- ``add_product(a, b)``      : x + a * b

`factor` is an ordinary operand: a scalar becomes a rank-0 array that is
broadcast with stride 0, so no per-element copy of it is made.
"""

from ..._specialize import specialize

from ._base import NDArrayMixinArithmetic as NDA

__all__: list = []


def _scale(ops, idx, x, factor):
    return ops.mul(x, factor)


def _add_scaled(ops, idx, x, a, factor):
    """x + a * factor"""
    return ops.add(x, ops.mul(a, factor))


def _add_product(ops, idx, x, a, b):
    """x + a * b, element-wise"""
    return ops.add(x, ops.mul(a, b))


specialize(NDA, NDA.scale, in_place=False)(_scale)
specialize(NDA, NDA.scale_, in_place=True)(_scale)
specialize(NDA, NDA.add_scaled, in_place=False)(_add_scaled)
specialize(NDA, NDA.add_scaled_, in_place=True)(_add_scaled)
specialize(NDA, NDA.add_product, in_place=False)(_add_product)
specialize(NDA, NDA.add_product_, in_place=True)(_add_product)
