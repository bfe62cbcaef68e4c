"""
Operation-set mixins composed into `NDArray`.

Each subpackage declares one capability group in `_base.py` and registers
its element-kind-specific control paths on import.
"""

from .access import NDArrayMixinAccess
from .slicing import NDArrayMixinSlicing
from .memory import NDArrayMixinMemory
from .functional import NDArrayMixinFunctional
from .arithmetic import NDArrayMixinArithmetic

__all__ = [
    NDArrayMixinAccess.__name__,
    NDArrayMixinSlicing.__name__,
    NDArrayMixinMemory.__name__,
    NDArrayMixinFunctional.__name__,
    NDArrayMixinArithmetic.__name__,
]
