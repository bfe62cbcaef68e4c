"""
NumPy-backed implementation layer of ndstride.

- `ndarray`  : strided NDArray storage, views and the operation set
- `interop`  : shape / element-sequence contract for foreign values
- `registry` : canonical implementations and capability dispatch
"""

from .ndarray import *
from .registry import *
from . import interop
