"""
ndstride: strided n-dimensional arrays with element-kind-specialized kernels.

Quick start
-----------
    from ndstride import construct

    a = construct([[1, 2], [3, 4]], "double")
    a.get(1, 0)                      # 3.0
    a.add_(10).element_sum()         # 50.0
    a.transpose().to_nested()        # [[11.0, 13.0], [12.0, 14.0]]
"""

from .domain import *
from .domain import ElementKind, create_path_builder
from .infrastructure import *
from .infrastructure import interop

__version__ = "0.1.0"
