"""
Backend-agnostic contracts for ndstride.

The domain layer holds the capability protocols, the element-kind descriptor,
the error taxonomy and the control-path dispatch utility. It has no knowledge
of any concrete storage.
"""

from ._errors import *
from ._element_kind import ElementKind
from ._capabilities import *
from .utils import create_path_builder
