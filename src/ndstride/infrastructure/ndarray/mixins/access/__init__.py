from ._base import NDArrayMixinAccess

__all__ = [
    NDArrayMixinAccess.__name__,
]
