from ._base import NDArrayMixinSlicing

__all__ = [
    NDArrayMixinSlicing.__name__,
]
