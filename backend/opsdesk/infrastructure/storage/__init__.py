from .local_object_storage import LocalObjectStorage

__all__ = [
    "LocalObjectStorage",
]
