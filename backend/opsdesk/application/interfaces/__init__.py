from .data_service import DataService
from .object_storage import ObjectStorage
from .notifier import Notifier

__all__ = [
    "DataService",
    "ObjectStorage",
    "Notifier",
]
