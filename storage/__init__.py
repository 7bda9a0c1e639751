from .base import DataStore
from .file_storage import FileDataStore

__all__ = ["DataStore", "FileDataStore"]
