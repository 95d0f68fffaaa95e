from tot.storage.base import DataAccessor
from tot.storage.file import FileDataAccessor
from tot.storage.memory import MemoryDataAccessor

__all__ = ["DataAccessor", "FileDataAccessor", "MemoryDataAccessor"]
