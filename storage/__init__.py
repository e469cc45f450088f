from storage.base import Storage
from storage.memory import MemStorage
from storage.sql import SqlStorage

__all__ = ["Storage", "MemStorage", "SqlStorage"]
