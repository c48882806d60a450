"""
In-memory storage engine.
"""

from taskdesk.storage.memory import MemStorage, StorageProtocol
from taskdesk.storage.table import MemoryTable

__all__ = ["MemStorage", "MemoryTable", "StorageProtocol"]
