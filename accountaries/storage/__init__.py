"""
Audit Storage Package

Provides the abstract audit storage interface and an in-memory implementation.
"""

from accountaries.storage.interface import (
    AuditStorageInterface,
    StorageError,
)
from accountaries.storage.memory import InMemoryAuditStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    # Exceptions
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
]
