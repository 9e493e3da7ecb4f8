"""
Storage module - Database operations for the transaction store.
"""

from src.services.storage.database import (
    Base,
    close_db,
    get_engine,
    get_session,
    init_db,
    reset_engine,
)
from src.services.storage.models_db import Transaction
from src.services.storage.repository import TransactionRepository

__all__ = [
    "Base",
    "Transaction",
    "TransactionRepository",
    "close_db",
    "get_engine",
    "get_session",
    "init_db",
    "reset_engine",
]
