from .category import Category
from .transaction import Transaction

__all__ = [
    "Category",
    "Transaction"
]
