"""
Repository package for data access layer.
"""
from sellgpt.repositories.base import BaseRepository
from sellgpt.repositories.shop import ShopRepository

__all__ = [
    "BaseRepository",
    "ShopRepository",
]
