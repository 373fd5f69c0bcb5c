"""
SQLAlchemy models package.
All models are imported here for easy access and Alembic discovery.
"""
from sellgpt.models.shop import Shop

__all__ = [
    "Shop",
]
