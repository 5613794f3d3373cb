"""Convenience exports for ORM models.

Surface the SQLModel table classes so calling code can import them from a single module.
"""

from .agency import Agency
from .creator import Creator
from .asset import Asset

__all__ = [
    "Agency",
    "Creator",
    "Asset",
]
