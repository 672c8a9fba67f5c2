"""Core types and settings."""

from underbar.core.types import MISSING, Collection, Iterator, Predicate, Waitable
from underbar.core.config import Settings, settings

__all__ = [
    "MISSING",
    "Collection",
    "Iterator",
    "Predicate",
    "Waitable",
    "Settings",
    "settings",
]
