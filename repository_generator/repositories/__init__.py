"""
Repository interfaces and implementations.

Generated contracts subclass RepositoryContract, generated repositories
subclass SQLAlchemyRepository together with their contract.
"""

from .base import COMPARATORS, SQLAlchemyRepository
from .contract import EagerLoad, ModelType, RepositoryContract

__all__ = [
    "COMPARATORS",
    "EagerLoad",
    "ModelType",
    "RepositoryContract",
    "SQLAlchemyRepository",
]
