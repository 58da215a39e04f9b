"""
Repository Layer
================

Persistence interfaces and the Django ORM adapter behind them.
The adapter module imports app models, so import it lazily (see container).
"""

from .interface import (
    CategoryRepository,
    CollegeRepository,
    DuplicateRecord,
    NamedEntityRepository,
    NamedRecord,
    OrderRecord,
    OrderRepository,
    ProductRecord,
    ProductRepository,
    ProfileRecord,
    ProfileRepository,
    RecordNotFound,
    RepositoryError,
    RoleRepository,
    UserAccountRecord,
)

__all__ = [
    "ProfileRecord",
    "NamedRecord",
    "ProductRecord",
    "OrderRecord",
    "UserAccountRecord",
    "RepositoryError",
    "RecordNotFound",
    "DuplicateRecord",
    "ProfileRepository",
    "NamedEntityRepository",
    "CategoryRepository",
    "CollegeRepository",
    "ProductRepository",
    "OrderRepository",
    "RoleRepository",
]
