"""
Repository Interfaces
=====================

Abstract persistence contracts for profiles, products, categories, colleges,
orders and user roles. Services depend only on these interfaces; one adapter
(Django ORM) implements them. Reads return frozen dataclass records, and
failures are raised as RepositoryError subclasses.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from utils.rbac import ROLE_ADMIN


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProfileRecord:
    id: str
    email: str
    full_name: str
    mobile_number: str
    college: str = ""
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class NamedRecord:
    """A category or a college: id plus unique display name."""

    id: str
    name: str


@dataclass(frozen=True)
class ProductRecord:
    """
    A product joined with its category name and the seller's contact data.

    ``seller_college`` is denormalized from the seller profile; it is the
    value the catalog college filter compares against.
    """

    id: str
    title: str
    description: str
    price: Decimal
    seller_id: str
    category_id: Optional[str]
    status: str = "active"
    image_paths: Tuple[str, ...] = ()
    created_at: Optional[datetime] = None
    category_name: str = ""
    seller_name: str = ""
    seller_mobile: str = ""
    seller_college: str = ""


@dataclass(frozen=True)
class OrderRecord:
    """An order joined with the product title/price and the buyer's contact data."""

    id: str
    buyer_id: str
    seller_id: str
    product_id: str
    total_amount: Decimal
    delivery_address: str
    status: str = "pending"
    created_at: Optional[datetime] = None
    product_title: str = ""
    product_price: Optional[Decimal] = None
    buyer_name: str = ""
    buyer_mobile: str = ""
    buyer_college: str = ""


@dataclass(frozen=True)
class UserAccountRecord:
    profile: ProfileRecord
    roles: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_admin(self) -> bool:
        return ROLE_ADMIN in self.roles


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class RepositoryError(Exception):
    """Persistence call failed."""


class RecordNotFound(RepositoryError):
    """No row matches the lookup."""


class DuplicateRecord(RepositoryError):
    """Insert violated a uniqueness constraint."""


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------


class ProfileRepository(ABC):
    @abstractmethod
    def get(self, user_id: str) -> ProfileRecord:
        """Raises RecordNotFound if the user has no profile."""

    @abstractmethod
    def list_all(self) -> List[ProfileRecord]:
        """All profiles ordered by full name."""

    @abstractmethod
    def insert(self, user_id: str, email: str, full_name: str, mobile_number: str, college: str) -> ProfileRecord:
        pass

    @abstractmethod
    def update(self, user_id: str, **fields) -> ProfileRecord:
        """Update the given profile fields and return the stored profile."""


class NamedEntityRepository(ABC):
    """Shared contract for categories and colleges."""

    @abstractmethod
    def list_all(self) -> List[NamedRecord]:
        """All entries ordered by name."""

    @abstractmethod
    def get(self, entry_id: str) -> NamedRecord:
        """Raises RecordNotFound."""

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[NamedRecord]:
        pass

    @abstractmethod
    def insert(self, name: str) -> NamedRecord:
        """Raises DuplicateRecord if the name already exists."""

    @abstractmethod
    def delete_if_unused(self, entry_id: str) -> bool:
        """Delete the entry unless a product or profile refers to it. Returns False when kept."""


class CategoryRepository(NamedEntityRepository):
    pass


class CollegeRepository(NamedEntityRepository):
    pass


class ProductRepository(ABC):
    @abstractmethod
    def list_active(self) -> List[ProductRecord]:
        """Active products, newest first."""

    @abstractmethod
    def list_by_seller(self, seller_id: str) -> List[ProductRecord]:
        """All of a seller's products regardless of status, newest first."""

    @abstractmethod
    def get(self, product_id: str) -> ProductRecord:
        """Raises RecordNotFound."""

    @abstractmethod
    def insert(
        self,
        seller_id: str,
        title: str,
        description: str,
        price: Decimal,
        category_id: Optional[str],
        image_paths: Sequence[str] = (),
    ) -> ProductRecord:
        pass

    @abstractmethod
    def update_status(self, product_id: str, status: str) -> ProductRecord:
        pass


class OrderRepository(ABC):
    @abstractmethod
    def list_by_seller(self, seller_id: str) -> List[OrderRecord]:
        """Newest first."""

    @abstractmethod
    def list_by_buyer(self, buyer_id: str) -> List[OrderRecord]:
        """Newest first."""

    @abstractmethod
    def get(self, order_id: str) -> OrderRecord:
        """Raises RecordNotFound."""

    @abstractmethod
    def insert(
        self,
        buyer_id: str,
        seller_id: str,
        product_id: str,
        total_amount: Decimal,
        delivery_address: str,
    ) -> OrderRecord:
        pass

    @abstractmethod
    def update_status(self, order_id: str, status: str) -> OrderRecord:
        pass


class RoleRepository(ABC):
    @abstractmethod
    def roles_for(self, user_id: str) -> List[str]:
        pass

    @abstractmethod
    def roles_by_user(self) -> Dict[str, List[str]]:
        """Every role grant, keyed by user id."""

    @abstractmethod
    def grant(self, user_id: str, role: str) -> None:
        """Upsert: granting an existing role is a no-op."""

    @abstractmethod
    def revoke(self, user_id: str, role: str) -> bool:
        pass
