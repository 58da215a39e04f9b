"""
Django ORM Repository Adapter
=============================

Concrete repositories over the Django ORM. Database errors are translated
into RepositoryError / DuplicateRecord / RecordNotFound so services never see
ORM exceptions.
"""

import logging
from decimal import Decimal
from functools import wraps
from typing import Dict, List, Optional, Sequence

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from psycopg2 import errorcodes

from authentication.models import Profile, UserRole
from marketplace.models import Category, College, Order, Product

from .interface import (
    CategoryRepository,
    CollegeRepository,
    DuplicateRecord,
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
)

logger = logging.getLogger(__name__)


def is_unique_violation(error: IntegrityError) -> bool:
    """True only for unique-constraint failures."""
    pgcode = getattr(error.__cause__, "pgcode", None)
    if pgcode is not None:
        return pgcode == errorcodes.UNIQUE_VIOLATION
    # SQLite only reports the constraint kind in the message
    return "UNIQUE constraint failed" in str(error)


def translate_errors(func):
    """Re-raise ORM failures as repository errors."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RepositoryError:
            raise
        except (ObjectDoesNotExist, ValidationError, ValueError) as e:
            raise RecordNotFound(str(e)) from e
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateRecord(str(e)) from e
            logger.error(f"Integrity error in {func.__qualname__}: {e}")
            raise RepositoryError(str(e)) from e
        except DatabaseError as e:
            logger.error(f"Database error in {func.__qualname__}: {e}", exc_info=True)
            raise RepositoryError(str(e)) from e

    return wrapper


def _profile_of(user) -> Optional[Profile]:
    try:
        return user.profile
    except ObjectDoesNotExist:
        return None


def profile_to_record(profile: Profile) -> ProfileRecord:
    return ProfileRecord(
        id=str(profile.user_id),
        email=profile.email,
        full_name=profile.full_name,
        mobile_number=profile.mobile_number,
        college=profile.college,
        created_at=profile.created_at,
    )


def product_to_record(product: Product) -> ProductRecord:
    seller_profile = _profile_of(product.seller)
    return ProductRecord(
        id=str(product.id),
        title=product.title,
        description=product.description,
        price=product.price,
        seller_id=str(product.seller_id),
        category_id=str(product.category_id) if product.category_id else None,
        status=product.status,
        image_paths=tuple(product.image_paths or ()),
        created_at=product.created_at,
        category_name=product.category.name if product.category else "",
        seller_name=seller_profile.full_name if seller_profile else "",
        seller_mobile=seller_profile.mobile_number if seller_profile else "",
        seller_college=seller_profile.college if seller_profile else "",
    )


def order_to_record(order: Order) -> OrderRecord:
    buyer_profile = _profile_of(order.buyer)
    return OrderRecord(
        id=str(order.id),
        buyer_id=str(order.buyer_id),
        seller_id=str(order.seller_id),
        product_id=str(order.product_id),
        total_amount=order.total_amount,
        delivery_address=order.delivery_address,
        status=order.status,
        created_at=order.created_at,
        product_title=order.product.title,
        product_price=order.product.price,
        buyer_name=buyer_profile.full_name if buyer_profile else "",
        buyer_mobile=buyer_profile.mobile_number if buyer_profile else "",
        buyer_college=buyer_profile.college if buyer_profile else "",
    )


class DjangoProfileRepository(ProfileRepository):
    @translate_errors
    def get(self, user_id: str) -> ProfileRecord:
        return profile_to_record(Profile.objects.get(user_id=user_id))

    @translate_errors
    def list_all(self) -> List[ProfileRecord]:
        return [profile_to_record(p) for p in Profile.objects.order_by("full_name")]

    @translate_errors
    def insert(self, user_id: str, email: str, full_name: str, mobile_number: str, college: str) -> ProfileRecord:
        with transaction.atomic():
            profile = Profile.objects.create(
                user_id=user_id,
                email=email,
                full_name=full_name,
                mobile_number=mobile_number,
                college=college or "",
            )
        return profile_to_record(profile)

    @translate_errors
    def update(self, user_id: str, **fields) -> ProfileRecord:
        profile = Profile.objects.get(user_id=user_id)
        for name, value in fields.items():
            setattr(profile, name, value)
        profile.save(update_fields=[*fields.keys(), "updated_at"])
        return profile_to_record(profile)


class _DjangoNamedEntityRepository:
    model = None

    @translate_errors
    def list_all(self) -> List[NamedRecord]:
        return [NamedRecord(id=str(row.id), name=row.name) for row in self.model.objects.order_by("name")]

    @translate_errors
    def get(self, entry_id: str) -> NamedRecord:
        row = self.model.objects.get(id=entry_id)
        return NamedRecord(id=str(row.id), name=row.name)

    @translate_errors
    def find_by_name(self, name: str) -> Optional[NamedRecord]:
        row = self.model.objects.filter(name=name).first()
        return NamedRecord(id=str(row.id), name=row.name) if row else None

    @translate_errors
    def insert(self, name: str) -> NamedRecord:
        with transaction.atomic():
            row = self.model.objects.create(name=name)
        return NamedRecord(id=str(row.id), name=row.name)

    def _unreferenced(self, queryset):
        raise NotImplementedError

    @translate_errors
    def delete_if_unused(self, entry_id: str) -> bool:
        deleted, _ = self._unreferenced(self.model.objects.filter(id=entry_id)).delete()
        return deleted > 0


class DjangoCategoryRepository(_DjangoNamedEntityRepository, CategoryRepository):
    model = Category

    def _unreferenced(self, queryset):
        return queryset.filter(products__isnull=True)


class DjangoCollegeRepository(_DjangoNamedEntityRepository, CollegeRepository):
    model = College

    def _unreferenced(self, queryset):
        # Profiles store the college by name
        return queryset.exclude(name__in=Profile.objects.values("college"))


class DjangoProductRepository(ProductRepository):
    def _queryset(self):
        return Product.objects.select_related("seller__profile", "category").order_by("-created_at")

    @translate_errors
    def list_active(self) -> List[ProductRecord]:
        return [product_to_record(p) for p in self._queryset().filter(status="active")]

    @translate_errors
    def list_by_seller(self, seller_id: str) -> List[ProductRecord]:
        return [product_to_record(p) for p in self._queryset().filter(seller_id=seller_id)]

    @translate_errors
    def get(self, product_id: str) -> ProductRecord:
        return product_to_record(self._queryset().get(id=product_id))

    @translate_errors
    def insert(
        self,
        seller_id: str,
        title: str,
        description: str,
        price: Decimal,
        category_id: Optional[str],
        image_paths: Sequence[str] = (),
    ) -> ProductRecord:
        with transaction.atomic():
            product = Product.objects.create(
                seller_id=seller_id,
                title=title,
                description=description,
                price=price,
                category_id=category_id,
                image_paths=list(image_paths),
            )
        return self.get(str(product.id))

    @translate_errors
    def update_status(self, product_id: str, status: str) -> ProductRecord:
        updated = Product.objects.filter(id=product_id).update(status=status)
        if not updated:
            raise RecordNotFound(f"Product {product_id} does not exist")
        return self.get(product_id)


class DjangoOrderRepository(OrderRepository):
    def _queryset(self):
        return Order.objects.select_related("product", "buyer__profile").order_by("-created_at")

    @translate_errors
    def list_by_seller(self, seller_id: str) -> List[OrderRecord]:
        return [order_to_record(o) for o in self._queryset().filter(seller_id=seller_id)]

    @translate_errors
    def list_by_buyer(self, buyer_id: str) -> List[OrderRecord]:
        return [order_to_record(o) for o in self._queryset().filter(buyer_id=buyer_id)]

    @translate_errors
    def get(self, order_id: str) -> OrderRecord:
        return order_to_record(self._queryset().get(id=order_id))

    @translate_errors
    def insert(
        self,
        buyer_id: str,
        seller_id: str,
        product_id: str,
        total_amount: Decimal,
        delivery_address: str,
    ) -> OrderRecord:
        with transaction.atomic():
            order = Order.objects.create(
                buyer_id=buyer_id,
                seller_id=seller_id,
                product_id=product_id,
                total_amount=total_amount,
                delivery_address=delivery_address,
            )
        return self.get(str(order.id))

    @translate_errors
    def update_status(self, order_id: str, status: str) -> OrderRecord:
        updated = Order.objects.filter(id=order_id).update(status=status)
        if not updated:
            raise RecordNotFound(f"Order {order_id} does not exist")
        return self.get(order_id)


class DjangoRoleRepository(RoleRepository):
    @translate_errors
    def roles_for(self, user_id: str) -> List[str]:
        return list(UserRole.objects.filter(user_id=user_id).order_by("role").values_list("role", flat=True))

    @translate_errors
    def roles_by_user(self) -> Dict[str, List[str]]:
        grants: Dict[str, List[str]] = {}
        for user_id, role in UserRole.objects.order_by("role").values_list("user_id", "role"):
            grants.setdefault(str(user_id), []).append(role)
        return grants

    @translate_errors
    def grant(self, user_id: str, role: str) -> None:
        UserRole.objects.get_or_create(user_id=user_id, role=role)

    @translate_errors
    def revoke(self, user_id: str, role: str) -> bool:
        deleted, _ = UserRole.objects.filter(user_id=user_id, role=role).delete()
        return deleted > 0
