"""
Django ORM Repository Tests
===========================

Records, ordering and error translation against the test database.
"""

from decimal import Decimal

from django.db import IntegrityError
from django.test import SimpleTestCase, TestCase

from infrastructure.repositories import DuplicateRecord, RecordNotFound, RepositoryError
from infrastructure.repositories.django_adapter import (
    DjangoCategoryRepository,
    DjangoCollegeRepository,
    DjangoOrderRepository,
    DjangoProductRepository,
    DjangoProfileRepository,
    DjangoRoleRepository,
    translate_errors,
)
from marketplace.tests.factories import CategoryFactory, OrderFactory, ProductFactory, ProfileFactory, UserFactory

MISSING_ID = "00000000-0000-0000-0000-000000000000"


class ProductRepositoryTest(TestCase):
    def setUp(self):
        self.repo = DjangoProductRepository()
        self.seller = ProfileFactory(full_name="Sam Seller", mobile_number="0700111222", college="North Campus")
        self.category = CategoryFactory(name="Books")

    def test_record_carries_category_and_seller_contact(self):
        product = ProductFactory(seller=self.seller.user, category=self.category, image_paths=["a.jpg", "b.jpg"])

        record = self.repo.get(str(product.id))

        self.assertEqual(record.category_name, "Books")
        self.assertEqual(record.seller_name, "Sam Seller")
        self.assertEqual(record.seller_mobile, "0700111222")
        self.assertEqual(record.seller_college, "North Campus")
        self.assertEqual(record.image_paths, ("a.jpg", "b.jpg"))

    def test_list_active_excludes_sold(self):
        active = ProductFactory(seller=self.seller.user)
        ProductFactory(seller=self.seller.user, status="sold")

        self.assertEqual([r.id for r in self.repo.list_active()], [str(active.id)])

    def test_list_by_seller_includes_sold(self):
        ProductFactory(seller=self.seller.user)
        ProductFactory(seller=self.seller.user, status="sold")
        ProductFactory()

        self.assertEqual(len(self.repo.list_by_seller(str(self.seller.user.id))), 2)

    def test_insert_and_mark_sold(self):
        record = self.repo.insert(
            seller_id=str(self.seller.user.id),
            title="Lamp",
            description="LED",
            price=Decimal("9.99"),
            category_id=str(self.category.id),
            image_paths=["x.png"],
        )

        self.assertEqual(record.status, "active")
        self.assertEqual(self.repo.update_status(record.id, "sold").status, "sold")

    def test_missing_and_malformed_ids(self):
        with self.assertRaises(RecordNotFound):
            self.repo.get(MISSING_ID)
        with self.assertRaises(RecordNotFound):
            self.repo.get("not-a-uuid")
        with self.assertRaises(RecordNotFound):
            self.repo.update_status(MISSING_ID, "sold")


class OrderRepositoryTest(TestCase):
    def setUp(self):
        self.repo = DjangoOrderRepository()
        self.buyer = ProfileFactory(full_name="Bea Buyer", college="South Campus")

    def test_record_carries_product_and_buyer_contact(self):
        order = OrderFactory(buyer=self.buyer.user)

        record = self.repo.get(str(order.id))

        self.assertEqual(record.buyer_name, "Bea Buyer")
        self.assertEqual(record.buyer_college, "South Campus")
        self.assertEqual(record.product_title, order.product.title)
        self.assertEqual(record.product_price, order.product.price)

    def test_lists_by_party(self):
        order = OrderFactory(buyer=self.buyer.user)
        OrderFactory()

        self.assertEqual([r.id for r in self.repo.list_by_buyer(str(self.buyer.user.id))], [str(order.id)])
        self.assertEqual([r.id for r in self.repo.list_by_seller(str(order.seller_id))], [str(order.id)])

    def test_update_status(self):
        order = OrderFactory(buyer=self.buyer.user, status="shipped")

        self.assertEqual(self.repo.update_status(str(order.id), "confirmed").status, "confirmed")


class NamedEntityRepositoryTest(TestCase):
    def setUp(self):
        self.repo = DjangoCategoryRepository()

    def test_duplicate_name(self):
        self.repo.insert("Books")

        with self.assertRaises(DuplicateRecord):
            self.repo.insert("Books")

    def test_names_are_case_sensitive(self):
        self.repo.insert("Books")

        self.assertIsNone(self.repo.find_by_name("books"))
        self.assertEqual(self.repo.find_by_name("Books").name, "Books")

    def test_delete_unused(self):
        entry = self.repo.insert("Books")

        self.assertTrue(self.repo.delete_if_unused(entry.id))
        self.assertFalse(self.repo.delete_if_unused(entry.id))

    def test_category_kept_once_a_listing_uses_it(self):
        entry = self.repo.insert("Lighting")
        product = ProductFactory(category_id=entry.id)

        self.assertFalse(self.repo.delete_if_unused(entry.id))
        product.refresh_from_db()
        self.assertEqual(str(product.category_id), entry.id)

    def test_college_kept_once_a_profile_names_it(self):
        repo = DjangoCollegeRepository()
        entry = repo.insert("East Campus")
        ProfileFactory(college="East Campus")

        self.assertFalse(repo.delete_if_unused(entry.id))
        self.assertEqual(repo.find_by_name("East Campus").id, entry.id)

        unused = repo.insert("West Campus")
        self.assertTrue(repo.delete_if_unused(unused.id))


class ProfileAndRoleRepositoryTest(TestCase):
    def test_profile_update(self):
        profile = ProfileFactory(college="North Campus")
        repo = DjangoProfileRepository()

        record = repo.update(str(profile.user_id), college="South Campus", full_name="New Name")

        self.assertEqual(record.college, "South Campus")
        self.assertEqual(repo.get(str(profile.user_id)).full_name, "New Name")

    def test_grant_is_idempotent_and_revoke(self):
        user = UserFactory()
        repo = DjangoRoleRepository()

        repo.grant(str(user.id), "admin")
        repo.grant(str(user.id), "admin")

        self.assertEqual(repo.roles_for(str(user.id)), ["admin"])
        self.assertEqual(repo.roles_by_user(), {str(user.id): ["admin"]})
        self.assertTrue(repo.revoke(str(user.id), "admin"))
        self.assertEqual(repo.roles_for(str(user.id)), [])


class PgError(Exception):
    def __init__(self, pgcode):
        super().__init__(pgcode)
        self.pgcode = pgcode


def failing_with(error):
    @translate_errors
    def write():
        raise error

    return write


class ErrorTranslationTest(SimpleTestCase):
    def test_sqlite_unique_violation_is_duplicate(self):
        with self.assertRaises(DuplicateRecord):
            failing_with(IntegrityError("UNIQUE constraint failed: categories.name"))()

    def test_sqlite_foreign_key_violation_is_not_duplicate(self):
        with self.assertRaises(RepositoryError) as ctx:
            failing_with(IntegrityError("FOREIGN KEY constraint failed"))()

        self.assertNotIsInstance(ctx.exception, DuplicateRecord)

    def test_postgres_error_codes(self):
        unique = IntegrityError("duplicate key value")
        unique.__cause__ = PgError("23505")
        foreign_key = IntegrityError("violates foreign key constraint")
        foreign_key.__cause__ = PgError("23503")

        with self.assertRaises(DuplicateRecord):
            failing_with(unique)()
        with self.assertRaises(RepositoryError) as ctx:
            failing_with(foreign_key)()
        self.assertNotIsInstance(ctx.exception, DuplicateRecord)
