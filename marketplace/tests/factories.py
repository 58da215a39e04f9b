import random
from decimal import Decimal

import factory
from django.contrib.auth import get_user_model
from faker import Faker

from authentication.models import Profile, UserRole
from marketplace.models import Category, College, Order, Product

User = get_user_model()
fake = Faker()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"user_{n}@example.com")
    email = factory.LazyAttribute(lambda o: o.username)
    password = factory.PostGenerationMethodCall("set_password", "defaultpassword")
    is_active = True


class ProfileFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Profile

    user = factory.SubFactory(UserFactory)
    email = factory.LazyAttribute(lambda o: o.user.email)
    full_name = factory.Faker("name")
    mobile_number = factory.Sequence(lambda n: f"0712{n:06d}")
    college = "North Campus"


class AdminFactory(UserFactory):
    username = factory.Sequence(lambda n: f"admin_{n}@example.com")

    @factory.post_generation
    def admin_role(self, create, extracted, **kwargs):
        if create:
            UserRole.objects.get_or_create(user=self, role="admin")


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")


class CollegeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = College

    name = factory.Sequence(lambda n: f"College {n}")


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    title = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("paragraph", nb_sentences=3)
    price = factory.LazyFunction(lambda: Decimal(f"{random.randint(10, 500)}.00"))
    image_paths = factory.LazyFunction(list)
    status = "active"

    seller = factory.SubFactory(UserFactory)
    category = factory.SubFactory(CategoryFactory)


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    buyer = factory.SubFactory(UserFactory)
    product = factory.SubFactory(ProductFactory)
    seller = factory.LazyAttribute(lambda o: o.product.seller)
    total_amount = factory.LazyAttribute(lambda o: o.product.price)
    delivery_address = factory.LazyFunction(lambda: fake.address())
    status = "pending"
