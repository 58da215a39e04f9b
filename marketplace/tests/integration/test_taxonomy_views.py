from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from infrastructure.container import container
from marketplace.models import Category, College
from marketplace.tests.factories import CategoryFactory, CollegeFactory, UserFactory


class TaxonomyViewIntegrationTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.client = APIClient()
        self.user = UserFactory()

    def tearDown(self):
        container.reset()

    def test_categories_listed_by_name(self):
        CategoryFactory(name="Furniture")
        CategoryFactory(name="Books")

        response = self.client.get(reverse("marketplace:category-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([entry["name"] for entry in response.data], ["Books", "Furniture"])

    def test_colleges_readable_anonymously(self):
        CollegeFactory(name="North Campus")

        response = self.client.get(reverse("marketplace:college-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["name"], "North Campus")

    def test_add_category(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(reverse("marketplace:category-list"), {"name": " Bikes "}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Category.objects.filter(name="Bikes").exists())

    def test_add_existing_college_returns_it(self):
        existing = CollegeFactory(name="North Campus")
        self.client.force_authenticate(user=self.user)

        response = self.client.post(reverse("marketplace:college-list"), {"name": "North Campus"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], str(existing.id))
        self.assertEqual(College.objects.count(), 1)

    def test_add_requires_authentication(self):
        response = self.client.post(reverse("marketplace:category-list"), {"name": "Bikes"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
