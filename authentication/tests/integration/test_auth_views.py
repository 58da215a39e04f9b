from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.models import Profile
from infrastructure.container import container
from infrastructure.repositories import RepositoryError
from marketplace.models import College
from marketplace.tests.factories import CollegeFactory, ProfileFactory

User = get_user_model()

PASSWORD = "campus-Pass-2024"


class RegisterViewTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.client = APIClient()
        self.url = reverse("register")
        self.payload = {
            "email": "Asha.Rao@Example.com",
            "password": PASSWORD,
            "full_name": "Asha Rao",
            "mobile_number": "9876543210",
        }

    def tearDown(self):
        container.reset()

    def test_register_with_existing_college(self):
        college = CollegeFactory(name="North Campus")

        response = self.client.post(self.url, {**self.payload, "college_id": str(college.id)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)
        self.assertEqual(response.data["profile"]["college"], "North Campus")
        self.assertFalse(response.data["is_admin"])

        user = User.objects.get(email="asha.rao@example.com")
        self.assertTrue(user.check_password(PASSWORD))
        self.assertEqual(Profile.objects.get(user=user).full_name, "Asha Rao")

    def test_register_creates_new_college(self):
        response = self.client.post(self.url, {**self.payload, "new_college": "East Campus"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(College.objects.filter(name="East Campus").exists())

    def test_college_required(self):
        response = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.exists())

    def test_duplicate_email(self):
        ProfileFactory(user__username="asha.rao@example.com", user__email="asha.rao@example.com")

        response = self.client.post(self.url, {**self.payload, "new_college": "East Campus"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "email_taken")
        self.assertFalse(College.objects.filter(name="East Campus").exists())

    def test_weak_password(self):
        response = self.client.post(
            self.url, {**self.payload, "password": "12345", "new_college": "East Campus"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_new_college_removed_when_profile_insert_fails(self):
        with patch(
            "infrastructure.repositories.django_adapter.DjangoProfileRepository.insert",
            side_effect=RepositoryError("write failed"),
        ):
            response = self.client.post(self.url, {**self.payload, "new_college": "East Campus"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(User.objects.filter(email="asha.rao@example.com").exists())
        self.assertFalse(College.objects.filter(name="East Campus").exists())


class SessionFlowTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.client = APIClient()
        self.profile = ProfileFactory(
            user__username="ben@example.com", user__email="ben@example.com", college="North Campus"
        )
        self.profile.user.set_password(PASSWORD)
        self.profile.user.save()

    def tearDown(self):
        container.reset()

    def _login(self, email="ben@example.com", password=PASSWORD):
        return self.client.post(reverse("login"), {"email": email, "password": password}, format="json")

    def test_login_returns_tokens_and_profile(self):
        response = self._login(email="BEN@example.com")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["profile"]["college"], "North Campus")
        self.assertFalse(response.data["is_admin"])

    def test_login_wrong_password(self):
        response = self._login(password="not-it-at-all")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["code"], "invalid_credentials")

    def test_session_with_bearer_token(self):
        access = self._login().data["access"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        response = self.client.get(reverse("session"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "ben@example.com")
        self.assertEqual(response.data["profile"]["full_name"], self.profile.full_name)

    def test_session_requires_authentication(self):
        self.assertEqual(self.client.get(reverse("session")).status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_blacklists_refresh_token(self):
        tokens = self._login().data
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.post(reverse("logout"), {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.client.credentials()
        refresh = self.client.post(reverse("token_refresh"), {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(refresh.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_rejects_another_users_token(self):
        tokens = self._login().data
        intruder = ProfileFactory()
        self.client.force_authenticate(user=intruder.user)

        response = self.client.post(reverse("logout"), {"refresh": tokens["refresh"]}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["code"], "permission_denied")

        self.client.force_authenticate(user=None)
        refresh = self.client.post(reverse("token_refresh"), {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(refresh.status_code, status.HTTP_200_OK)

    def test_logout_with_garbage_token(self):
        self.client.force_authenticate(user=self.profile.user)

        response = self.client.post(reverse("logout"), {"refresh": "garbage"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["code"], "invalid_token")


class ProfileViewTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.client = APIClient()
        self.profile = ProfileFactory(college="North Campus")
        self.client.force_authenticate(user=self.profile.user)
        self.url = reverse("profile")

    def tearDown(self):
        container.reset()

    def test_get_own_profile(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], str(self.profile.user_id))

    def test_update_mobile_and_college(self):
        college = CollegeFactory(name="South Campus")

        response = self.client.patch(
            self.url, {"mobile_number": "0700000000", "college_id": str(college.id)}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.profile.refresh_from_db()
        self.assertEqual(self.profile.mobile_number, "0700000000")
        self.assertEqual(self.profile.college, "South Campus")

    def test_update_with_new_college(self):
        response = self.client.patch(self.url, {"new_college": "West Campus"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["college"], "West Campus")
        self.assertTrue(College.objects.filter(name="West Campus").exists())

    def test_blank_name_rejected(self):
        response = self.client.patch(self.url, {"full_name": ""}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
