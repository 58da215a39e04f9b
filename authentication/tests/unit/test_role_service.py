from unittest.mock import MagicMock

import pytest

from authentication.domain.services.role_service import RoleService
from infrastructure.repositories import ProfileRecord, RecordNotFound, RepositoryError
from marketplace.services.base import ErrorCodes


def make_profile(user_id, name):
    return ProfileRecord(id=user_id, email=f"{user_id}@example.com", full_name=name, mobile_number="1")


@pytest.fixture
def mock_profiles():
    profiles = MagicMock()
    profiles.get.side_effect = lambda user_id: make_profile(user_id, "Target")
    return profiles


@pytest.fixture
def mock_roles():
    return MagicMock()


@pytest.fixture
def role_service(mock_profiles, mock_roles):
    return RoleService(profiles=mock_profiles, roles=mock_roles)


@pytest.mark.unit
class TestRoleService:
    def test_list_users_attaches_roles(self, role_service, mock_profiles, mock_roles):
        mock_profiles.list_all.return_value = [make_profile("u-1", "Ada"), make_profile("u-2", "Ben")]
        mock_roles.roles_by_user.return_value = {"u-2": ["admin"]}

        result = role_service.list_users()

        assert [(a.profile.id, a.is_admin) for a in result.value] == [("u-1", False), ("u-2", True)]

    def test_make_admin_grants_role(self, role_service, mock_roles):
        mock_roles.roles_for.return_value = ["admin"]

        result = role_service.set_role("admin-1", "u-1", "admin")

        assert result.value.is_admin is True
        mock_roles.grant.assert_called_once_with("u-1", "admin")

    def test_make_user_revokes_admin(self, role_service, mock_roles):
        mock_roles.roles_for.return_value = []

        result = role_service.set_role("admin-1", "u-1", "user")

        assert result.value.is_admin is False
        mock_roles.revoke.assert_called_once_with("u-1", "admin")

    def test_invalid_role(self, role_service, mock_roles):
        result = role_service.set_role("admin-1", "u-1", "owner")

        assert result.error == ErrorCodes.VALIDATION_ERROR
        mock_roles.grant.assert_not_called()

    def test_unknown_user(self, role_service, mock_profiles):
        mock_profiles.get.side_effect = RecordNotFound("missing")

        assert role_service.set_role("admin-1", "ghost", "admin").error == ErrorCodes.USER_NOT_FOUND

    def test_list_users_failure(self, role_service, mock_roles):
        mock_roles.roles_by_user.side_effect = RepositoryError("down")

        assert role_service.list_users().error == ErrorCodes.DATABASE_ERROR
