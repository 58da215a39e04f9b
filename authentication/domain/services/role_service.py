"""
RoleService - user administration.

Lists every user with their roles and switches a user between ``admin``
and ``user``. Making someone an admin upserts an ``admin`` row in
user_roles; making them a plain user deletes it.
"""

import logging
from typing import List

from infrastructure.repositories import (
    ProfileRepository,
    RecordNotFound,
    RepositoryError,
    RoleRepository,
    UserAccountRecord,
)
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.rbac import ROLE_ADMIN, ROLE_USER


logger = logging.getLogger(__name__)

ASSIGNABLE_ROLES = (ROLE_ADMIN, ROLE_USER)


class RoleService(BaseService):
    def __init__(self, profiles: ProfileRepository, roles: RoleRepository):
        super().__init__()
        self.profiles = profiles
        self.roles = roles

    @BaseService.log_performance
    def list_users(self) -> ServiceResult[List[UserAccountRecord]]:
        """Every profile with its role grants, ordered by full name."""
        try:
            grants = self.roles.roles_by_user()
            return service_ok(
                [
                    UserAccountRecord(profile=profile, roles=tuple(grants.get(profile.id, ())))
                    for profile in self.profiles.list_all()
                ]
            )
        except RepositoryError as e:
            self.logger.error(f"Failed to list users: {e}")
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to load users")

    @BaseService.log_performance
    def set_role(self, acting_user_id: str, user_id: str, role: str) -> ServiceResult[UserAccountRecord]:
        """
        Set a user's role.

        Args:
            acting_user_id: Admin performing the change (logged)
            user_id: Target user
            role: ``admin`` or ``user``
        """
        if role not in ASSIGNABLE_ROLES:
            return service_err(
                ErrorCodes.VALIDATION_ERROR, f"Invalid role '{role}'. Expected one of: {', '.join(ASSIGNABLE_ROLES)}"
            )

        try:
            profile = self.profiles.get(str(user_id))
        except RecordNotFound:
            return service_err(ErrorCodes.USER_NOT_FOUND, f"User {user_id} does not exist")
        except RepositoryError as e:
            self.logger.error(f"Failed to load user {user_id}: {e}")
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to update role")

        try:
            if role == ROLE_ADMIN:
                self.roles.grant(profile.id, ROLE_ADMIN)
            else:
                self.roles.revoke(profile.id, ROLE_ADMIN)
            roles = self.roles.roles_for(profile.id)
        except RepositoryError as e:
            self.logger.error(f"Failed to set role {role} for {user_id}: {e}")
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to update role")

        self.logger.info(f"User {acting_user_id} set role of {profile.id} to {role}")
        return service_ok(UserAccountRecord(profile=profile, roles=tuple(roles)))
