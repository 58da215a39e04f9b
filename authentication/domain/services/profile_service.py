"""
ProfileService - Profile Management Business Logic.

Owners read and update their own profile. The college may be picked from
the list or created inline; an inline-created college is discarded again
when the profile update fails.
"""

import logging
from typing import Optional

from infrastructure.repositories import ProfileRecord, ProfileRepository, RecordNotFound, RepositoryError
from marketplace.catalog.domain.services.taxonomy_service import TaxonomyService
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


logger = logging.getLogger(__name__)


class ProfileService(BaseService):
    def __init__(self, profiles: ProfileRepository, taxonomy: TaxonomyService):
        super().__init__()
        self.profiles = profiles
        self.taxonomy = taxonomy

    def get_profile(self, user_id: str) -> ServiceResult[ProfileRecord]:
        try:
            return service_ok(self.profiles.get(str(user_id)))
        except RecordNotFound:
            return service_err(ErrorCodes.PROFILE_NOT_FOUND, "Profile not found")
        except RepositoryError as e:
            self.logger.error(f"Failed to load profile {user_id}: {e}")
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to load profile")

    @BaseService.log_performance
    def update_profile(
        self,
        user_id: str,
        full_name: Optional[str] = None,
        mobile_number: Optional[str] = None,
        college_id: Optional[str] = None,
        new_college: Optional[str] = None,
    ) -> ServiceResult[ProfileRecord]:
        """
        Update the acting user's own profile.

        Only the fields passed (not None) change. Given text fields must not
        be blank.

        Args:
            user_id: Acting user; the profile updated is always their own
            full_name: New full name
            mobile_number: New mobile number
            college_id: Existing college to switch to
            new_college: College name to create (ignored when college_id is set)
        """
        changes = {}
        for name, value in (("full_name", full_name), ("mobile_number", mobile_number)):
            if value is None:
                continue
            value = value.strip()
            if not value:
                return service_err(ErrorCodes.VALIDATION_ERROR, f"{name.replace('_', ' ').capitalize()} cannot be blank")
            changes[name] = value

        current = self.get_profile(user_id)
        if not current.ok:
            return current

        created_college = None
        if college_id:
            college_result = self.taxonomy.get_college(college_id)
            if not college_result.ok:
                return college_result
            changes["college"] = college_result.value.name
        elif new_college is not None:
            ensure_result = self.taxonomy.ensure_college(new_college)
            if not ensure_result.ok:
                return ensure_result
            college, created = ensure_result.value
            if created:
                created_college = college
            changes["college"] = college.name

        if not changes:
            return current

        try:
            profile = self.profiles.update(str(user_id), **changes)
        except RepositoryError as e:
            self.logger.error(f"Failed to update profile {user_id}: {e}")
            if created_college is not None:
                discard_result = self.taxonomy.discard_college(created_college.id)
                if not discard_result.ok:
                    self.logger.error(
                        f"Failed to discard college during profile rollback: id={created_college.id}, "
                        f"error={discard_result.error}"
                    )
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to update profile")

        self.logger.info(f"Profile updated for user {user_id}. Updated fields: {sorted(changes)}")
        return service_ok(profile)
