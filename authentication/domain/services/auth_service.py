"""
AuthService - sign-up, sign-in and session handling.

Sign-up creates the auth user and its profile in one transaction. A college
created inline for the new account is created before that transaction, so
it is discarded explicitly when the account cannot be created.
"""

import logging
from typing import Optional

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import DatabaseError, IntegrityError, transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.api.serializers.jwt_serializers import CampusRefreshToken
from infrastructure.repositories import ProfileRepository, RecordNotFound, RepositoryError
from marketplace.catalog.domain.services.taxonomy_service import TaxonomyService
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.logging_utils import mask_value
from utils.rbac import is_admin

from .results import AuthResult, SessionInfo, SessionTokens


User = get_user_model()
logger = logging.getLogger(__name__)

MAX_EMAIL_LENGTH = 150


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class AuthService(BaseService):
    """
    Authentication service.

    Handles sign-up (with inline college creation), password sign-in,
    sign-out (refresh token blacklist) and the current session.
    """

    def __init__(self, profiles: ProfileRepository, taxonomy: TaxonomyService):
        """
        Args:
            profiles: Profile repository
            taxonomy: Resolves or creates the sign-up college
        """
        super().__init__()
        self.profiles = profiles
        self.taxonomy = taxonomy

    @BaseService.log_performance
    def sign_up(
        self,
        email: str,
        password: str,
        full_name: str,
        mobile_number: str,
        college_id: Optional[str] = None,
        new_college: Optional[str] = None,
    ) -> ServiceResult[AuthResult]:
        """
        Register a user and sign them in.

        Business Logic:
        1. Validate input before any write
        2. Resolve the college (existing id, or create ``new_college``)
        3. Create user + profile atomically
        4. If step 3 fails, discard a college created in step 2
        5. Issue JWT tokens

        Returns:
            ServiceResult with AuthResult
        """
        email = normalize_email(email)
        full_name = (full_name or "").strip()
        mobile_number = (mobile_number or "").strip()

        if not email or not password or not full_name or not mobile_number:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Email, password, full name and mobile number are required")
        if not college_id and not (new_college or "").strip():
            return service_err(ErrorCodes.VALIDATION_ERROR, "Please select or add a college")
        if len(email) > MAX_EMAIL_LENGTH:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Email address is too long")
        try:
            validate_email(email)
            validate_password(password)
        except ValidationError as e:
            return service_err(ErrorCodes.VALIDATION_ERROR, " ".join(e.messages))

        if User.objects.filter(email=email).exists():
            return service_err(ErrorCodes.EMAIL_TAKEN, "An account with this email already exists")

        created_college = None
        if college_id:
            college_result = self.taxonomy.get_college(college_id)
            if not college_result.ok:
                return college_result
            college = college_result.value
        else:
            ensure_result = self.taxonomy.ensure_college(new_college)
            if not ensure_result.ok:
                return ensure_result
            college, created = ensure_result.value
            if created:
                created_college = college

        try:
            with transaction.atomic():
                user = User.objects.create_user(username=email, email=email, password=password, is_active=True)
                profile = self.profiles.insert(
                    user_id=str(user.id),
                    email=email,
                    full_name=full_name,
                    mobile_number=mobile_number,
                    college=college.name,
                )
        except IntegrityError as e:
            self.logger.warning(f"Sign-up conflict for {mask_value(email)}: {e}")
            self._rollback_college(created_college)
            return service_err(ErrorCodes.EMAIL_TAKEN, "An account with this email already exists")
        except (DatabaseError, RepositoryError) as e:
            self.logger.error(f"Sign-up failed for {mask_value(email)}: {e}")
            self._rollback_college(created_college)
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to create account")

        self.logger.info(f"User {user.id} signed up ({mask_value(email)})")
        return service_ok(
            AuthResult(
                user=user,
                tokens=self._issue_tokens(user),
                profile=profile,
                is_admin=False,
                created_college=created_college is not None,
            )
        )

    def sign_in(self, email: str, password: str) -> ServiceResult[AuthResult]:
        """Authenticate with email/password and issue tokens."""
        email = normalize_email(email)
        if not email or not password:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Email and password are required")

        user = authenticate(username=email, password=password)
        if user is None:
            self.logger.info(f"Failed sign-in for {mask_value(email)}")
            return service_err(ErrorCodes.INVALID_CREDENTIALS, "Invalid email or password")

        self.logger.info(f"User {user.id} signed in")
        return service_ok(
            AuthResult(
                user=user,
                tokens=self._issue_tokens(user),
                profile=self._load_profile(user),
                is_admin=is_admin(user),
            )
        )

    def sign_out(self, refresh_token: str, user) -> ServiceResult[bool]:
        """
        Blacklist the refresh token so it cannot mint new access tokens.

        Only the owner of the token may sign it out.
        """
        if not refresh_token:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Refresh token is required")
        try:
            token = RefreshToken(refresh_token)
            if str(token.get(jwt_settings.USER_ID_CLAIM)) != str(user.id):
                self.logger.warning(f"User {user.id} tried to sign out a token they do not own")
                return service_err(ErrorCodes.PERMISSION_DENIED, "This token belongs to another user")
            token.blacklist()
        except TokenError as e:
            self.logger.info(f"Rejected sign-out token {mask_value(refresh_token)}: {e}")
            return service_err(ErrorCodes.INVALID_TOKEN, str(e))
        return service_ok(True)

    def current_session(self, user) -> ServiceResult[SessionInfo]:
        return service_ok(
            SessionInfo(
                user_id=str(user.id),
                email=user.email,
                profile=self._load_profile(user),
                is_admin=is_admin(user),
            )
        )

    def _load_profile(self, user):
        try:
            return self.profiles.get(str(user.id))
        except RecordNotFound:
            self.logger.warning(f"User {user.id} has no profile")
            return None
        except RepositoryError as e:
            self.logger.error(f"Failed to load profile for {user.id}: {e}")
            return None

    @staticmethod
    def _issue_tokens(user) -> SessionTokens:
        refresh = CampusRefreshToken.for_user(user)
        return SessionTokens(access=str(refresh.access_token), refresh=str(refresh))

    def _rollback_college(self, created_college) -> None:
        if created_college is None:
            return
        discard_result = self.taxonomy.discard_college(created_college.id)
        if not discard_result.ok:
            self.logger.error(
                f"Failed to discard college during sign-up rollback: id={created_college.id}, "
                f"error={discard_result.error}"
            )
