from rest_framework_simplejwt.tokens import RefreshToken

from utils.rbac import is_admin


class CampusRefreshToken(RefreshToken):
    """Refresh token carrying the user's email and admin flag"""

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)

        # Informational only; permissions re-check roles against the database
        token["email"] = user.email
        token["is_admin"] = is_admin(user)

        return token
