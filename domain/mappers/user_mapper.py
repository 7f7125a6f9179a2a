"""
User domain mappers.
Handles transformation between ORM models and DTOs for user-related entities.
"""

from domain.models import AppUser
from domain.schemas.auth_schemas import AuthUser
from domain.schemas.profile_schemas import ProfileResponse, UserPreferences


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def preferences(user: AppUser) -> UserPreferences:
        """
        Read the stored preference document, filling in defaults for missing keys.

        Args:
            user: AppUser ORM instance

        Returns:
            UserPreferences with every field populated
        """
        return UserPreferences.model_validate(user.preferences or {})

    @staticmethod
    def to_auth_user(user: AppUser) -> AuthUser:
        return AuthUser.model_validate(user)

    @staticmethod
    def to_profile(user: AppUser) -> ProfileResponse:
        """
        Convert AppUser ORM model to ProfileResponse DTO.

        Args:
            user: AppUser ORM instance

        Returns:
            ProfileResponse DTO with preferences resolved against defaults
        """
        return ProfileResponse(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
            avatar=user.avatar,
            date_of_birth=user.date_of_birth,
            gender=user.gender,
            weight=user.weight,
            height=user.height,
            is_email_verified=user.is_email_verified,
            preferences=UserMapper.preferences(user),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
