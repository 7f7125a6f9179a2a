"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    VerifyEmailRequest,
    ResendVerificationRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    ChangePasswordRequest,
    UserSummary,
    AuthUser,
    RegisterResponse,
    TokenResponse,
    MessageResponse,
    AdminPingResponse,
)
from domain.schemas.profile_schemas import (
    NotificationSettings,
    UserPreferences,
    PreferencesUpdate,
    NotificationSettingsUpdate,
    ProfileUpdateRequest,
    ProfileResponse,
    AvatarResponse,
)
from domain.schemas.grocery_schemas import (
    GroceryNotificationPreferences,
    GroceryItemCreate,
    GroceryItemUpdate,
    GroceryStatusUpdate,
    GroceryExpiryUpdate,
    GroceryItemResponse,
    ExpiryDateGroup,
    ExpiryStatsResponse,
    ResetNotificationsResponse,
)
from domain.schemas.meal_plan_schemas import (
    MealEntryCreate,
    MealPlanUpsert,
    MealEntryResponse,
    MealPlanResponse,
    WeekPlanResponse,
    MealConsumptionCreate,
    MealConsumptionResponse,
)
from domain.schemas.recipe_schemas import (
    RecipeSummary,
    RecipeDetail,
    RecipeSearchRequest,
    RecipeSearchResponse,
    RecipeSuggestionsResponse,
    SavedRecipeCreate,
    SavedRecipeUpdate,
    SavedRecipeResponse,
    CleanupResponse,
)
from domain.schemas.user_recipe_schemas import (
    IngredientLine,
    UserRecipeCreate,
    UserRecipeUpdate,
    RatingUpdate,
    UserRecipeResponse,
    UserRecipeSummary,
    UserRecipeEnvelope,
    ImageUploadResponse,
)
from domain.schemas.share_schemas import (
    ShareRecipeRequest,
    ShareStatusUpdate,
    SharedRecipeResponse,
    ShareCreatedResponse,
)
from domain.schemas.notification_schemas import (
    NotificationResponse,
    UnreadCountResponse,
    NotificationAck,
)
from domain.schemas.analytics_schemas import (
    AnalyticsSummary,
    TrendPoint,
    TrendsResponse,
    WeeklyCaloriesResponse,
)

__all__ = [
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "VerifyEmailRequest",
    "ResendVerificationRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "ChangePasswordRequest",
    "UserSummary",
    "AuthUser",
    "RegisterResponse",
    "TokenResponse",
    "MessageResponse",
    "AdminPingResponse",
    # Profile
    "NotificationSettings",
    "UserPreferences",
    "PreferencesUpdate",
    "NotificationSettingsUpdate",
    "ProfileUpdateRequest",
    "ProfileResponse",
    "AvatarResponse",
    # Groceries
    "GroceryNotificationPreferences",
    "GroceryItemCreate",
    "GroceryItemUpdate",
    "GroceryStatusUpdate",
    "GroceryExpiryUpdate",
    "GroceryItemResponse",
    "ExpiryDateGroup",
    "ExpiryStatsResponse",
    "ResetNotificationsResponse",
    # Meal plans
    "MealEntryCreate",
    "MealPlanUpsert",
    "MealEntryResponse",
    "MealPlanResponse",
    "WeekPlanResponse",
    "MealConsumptionCreate",
    "MealConsumptionResponse",
    # Provider recipes
    "RecipeSummary",
    "RecipeDetail",
    "RecipeSearchRequest",
    "RecipeSearchResponse",
    "RecipeSuggestionsResponse",
    "SavedRecipeCreate",
    "SavedRecipeUpdate",
    "SavedRecipeResponse",
    "CleanupResponse",
    # User recipes
    "IngredientLine",
    "UserRecipeCreate",
    "UserRecipeUpdate",
    "RatingUpdate",
    "UserRecipeResponse",
    "UserRecipeSummary",
    "UserRecipeEnvelope",
    "ImageUploadResponse",
    # Sharing
    "ShareRecipeRequest",
    "ShareStatusUpdate",
    "SharedRecipeResponse",
    "ShareCreatedResponse",
    # Notifications
    "NotificationResponse",
    "UnreadCountResponse",
    "NotificationAck",
    # Analytics
    "AnalyticsSummary",
    "TrendPoint",
    "TrendsResponse",
    "WeeklyCaloriesResponse",
]
