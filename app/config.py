"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="KitchenSathi", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://user@localhost:5432/kitchensathi",
        description="SQLAlchemy database URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Auth
    jwt_secret: str = Field(default="change-me", description="JWT signing secret")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_expires_days: int = Field(default=7, ge=1, description="Token lifetime in days")
    bcrypt_rounds: int = Field(default=10, ge=4, le=31, description="bcrypt cost factor")
    verification_code_ttl_minutes: int = Field(
        default=10, ge=1, description="Lifetime of email verification and reset codes"
    )

    # Email (SMTP)
    email_host: str = Field(default="smtp.gmail.com", description="SMTP host")
    email_port: int = Field(default=587, ge=1, le=65535, description="SMTP port")
    email_use_tls: bool = Field(default=True, description="Use STARTTLS")
    email_user: Optional[str] = Field(default=None, description="SMTP username")
    email_password: Optional[str] = Field(default=None, description="SMTP password")
    email_from: Optional[str] = Field(
        default=None, description="Sender address (defaults to the SMTP username)"
    )
    email_timeout_sec: float = Field(default=10.0, gt=0, description="SMTP timeout")

    # Recipe provider (Edamam recipes v2)
    edamam_app_id: Optional[str] = Field(default=None, description="Edamam app id")
    edamam_app_key: Optional[str] = Field(default=None, description="Edamam app key")
    edamam_account_user: str = Field(
        default="kitchensathi", description="Value of the Edamam-Account-User header"
    )
    edamam_base_url: str = Field(
        default="https://api.edamam.com/api/recipes/v2",
        description="Edamam recipe search endpoint",
    )
    recipe_provider_timeout_sec: float = Field(
        default=10.0, gt=0, description="Recipe provider request timeout"
    )

    # Image host (Cloudinary)
    cloudinary_cloud_name: Optional[str] = Field(default=None)
    cloudinary_api_key: Optional[str] = Field(default=None)
    cloudinary_api_secret: Optional[str] = Field(default=None)
    image_upload_max_bytes: int = Field(
        default=5 * 1024 * 1024, gt=0, description="Maximum accepted upload size"
    )
    recipe_image_folder: str = Field(default="kitchensathi/recipes")
    avatar_folder: str = Field(default="kitchensathi/avatars")

    # Domain tuning
    expiry_alert_window_days: int = Field(
        default=3, ge=0, le=30, description="Days ahead the expiry check looks"
    )
    default_item_price: float = Field(
        default=50.0, ge=0, description="Price assumed for used items without a price"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="/api", description="API route prefix")
    api_title: str = Field(
        default="KitchenSathi API", description="API documentation title"
    )
    api_description: str = Field(
        default="Groceries, expiry tracking, meal planning and recipes for the home kitchen",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def email_enabled(self) -> bool:
        return bool(self.email_user and self.email_password)

    def recipe_provider_enabled(self) -> bool:
        return bool(self.edamam_app_id and self.edamam_app_key)

    def image_host_enabled(self) -> bool:
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )


# Global settings instance
settings = Settings()
