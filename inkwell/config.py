"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    # "supabase" talks to the hosted service, "sqlite" uses a local file
    database_backend: str = "supabase"
    database_path: str = "./data/inkwell.db"
    supabase_url: str = ""
    supabase_key: str = ""

    # JWT Configuration
    jwt_secret_key: str = "change-me-in-production-use-env-var"
    jwt_expiry_minutes: int = 60

    # Signs the short-lived OAuth state cookie
    session_secret_key: str = "change-me-in-production-use-env-var"
    oauth_state_max_age: int = 300

    # Google OAuth
    google_client_id: str = ""
    google_client_secret: str = ""
    google_callback_url: str = ""

    # Frontend origin, used for CORS and the post-OAuth redirect
    frontend_origin: str = "http://localhost:3000"
    port: int = 3000

    # Secure cookies and HSTS
    production: bool = False

    # Bcrypt work factor (higher = more secure but slower)
    # For tests, use 4 for faster execution while maintaining functionality
    bcrypt_work_factor: int = 12

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )


settings = Settings()
