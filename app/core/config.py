"""
Application configuration.

Values are read from environment variables (and an optional .env file).
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the dealership API."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Application
    APP_NAME: str = "Vehicle Sales Management API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    RELOAD: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./vehicle_sales.db"

    # Routes are mounted under this prefix; "" mounts them at the root
    API_PREFIX: str = "/api"

    # CORS
    CORS_ORIGINS: str = "*"

    # JWT
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24

    # AWS S3 / CloudFront
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_REGION: str = "us-east-1"
    AWS_S3_BUCKET_NAME: str = "vehicle-sales-images"
    AWS_CLOUDFRONT_URL: str = "https://dummy-cloudfront-url.cloudfront.net"

    # OpenAI
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    OPENAI_TEMPERATURE: float = 0.8
    OPENAI_MAX_TOKENS: int = 300

    # Rate limiting (fixed window)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_REQUESTS: int = 10
    RATE_LIMIT_WINDOW_SECONDS: int = 30
    DESCRIPTION_RATE_LIMIT_REQUESTS: int = 3
    DESCRIPTION_RATE_LIMIT_WINDOW_SECONDS: int = 60

    @property
    def app_name(self) -> str:
        return self.APP_NAME

    @property
    def app_version(self) -> str:
        return self.APP_VERSION

    @property
    def debug(self) -> bool:
        return self.DEBUG

    @property
    def host(self) -> str:
        return self.HOST

    @property
    def port(self) -> int:
        return self.PORT

    @property
    def reload(self) -> bool:
        return self.RELOAD

    @property
    def log_format(self) -> str:
        return "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def cors_allow_credentials(self) -> bool:
        # Browsers reject credentialed requests against a wildcard origin
        return "*" not in self.cors_origins


settings = Settings()
