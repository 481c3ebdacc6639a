"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # GraphQL backend
    GRAPHQL_ENDPOINT: str = os.getenv(
        "GRAPHQL_ENDPOINT",
        "http://localhost:8000/graphql",
    )
    GRAPHQL_TIMEOUT_SECONDS: float = float(os.getenv("GRAPHQL_TIMEOUT_SECONDS", "10"))
    # Whether productsByCategory(limit, offset) is available at the query root
    GRAPHQL_SUPPORTS_PAGING: bool = (
        os.getenv("GRAPHQL_SUPPORTS_PAGING", "true").lower() == "true"
    )

    # Listing settings
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "24"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "96"))
    CURRENCY_RATE: float = float(os.getenv("CURRENCY_RATE", "4.6"))
    DISPLAY_CURRENCY: str = os.getenv("DISPLAY_CURRENCY", "SAR")

    # Redis / listing cache settings
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    LISTING_CACHE_ENABLED: bool = (
        os.getenv("LISTING_CACHE_ENABLED", "false").lower() == "true"
    )
    LISTING_CACHE_KEY_PREFIX: str = os.getenv(
        "LISTING_CACHE_KEY_PREFIX",
        "listing:category:",
    )
    LISTING_CACHE_TTL_SECONDS: int = int(os.getenv("LISTING_CACHE_TTL_SECONDS", "300"))

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self):
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with environment={self.ENVIRONMENT}, "
            f"debug={self.debug}, log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
