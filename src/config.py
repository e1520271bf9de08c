"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

from src.correlation import CorrelationIdFilter

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # HTTP listener
    HOST: str = os.getenv("HOST", "localhost")
    PORT: int = int(os.getenv("PORT", "8080"))
    MAX_BODY_BYTES: int = int(os.getenv("MAX_BODY_BYTES", str(1024 * 1024)))

    # MongoDB settings
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: str = os.getenv("DB_PORT", "27017")
    DB_NAME: str = os.getenv("DB_NAME", "tronics")
    PRODUCT_COLLECTION: str = os.getenv("PRODUCT_COLLECTION", "products")
    DB_SERVER_SELECTION_TIMEOUT_MS: int = int(
        os.getenv("DB_SERVER_SELECTION_TIMEOUT_MS", "5000")
    )

    # "mongo" or "memory"
    PRODUCT_STORE: str = os.getenv("PRODUCT_STORE", "mongo")

    # Request correlation
    CORRELATION_ID_HEADER: str = os.getenv("CORRELATION_ID_HEADER", "X-Correlation-ID")
    CORRELATION_ID_LENGTH: int = int(os.getenv("CORRELATION_ID_LENGTH", "12"))

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def mongo_uri(self) -> str:
        """Connection URI built from the host and port settings."""
        return f"mongodb://{self.DB_HOST}:{self.DB_PORT}"

    @property
    def use_memory_store(self) -> bool:
        """Return True when products should be kept in process memory."""
        return self.PRODUCT_STORE.lower() == "memory"

    def __init__(self):
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level, format=LOG_FORMAT)
        for handler in logging.getLogger().handlers:
            if not any(isinstance(f, CorrelationIdFilter) for f in handler.filters):
                handler.addFilter(CorrelationIdFilter())
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with environment={self.ENVIRONMENT}, "
            f"debug={self.debug}, log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
