"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Config:
    TESTING = _env_flag("TESTING", "false")
    DEBUG = _env_flag("DEBUG", "false")

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Database (Prisma, see schema.prisma)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "file:./dmchat.db")

    # Auth
    JWT_SECRET = os.getenv("JWT_SECRET", "dev_secret_change_me")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "dmchat")
    JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "dmchat-clients")
    JWT_EXPIRES_DAYS = int(os.getenv("JWT_EXPIRES_DAYS", "7"))
    USERNAME_MAX_LENGTH = int(os.getenv("USERNAME_MAX_LENGTH", "20"))
    PASSWORD_MIN_LENGTH = int(os.getenv("PASSWORD_MIN_LENGTH", "6"))

    # Messages
    MAX_MESSAGE_LENGTH: int = int(os.getenv("MAX_MESSAGE_LENGTH", "500"))
    HISTORY_LIMIT: int = int(os.getenv("HISTORY_LIMIT", "200"))
    HISTORY_MAX_LIMIT: int = int(os.getenv("HISTORY_MAX_LIMIT", "200"))

    # Realtime
    DM_VERIFY_RECIPIENT = _env_flag("DM_VERIFY_RECIPIENT", "true")
    DIRECTORY_LOCK_STRIPES: int = int(os.getenv("DIRECTORY_LOCK_STRIPES", "64"))
    SESSION_OUTBOX_SIZE: int = int(os.getenv("SESSION_OUTBOX_SIZE", "256"))


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True


class TestingConfig(Config):
    """Testing configuration"""

    TESTING = True
    JWT_SECRET = "test-secret"


class ProductionConfig(Config):
    """Production configuration"""

    pass


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("APP_ENV", "development")
    return config.get(env, config["default"])
