"""
Environment-aware configuration.
Security keys, token lifetime, hashing cost, database URL and CORS.
Values are read once at process start; nothing here is mutated at runtime.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present

DEV_JWT_SECRET = "dev-secret-change-me"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///pantry.db")
    SQL_ECHO = _env_bool("SQL_ECHO")

    # jwt configurations
    JWT_SECRET = os.getenv("JWT_SECRET", DEV_JWT_SECRET)
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "pantry-api")
    JWT_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("JWT_TOKEN_EXPIRES_SECONDS", "86400")))

    # argon2 cost parameters
    PASSWORD_TIME_COST = int(os.getenv("PASSWORD_TIME_COST", "10"))
    PASSWORD_MEMORY_COST = int(os.getenv("PASSWORD_MEMORY_COST", "8192"))  # KiB
    PASSWORD_PARALLELISM = int(os.getenv("PASSWORD_PARALLELISM", "1"))

    @classmethod
    def check(cls):
        """Hook for environment-specific startup checks."""


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    TESTING = True
    DATABASE_URL = "sqlite://"
    SQL_ECHO = False
    JWT_SECRET = "testing-secret-that-is-long-enough-for-hs256"
    JWT_TOKEN_EXPIRES = timedelta(hours=24)
    # Cheapest parameters argon2 accepts; keeps the suite fast
    PASSWORD_TIME_COST = 1
    PASSWORD_MEMORY_COST = 8
    PASSWORD_PARALLELISM = 1


class ProductionConfig(BaseConfig):
    DEBUG = False

    @classmethod
    def check(cls):
        secret = cls.JWT_SECRET or ""
        if secret == DEV_JWT_SECRET or len(secret) < 32:
            raise RuntimeError("JWT_SECRET must be set to at least 32 characters in production")


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/test/prod).
    """
    if name:
        name = name.lower()
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
