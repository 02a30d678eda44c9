"""
Application configuration.

Values come from the process environment (a local .env file is loaded first).
Pick a class with APP_ENV; create_app() copies it onto app.config.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    # Signing secret for bearer tokens. Required; never logged.
    JWT_SECRET = os.getenv("JWT_SECRET")
    TOKEN_EXPIRATION_MINUTES = int(os.getenv("TOKEN_EXPIRATION_MINUTES", 1440))

    # Argon2 work factor
    ARGON2_TIME_COST = int(os.getenv("ARGON2_TIME_COST", 3))
    ARGON2_MEMORY_COST = int(os.getenv("ARGON2_MEMORY_COST", 65536))
    ARGON2_PARALLELISM = int(os.getenv("ARGON2_PARALLELISM", 4))

    # Database
    DATABASE_URL = os.getenv("DATABASE_URL")

    # HTTP
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    SERVE_CLIENT = _env_bool("SERVE_CLIENT")
    CLIENT_BUILD_DIR = os.getenv(
        "CLIENT_BUILD_DIR",
        os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "client", "build"),
    )

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    PORT = int(os.getenv("PORT", 5000))


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False
    SERVE_CLIENT = _env_bool("SERVE_CLIENT", "true")


class TestingConfig(Config):
    TESTING = True
    JWT_SECRET = "test_secret"
    # Cheap hashing keeps the suite fast
    ARGON2_TIME_COST = 1
    ARGON2_MEMORY_COST = 8
    ARGON2_PARALLELISM = 1
    SERVE_CLIENT = False


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
