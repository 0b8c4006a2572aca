# /app/core/config.py

"""
Runtime configuration, read once from environment variables.

Defaults are aimed at local development: a SQLite file in the working
directory, INFO logging and permissive CORS.
"""

import os
from typing import List

# The second argument is a default value for local development.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./lab_groups.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]

# Signing key for access tokens. Must be overridden outside local development.
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "480"))

# Optional first demonstrator, created at startup when both are set.
SEED_DEMONSTRATOR_EMAIL = os.getenv("SEED_DEMONSTRATOR_EMAIL")
SEED_DEMONSTRATOR_PASSWORD = os.getenv("SEED_DEMONSTRATOR_PASSWORD")
SEED_DEMONSTRATOR_NAME = os.getenv("SEED_DEMONSTRATOR_NAME", "Demonstrator")
