"""
Configuration settings for the User API backend
"""

import os

# Environment configuration
ENV = os.getenv("ENV", "development")
PORT = int(os.getenv("PORT", 8080))
SERVICE_NAME = os.getenv("SERVICE_NAME", "user-api")

# Database configuration - DATABASE_URL wins over the individual DB_* parts
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = int(os.getenv("DB_PORT", 5432))
DB_USER = os.getenv("DB_USER", "postgres")
DB_PASSWORD = os.getenv("DB_PASSWORD", "postgres")
DB_NAME = os.getenv("DB_NAME", "userdb")
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 2))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 20))
DB_CONNECT_TIMEOUT = float(os.getenv("DB_CONNECT_TIMEOUT", 2))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", 60))
AUTO_MIGRATE = os.getenv("AUTO_MIGRATE", "true").lower() in ("1", "true", "yes")

# Which repository implementation backs the API
STORE_BACKENDS = ("postgres", "memory")
STORE_BACKEND = os.getenv("STORE_BACKEND", "postgres").lower()

# CORS settings
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()]

# Validate environment
if STORE_BACKEND not in STORE_BACKENDS:
    raise ValueError(f"STORE_BACKEND must be one of {STORE_BACKENDS}, got '{STORE_BACKEND}'")
if DB_POOL_MIN_SIZE > DB_POOL_MAX_SIZE:
    raise ValueError("DB_POOL_MIN_SIZE cannot exceed DB_POOL_MAX_SIZE")
