"""Test environment: required settings must exist before any app module is imported."""

import os

os.environ.setdefault("JWT_SECRET", "test-signing-secret-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "dev")
