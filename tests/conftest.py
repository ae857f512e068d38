"""Root conftest — shared test configuration."""

import os

# Must be set before grouphub.config.get_settings() is first called
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
# Lowest cost bcrypt accepts; keeps hashing tests fast
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")
