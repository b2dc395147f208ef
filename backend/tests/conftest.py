"""Root conftest — shared test configuration."""

import os

# Ensure tests don't accidentally reach real services or use real secrets
os.environ.setdefault("LEMON_SQUEEZY_API_KEY", "ls-test-fake-key")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
