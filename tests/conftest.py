"""Test environment: in-memory SQLite and the cheapest bcrypt cost, set before userdesk is imported."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
