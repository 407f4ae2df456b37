# tests/conftest.py
from __future__ import annotations
import os

# Settings are read once at import time by the API modules; pin the test
# environment before anything from cineasts is imported.
os.environ.setdefault("APP_ENV", "test")
os.environ["NEO4J__APPLY_SCHEMA_ON_STARTUP"] = "false"
