"""Root conftest: shared test configuration."""

import os

# Never read a developer's real data file or .env overrides during tests
os.environ.setdefault("MICROCRED_DATA_FILE", "tests-nonexistent-data.json")
os.environ.setdefault("MICROCRED_LOG_FORMAT", "text")
os.environ.setdefault("MICROCRED_STATIC_DIR", "tests-nonexistent-static")
