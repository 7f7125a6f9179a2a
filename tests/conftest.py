"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and points the
settings at an in-memory database with every outbound provider switched off.
"""

import os
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Must happen before app.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["JWT_SECRET"] = "kitchensathi-test-secret-0123456789abcdef"
os.environ["BCRYPT_ROUNDS"] = "4"
for _name in (
    "EMAIL_USER",
    "EMAIL_PASSWORD",
    "EDAMAM_APP_ID",
    "EDAMAM_APP_KEY",
    "CLOUDINARY_CLOUD_NAME",
    "CLOUDINARY_API_KEY",
    "CLOUDINARY_API_SECRET",
):
    os.environ[_name] = ""


@pytest.fixture(autouse=True)
def fresh_database():
    """Every test starts with empty tables and no stubbed HTTP transports."""
    from domain.models import Base, engine
    from adapters import image_host, recipe_provider

    Base.metadata.create_all(bind=engine)
    try:
        yield
    finally:
        recipe_provider.close()
        image_host.use_transport(None)
        Base.metadata.drop_all(bind=engine)
