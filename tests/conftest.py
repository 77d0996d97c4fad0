"""
pytest configuration and fixtures.
"""

from typing import Generator
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from flask import Flask
from flask.testing import FlaskClient

from user_server import create_app, UserStore


@pytest.fixture
def store() -> UserStore:
    """Fresh, empty user store."""
    return UserStore()


@pytest.fixture
def app(store: UserStore) -> Generator[Flask, None, None]:
    """Application bound to the ``store`` fixture."""
    app = create_app(store)
    app.config["TESTING"] = True
    yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Test client for the application."""
    return app.test_client()


@pytest.fixture
def alice() -> dict:
    """Sample user payload."""
    return {"id": "1", "username": "alice"}
