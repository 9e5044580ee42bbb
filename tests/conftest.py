import os
import sys

import pytest
from fastapi.testclient import TestClient

# Add the project root to sys.path to resolve module imports correctly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


@pytest.fixture
def client(tmp_path, monkeypatch):
    """
    Pytest fixture to provide a test client with rate limiting switched off
    and logs written to a temporary directory.
    """
    import config
    monkeypatch.setattr(config, "LOG_DIR", str(tmp_path / "logs"))

    from app import app
    from limiter import limiter

    monkeypatch.setattr(limiter, "enabled", False)

    with TestClient(app) as test_client:
        yield test_client
