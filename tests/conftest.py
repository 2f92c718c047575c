"""
Conftest for Phye API tests.

Puts backend/ on sys.path so that `phye_api` imports without an install,
and pins the environment before the app module is imported.
"""

import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

backend_dir = str(Path(__file__).parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

# Set environment BEFORE any app imports
os.environ["GEMINI_API_KEY"] = "test-key-for-ci"
os.environ["GEMINI_API_KEYS"] = ""
os.environ["CORS_ORIGINS"] = "*"
os.environ["GEMINI_STRUCTURED_OUTPUT"] = "true"
os.environ["RATE_LIMIT_DEFAULT_RETRY_S"] = "45"

from fastapi.testclient import TestClient  # noqa: E402

from phye_api.main import app  # noqa: E402
from phye_api.services.key_rotator import KeyRotator  # noqa: E402
from phye_api.services.phye_service import PhyeService  # noqa: E402


# Four-step answer in the shape the prompt asks for
SOLUTION = {
    "steps": [
        {"title": "Given Data & To Find", "math": "u = 0,\\ h = 20\\,m", "desc": "Ball is dropped."},
        {"title": "Formula Used / Principle", "math": "v^2 = u^2 + 2gh", "desc": "Third equation of motion."},
        {"title": "Implementation / Calculation", "math": "v = \\sqrt{2 \\cdot 9.8 \\cdot 20}", "desc": "Substitute."},
        {"title": "Final Answer", "math": "v \\approx 19.8\\,m/s", "desc": "```text\n  o\n  |\n  v\n```"},
    ]
}


def gemini_reply(text):
    """Minimal generateContent success body carrying one candidate text."""
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def use_keys():
    """Swap the app's service for one backed by the given key pool."""
    original = app.state.phye_service

    def _install(keys):
        app.state.phye_service = PhyeService(KeyRotator(keys))
        return app.state.phye_service

    _install(["test-key-for-ci"])
    yield _install
    app.state.phye_service = original


@pytest.fixture
def upstream(use_keys):
    """Replace the outbound Gemini call; tests set return_value / side_effect."""
    with patch("phye_api.services.gemini_service.generate_content", new_callable=AsyncMock) as mock:
        yield mock
