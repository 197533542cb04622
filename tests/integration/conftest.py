"""Pytest configuration and fixtures for integration tests.

Loads the project .env and skips the live Gemini tests when no API key is
configured.
"""

import os
import pytest
from dotenv import load_dotenv
from pathlib import Path


def pytest_configure(config):
    """Load environment variables before test collection."""
    # Load environment variables from .env (in project root)
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    # Live calls must not pay the serverless cold-start delay
    os.environ.setdefault("SERVERLESS_MODE", "false")

    print("\n" + "=" * 70)
    print("Note: These tests call the live Gemini API and require GEMINI_API_KEY")
    print(f"Environment loaded from: {env_path}")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip integration tests if no Gemini API key is available."""
    gemini_key = (
        os.getenv("GEMINI_API_KEY")
        or os.getenv("GOOGLE_GENAI_API_KEY")
        or os.getenv("NEXT_PUBLIC_GOOGLE_GENAI_API_KEY")
    )
    if not gemini_key:
        pytest.skip(
            "Integration tests skipped. Missing API key: GEMINI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )
