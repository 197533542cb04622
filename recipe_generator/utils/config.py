"""Configuration management for the recipe generator.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults

A missing model credential is a valid configuration: generation falls back to
model-free recipe synthesis, and only the improvement path reports it.
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()

# Hard ceiling on recipes per multiple-mode call, shared with fallback synthesis
RECIPE_COUNT_LIMIT = 5


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini API key. Older deployments used the GOOGLE_GENAI_* names.
        self.GEMINI_API_KEY: str = (
            os.getenv("GEMINI_API_KEY")
            or os.getenv("GOOGLE_GENAI_API_KEY")
            or os.getenv("NEXT_PUBLIC_GOOGLE_GENAI_API_KEY")
            or ""
        )
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
        # Temperature: 0.0 = deterministic, higher = more varied recipes
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Max Output Tokens: five full recipes fit comfortably in 2048
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "2048"))
        # Upper bound for a single model call before it counts as a transport failure
        self.MODEL_TIMEOUT_SECONDS: float = float(os.getenv("MODEL_TIMEOUT_SECONDS", "30"))

        # Serverless deployments (Vercel) see cold-start failures on the first call.
        # SERVERLESS_MODE enables a short fixed delay before every model call.
        self.SERVERLESS_MODE: bool = _env_flag("SERVERLESS_MODE", "true" if os.getenv("VERCEL") else "false")
        self.COLD_START_DELAY_MS: int = int(os.getenv("COLD_START_DELAY_MS", "100"))

        # Recipe counts for multiple-recipe generation
        self.DEFAULT_RECIPE_COUNT: int = int(os.getenv("DEFAULT_RECIPE_COUNT", "3"))
        self.MAX_RECIPE_COUNT: int = int(os.getenv("MAX_RECIPE_COUNT", "5"))

    @property
    def has_model_credential(self) -> bool:
        return bool(self.GEMINI_API_KEY.strip())

    @property
    def startup_delay_seconds(self) -> float:
        """Pre-call delay applied by the model invoker (0 outside serverless mode)."""
        if not self.SERVERLESS_MODE:
            return 0.0
        return self.COLD_START_DELAY_MS / 1000

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If a configured value is out of range.
        """
        if not (0.0 <= self.TEMPERATURE <= 2.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 2.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS < 256:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 256, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if self.MODEL_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"MODEL_TIMEOUT_SECONDS must be positive, got: {self.MODEL_TIMEOUT_SECONDS}"
            )
        if self.COLD_START_DELAY_MS < 0:
            raise ValueError(
                f"COLD_START_DELAY_MS must not be negative, got: {self.COLD_START_DELAY_MS}"
            )
        if not (1 <= self.MAX_RECIPE_COUNT <= RECIPE_COUNT_LIMIT):
            raise ValueError(
                f"MAX_RECIPE_COUNT must be between 1 and {RECIPE_COUNT_LIMIT}, got: {self.MAX_RECIPE_COUNT}"
            )
        if not (1 <= self.DEFAULT_RECIPE_COUNT <= self.MAX_RECIPE_COUNT):
            raise ValueError(
                f"DEFAULT_RECIPE_COUNT must be between 1 and MAX_RECIPE_COUNT ({self.MAX_RECIPE_COUNT}), "
                f"got: {self.DEFAULT_RECIPE_COUNT}"
            )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
