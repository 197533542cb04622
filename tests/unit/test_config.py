"""Unit tests for configuration management."""

import pytest

from recipe_generator.utils.config import Config

CONFIG_VARS = (
    "GEMINI_API_KEY",
    "GOOGLE_GENAI_API_KEY",
    "NEXT_PUBLIC_GOOGLE_GENAI_API_KEY",
    "GEMINI_MODEL",
    "TEMPERATURE",
    "MAX_OUTPUT_TOKENS",
    "MODEL_TIMEOUT_SECONDS",
    "SERVERLESS_MODE",
    "VERCEL",
    "COLD_START_DELAY_MS",
    "DEFAULT_RECIPE_COUNT",
    "MAX_RECIPE_COUNT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigInitialization:
    """Test Config class initialization and environment variable loading."""

    def test_config_loads_default_values(self, clean_env):
        """Test that Config uses default values when env vars not set."""
        config = Config()

        assert config.GEMINI_API_KEY == ""
        assert config.GEMINI_MODEL == "gemini-2.0-flash"
        assert config.TEMPERATURE == 0.7
        assert config.MAX_OUTPUT_TOKENS == 2048
        assert config.MODEL_TIMEOUT_SECONDS == 30
        assert config.SERVERLESS_MODE is False
        assert config.COLD_START_DELAY_MS == 100
        assert config.DEFAULT_RECIPE_COUNT == 3
        assert config.MAX_RECIPE_COUNT == 5

    def test_config_loads_from_environment(self, clean_env):
        """Test that Config loads values from environment variables."""
        clean_env.setenv("GEMINI_API_KEY", "test_gemini_key")
        clean_env.setenv("GEMINI_MODEL", "custom-model")
        clean_env.setenv("TEMPERATURE", "0.2")
        clean_env.setenv("MAX_OUTPUT_TOKENS", "4096")
        clean_env.setenv("MODEL_TIMEOUT_SECONDS", "12.5")

        config = Config()

        assert config.GEMINI_API_KEY == "test_gemini_key"
        assert config.GEMINI_MODEL == "custom-model"
        assert config.TEMPERATURE == 0.2
        assert config.MAX_OUTPUT_TOKENS == 4096
        assert config.MODEL_TIMEOUT_SECONDS == 12.5

    def test_legacy_key_names_are_accepted(self, clean_env):
        """Test that the older GOOGLE_GENAI_API_KEY name still provides the credential."""
        clean_env.setenv("GOOGLE_GENAI_API_KEY", "legacy_key")

        config = Config()
        assert config.GEMINI_API_KEY == "legacy_key"
        assert config.has_model_credential is True

    def test_gemini_key_takes_priority_over_legacy_names(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "primary")
        clean_env.setenv("NEXT_PUBLIC_GOOGLE_GENAI_API_KEY", "public")

        assert Config().GEMINI_API_KEY == "primary"


class TestServerlessMode:
    """Test the cold-start delay settings."""

    def test_no_delay_outside_serverless_mode(self, clean_env):
        config = Config()
        assert config.startup_delay_seconds == 0.0

    def test_vercel_enables_serverless_mode(self, clean_env):
        clean_env.setenv("VERCEL", "1")

        config = Config()
        assert config.SERVERLESS_MODE is True
        assert config.startup_delay_seconds == pytest.approx(0.1)

    def test_explicit_flag_overrides_vercel_detection(self, clean_env):
        clean_env.setenv("VERCEL", "1")
        clean_env.setenv("SERVERLESS_MODE", "false")

        assert Config().startup_delay_seconds == 0.0

    def test_custom_delay(self, clean_env):
        clean_env.setenv("SERVERLESS_MODE", "yes")
        clean_env.setenv("COLD_START_DELAY_MS", "250")

        assert Config().startup_delay_seconds == pytest.approx(0.25)


class TestConfigValidation:
    """Test Config validation logic."""

    def test_missing_api_key_is_valid(self, clean_env):
        """A missing key triggers fallback recipes, not a startup failure."""
        config = Config()
        config.validate()  # Should not raise
        assert config.has_model_credential is False

    def test_whitespace_key_is_not_a_credential(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "   ")
        assert Config().has_model_credential is False

    @pytest.mark.parametrize(
        "name,value,match",
        [
            ("TEMPERATURE", "2.5", "TEMPERATURE"),
            ("TEMPERATURE", "-0.1", "TEMPERATURE"),
            ("MAX_OUTPUT_TOKENS", "100", "MAX_OUTPUT_TOKENS"),
            ("MODEL_TIMEOUT_SECONDS", "0", "MODEL_TIMEOUT_SECONDS"),
            ("COLD_START_DELAY_MS", "-5", "COLD_START_DELAY_MS"),
            ("MAX_RECIPE_COUNT", "0", "MAX_RECIPE_COUNT"),
            ("MAX_RECIPE_COUNT", "8", "MAX_RECIPE_COUNT"),
            ("DEFAULT_RECIPE_COUNT", "6", "DEFAULT_RECIPE_COUNT"),
        ],
    )
    def test_validate_rejects_out_of_range_values(self, clean_env, name, value, match):
        clean_env.setenv(name, value)

        config = Config()
        with pytest.raises(ValueError, match=match):
            config.validate()

    def test_non_numeric_value_fails_on_load(self, clean_env):
        clean_env.setenv("MAX_OUTPUT_TOKENS", "lots")

        with pytest.raises(ValueError):
            Config()
