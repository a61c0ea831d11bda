"""
Tests for environment-driven settings.
"""

import pytest

from app.config import DEFAULT_SUMMARY_MODELS, Settings

_VARS = [
    "PORT", "SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASS", "EMAIL_FROM",
    "SMTP_TIMEOUT", "ANTHROPIC_API_KEY", "SUMMARY_MODELS", "MAX_FILE_SIZE_MB",
    "UPLOAD_DIR", "CORS_ORIGINS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettingsFromEnv:

    def test_defaults(self, clean_env):
        settings = Settings.from_env()

        assert settings.port == 3000
        assert settings.smtp_port == 587
        assert settings.smtp_timeout == 10
        assert settings.max_file_size_mb == 10
        assert settings.max_file_size_bytes == 10 * 1024 * 1024
        assert settings.summary_models == DEFAULT_SUMMARY_MODELS
        assert settings.upload_dir == "uploads"
        assert settings.cors_origins == ["*"]
        assert settings.smtp_host is None

    def test_reads_all_variables(self, clean_env):
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("SMTP_HOST", "smtp.example.com")
        clean_env.setenv("SMTP_PORT", "465")
        clean_env.setenv("SMTP_USER", "bot@example.com")
        clean_env.setenv("SMTP_PASS", "pw")
        clean_env.setenv("EMAIL_FROM", "PDF Bot <noreply@example.com>")
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-test")
        clean_env.setenv("SUMMARY_MODELS", "model-a, model-b,,")
        clean_env.setenv("MAX_FILE_SIZE_MB", "25")
        clean_env.setenv("UPLOAD_DIR", "/tmp/pdf-uploads")
        clean_env.setenv("CORS_ORIGINS", "https://a.example.com,https://b.example.com")

        settings = Settings.from_env()

        assert settings.port == 8080
        assert settings.smtp_host == "smtp.example.com"
        assert settings.smtp_port == 465
        assert settings.smtp_password == "pw"
        assert settings.email_from == "PDF Bot <noreply@example.com>"
        assert settings.anthropic_api_key == "sk-test"
        assert settings.summary_models == ["model-a", "model-b"]
        assert settings.max_file_size_bytes == 25 * 1024 * 1024
        assert settings.upload_dir == "/tmp/pdf-uploads"
        assert settings.cors_origins == ["https://a.example.com", "https://b.example.com"]

    def test_email_from_falls_back_to_smtp_user(self, clean_env):
        clean_env.setenv("SMTP_USER", "bot@example.com")

        assert Settings.from_env().email_from == "bot@example.com"

    def test_non_integer_value_raises(self, clean_env):
        clean_env.setenv("MAX_FILE_SIZE_MB", "ten")

        with pytest.raises(ValueError, match="MAX_FILE_SIZE_MB"):
            Settings.from_env()
