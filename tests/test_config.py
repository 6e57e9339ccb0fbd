"""Tests for configuration helpers."""

from macrofit.config import Settings, openai_config_problem


def test_openai_config_problem_accepts_azure_endpoint(settings) -> None:
    assert openai_config_problem(settings) is None


def test_openai_config_problem_reports_missing_endpoint() -> None:
    settings = Settings(azure_openai_endpoint="", azure_openai_api_key="key")

    assert openai_config_problem(settings) == "Azure OpenAI endpoint is missing"


def test_openai_config_problem_reports_missing_key() -> None:
    settings = Settings(
        azure_openai_endpoint="https://x.openai.azure.com", azure_openai_api_key=" "
    )

    assert openai_config_problem(settings) == "Azure OpenAI API key is missing"


def test_openai_config_problem_rejects_foreign_host() -> None:
    settings = Settings(
        azure_openai_endpoint="https://api.example.com", azure_openai_api_key="key"
    )

    assert openai_config_problem(settings) == "Invalid Azure OpenAI endpoint format"


def test_settings_defaults() -> None:
    settings = Settings()

    assert settings.azure_openai_api_version == "2024-12-01-preview"
    assert settings.azure_openai_deployment == "gpt-4o-mini"
    assert settings.meal_plan_max_tokens == 3000
