"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
_AZURE_HOST_SUFFIX = ".openai.azure.com"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    azure_openai_endpoint: str = ""
    azure_openai_api_key: str = ""
    azure_openai_api_version: str = "2024-12-01-preview"
    azure_openai_deployment: str = "gpt-4o-mini"
    meal_plan_temperature: float = 0.1
    meal_plan_max_tokens: int = 3000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def openai_config_problem(settings: Settings) -> str | None:
    """Describe what is wrong with the Azure OpenAI settings, if anything."""
    endpoint = settings.azure_openai_endpoint.strip()
    if not endpoint:
        return "Azure OpenAI endpoint is missing"
    if not settings.azure_openai_api_key.strip():
        return "Azure OpenAI API key is missing"
    if _AZURE_HOST_SUFFIX not in endpoint:
        return "Invalid Azure OpenAI endpoint format"
    return None
