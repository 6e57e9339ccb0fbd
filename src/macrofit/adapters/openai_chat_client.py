"""Azure OpenAI chat completions client."""

from dataclasses import dataclass

import httpx
from openai import AsyncAzureOpenAI

from macrofit.config import Settings
from macrofit.services.meal_plans import ChatCompletionClient


@dataclass
class AzureOpenAIChatClient(ChatCompletionClient):
    """Chat client backed by an Azure OpenAI deployment."""

    client: AsyncAzureOpenAI
    deployment: str

    @classmethod
    def create(cls, settings: Settings) -> "AzureOpenAIChatClient":
        """Create a client from explicit settings with a managed httpx session."""
        return cls(
            client=AsyncAzureOpenAI(
                azure_endpoint=settings.azure_openai_endpoint,
                api_key=settings.azure_openai_api_key,
                api_version=settings.azure_openai_api_version,
                http_client=httpx.AsyncClient(timeout=120),
            ),
            deployment=settings.azure_openai_deployment,
        )

    async def complete(
        self,
        *,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Call the chat completions API and return the first choice text."""
        response = await self.client.chat.completions.create(
            model=self.deployment,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise RuntimeError("Azure OpenAI returned an empty response")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


@dataclass
class UnconfiguredChatClient(ChatCompletionClient):
    """Chat client wired in when the Azure OpenAI settings are unusable."""

    reason: str

    async def complete(
        self,
        *,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Refuse every request with the configuration problem."""
        raise RuntimeError(f"Azure OpenAI is not configured: {self.reason}")
