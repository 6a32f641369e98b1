"""OpenAI Responses API client for nutrition analysis."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from wellness_nutrition.services.analysis import AnalysisClient


@dataclass
class OpenAIAnalysisClient(AnalysisClient):
    """Analysis client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    temperature: float = 0.1

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAIAnalysisClient":
        """Create an OpenAI analysis client."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def complete(self, prompt: str) -> str:
        """Send the prompt and return the model's text output."""
        response = await self.client.responses.create(
            model=self.model,
            input=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
