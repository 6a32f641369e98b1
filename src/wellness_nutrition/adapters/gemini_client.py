"""Google Gemini REST client for nutrition analysis."""

from dataclasses import dataclass

import httpx

from wellness_nutrition.services.analysis import AnalysisClient


@dataclass
class HttpxGeminiClient(AnalysisClient):
    """HTTPX-backed Gemini generateContent client."""

    api_key: str
    model: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, model: str, base_url: str) -> "HttpxGeminiClient":
        """Create a Gemini client with a managed httpx session."""
        return cls(
            api_key=api_key,
            model=model,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def complete(self, prompt: str) -> str:
        """Generate content for a text prompt and return the first candidate."""
        url = f"{self.base_url}/models/{self.model}:generateContent"
        response = await self.http_client.post(
            url,
            params={"key": self.api_key},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": 0.1,
                    "topK": 1,
                    "topP": 1,
                    "maxOutputTokens": 2048,
                },
            },
            timeout=30,
        )
        response.raise_for_status()
        return _candidate_text(response.json())

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _candidate_text(payload: dict[str, object]) -> str:
    """Return the text of the first candidate part."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise RuntimeError("Gemini returned no analysis text") from exc
    if not isinstance(text, str) or not text:
        raise RuntimeError("Gemini returned no analysis text")
    return text
