from typing import Optional, Protocol

from google import genai
from google.genai import types

from app.core.config import get_settings
from app.core.errors import GenerationFailed


class TextGenerator(Protocol):
    def generate(self, prompt: str, response_schema: types.Schema) -> str:
        """Return raw text that should be JSON matching response_schema."""
        ...


class GeminiGenerator:
    """Generation collaborator backed by the Gemini API in JSON mode."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        settings = get_settings()
        self.api_key = api_key or settings.gemini_api_key
        self.model = model or settings.gemini_model
        self._client = None

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise GenerationFailed("GEMINI_API_KEY not found")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate(self, prompt: str, response_schema: types.Schema) -> str:
        print(f"🤖 Calling {self.model}. Prompt: {prompt[:200]}...")

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=response_schema,
                ),
            )
        except GenerationFailed:
            raise
        except Exception as e:
            print(f"❌ Generation call failed: {e}")
            raise GenerationFailed(f"Error in generation service: {str(e)}")

        text = response.text
        if not text:
            finish_reason = None
            if response.candidates:
                finish_reason = response.candidates[0].finish_reason
            print(f"❌ Model returned an empty response. Finish reason: {finish_reason}")
            raise GenerationFailed(
                "AI service returned an empty response. This may be due to rate limiting "
                "or prompt safety filters. Please try again in a moment."
            )

        print(f"📥 Received {len(text)} characters from {self.model}")
        return text
