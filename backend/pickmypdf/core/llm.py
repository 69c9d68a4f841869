# backend/pickmypdf/core/llm.py

from typing import Optional
import openai
from openai import OpenAI

from pickmypdf.core.errors import ProviderUnavailableError
from pickmypdf.core.logger import logger


class LLMClient:
    """
    Thin wrapper around the OpenAI chat API.

    Built once at startup. Without an API key the client is "unavailable"
    and every call raises ProviderUnavailableError instead of reaching
    the network.
    """

    def __init__(self, api_key: str = "", client: Optional[OpenAI] = None):
        if client is not None:
            self.client = client
        elif api_key:
            self.client = OpenAI(api_key=api_key)
        else:
            self.client = None

    @property
    def available(self) -> bool:
        return self.client is not None

    def complete(
        self,
        system: str,
        user: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.1,
        max_tokens: int = 2000,
    ) -> str:
        if not self.available:
            raise ProviderUnavailableError(
                "OpenAI API is not configured. Please set OPENAI_API_KEY environment variable."
            )

        try:
            completion = self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APIError as e:
            logger.error(f"OpenAI request failed ({model}): {e}")
            raise ProviderUnavailableError("AI service temporarily unavailable", cause=e)

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            logger.warning(f"OpenAI returned an empty completion ({model})")
            raise ProviderUnavailableError("AI service temporarily unavailable")

        return content

    def close(self):
        if self.client is not None and hasattr(self.client, "close"):
            self.client.close()
