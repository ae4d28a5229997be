"""
Generative AI service using the Google Gen AI SDK.

Backs the concept explainer and the document feasibility analysis.
"""

import logging
from typing import List, Optional

import httpx
from google import genai
from google.genai import errors

from finsuite.config import get_settings
from finsuite.services.feasibility import (
    FeasibilityResult,
    build_feasibility_prompt,
    parse_feasibility_response,
)

logger = logging.getLogger(__name__)
settings = get_settings()

SUGGESTED_TOPICS: List[str] = [
    "Return on Investment (ROI)",
    "Capital Asset Pricing Model (CAPM)",
    "Weighted Average Cost of Capital (WACC)",
    "Time Value of Money (TVM)",
    "Discounted Cash Flow (DCF)",
]

EXPLANATION_PROMPT = (
    'Explain the financial concept of "{topic}" in a simple and concise way, '
    "as if for a software engineer. Use markdown for formatting, including "
    "headers, bold text, and bullet points where appropriate. Start with a "
    "simple definition."
)


class AIServiceNotConfiguredError(RuntimeError):
    """Raised when no API key is configured."""


class AIServiceError(RuntimeError):
    """Raised when the upstream model call fails."""


def build_explanation_prompt(topic: str) -> str:
    return EXPLANATION_PROMPT.format(topic=topic)


class GenAIService:
    """Thin wrapper over the Gemini text generation API."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = settings.genai_api_key if api_key is None else api_key
        self.model = model or settings.genai_model
        self.client = None

        if self.api_key:
            self.client = genai.Client(api_key=self.api_key)

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def _generate(self, prompt: str) -> str:
        """
        Send a prompt and return the reply text.

        Raises:
            AIServiceNotConfiguredError: If no API key is configured
            AIServiceError: If the API call fails
        """
        if not self.client:
            raise AIServiceNotConfiguredError(
                "API key is not configured. Set GENAI_API_KEY on the server."
            )

        logger.info(f"Sending prompt to {self.model} ({len(prompt)} chars)")
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
            )
        except (errors.APIError, httpx.HTTPError) as e:
            logger.error(f"Gen AI request failed: {e}")
            raise AIServiceError(str(e)) from e

        return response.text or ""

    async def explain_concept(self, topic: str) -> str:
        """
        Explain a financial concept in markdown.

        Raises:
            ValueError: If the topic is blank
        """
        topic = topic.strip()
        if not topic:
            raise ValueError("Please enter a topic.")

        return await self._generate(build_explanation_prompt(topic))

    async def analyze_feasibility(self, document_text: str) -> FeasibilityResult:
        """
        Score a project requirements document for feasibility.

        Raises:
            InvalidModelResponseError: If the reply cannot be parsed
        """
        reply = await self._generate(build_feasibility_prompt(document_text))
        logger.debug(f"Raw feasibility reply: {reply[:200]}")
        return parse_feasibility_response(reply)


# Singleton instance
_genai_service: Optional[GenAIService] = None


def get_genai_service() -> GenAIService:
    """Get the Gen AI service singleton."""
    global _genai_service
    if _genai_service is None:
        _genai_service = GenAIService()
    return _genai_service
