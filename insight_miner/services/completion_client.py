"""OpenAI completion client for dashboard planning"""
import logging
from typing import Optional

from langchain_openai import OpenAI

from ..config import settings

logger = logging.getLogger(__name__)


class CompletionClient:
    """Client for the text-completion model"""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_SECRET
        self.model = model or settings.OPENAI_COMPLETION_MODEL
        self.timeout = settings.OPENAI_TIMEOUT
        self._llm: Optional[OpenAI] = None

    def get_llm(self) -> OpenAI:
        """
        Get the completion model with the fixed planning sampling parameters.

        Returns:
            OpenAI completion LLM instance
        """
        if self._llm is None:
            self._llm = OpenAI(
                model=self.model,
                api_key=self.api_key,
                temperature=settings.COMPLETION_TEMPERATURE,
                max_tokens=settings.COMPLETION_MAX_TOKENS,
                top_p=settings.COMPLETION_TOP_P,
                frequency_penalty=settings.COMPLETION_FREQUENCY_PENALTY,
                presence_penalty=settings.COMPLETION_PRESENCE_PENALTY,
                n=1,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._llm

    async def complete(self, prompt: str) -> str:
        """
        Run the prompt through the completion model.

        Args:
            prompt: Prompt text

        Returns:
            Text of the first completion candidate
        """
        llm = self.get_llm()
        text = await llm.ainvoke(prompt)
        logger.debug(f"Completion returned {len(text)} chars")
        return text


# Global client instance
_client: Optional[CompletionClient] = None


def get_completion_client() -> CompletionClient:
    """Get global completion client instance"""
    global _client
    if _client is None:
        _client = CompletionClient()
    return _client
