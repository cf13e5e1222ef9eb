"""
Chat-completion client for the AI extraction collaborator.

Two providers share one code path:
- "openrouter": OpenAI SDK pointed at OpenRouter
- "groq": Groq SDK

Connection failures are retried a few times with a linear backoff; rate
limits are not retried.
"""

import asyncio
import logging
from typing import Any, List, Optional

import groq
import openai
from groq import AsyncGroq
from openai import AsyncOpenAI

from parse_practice.core.config import settings
from parse_practice.core.exceptions import LLMError, LLMRateLimitError

logger = logging.getLogger(__name__)

RATE_LIMIT_ERRORS = (openai.RateLimitError, groq.RateLimitError)
CONNECTION_ERRORS = (openai.APIConnectionError, groq.APIConnectionError)
API_ERRORS = (openai.APIError, groq.APIError)


class LLMClient:
    """
    Thin async wrapper around a chat-completion endpoint.

    The SDK client is created on first use so the app can start without an
    API key; tests pass a fake ``client``.
    """

    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        client: Any = None,
        max_retries: Optional[int] = None,
        retry_delay: float = 1.0,
    ):
        self.provider = provider or settings.LLM_PROVIDER
        if model:
            self.model = model
        elif self.provider == "groq":
            self.model = settings.GROQ_MODEL
        else:
            self.model = settings.OPENROUTER_MODEL
        self.max_retries = settings.LLM_MAX_RETRIES if max_retries is None else max_retries
        self.retry_delay = retry_delay
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> Any:
        api_key = settings.get_llm_api_key()
        if not api_key:
            key_name = "GROQ_API_KEY" if self.provider == "groq" else "OPENROUTER_API_KEY"
            logger.error(f"{key_name} is not set. Please add it to your .env file.")
            raise LLMError(f"{key_name} is not set")

        if self.provider == "groq":
            client = AsyncGroq(api_key=api_key, timeout=settings.LLM_TIMEOUT, max_retries=0)
        else:
            client = AsyncOpenAI(
                api_key=api_key,
                base_url=settings.OPENROUTER_BASE_URL,
                timeout=settings.LLM_TIMEOUT,
                max_retries=0,
                default_headers={
                    "HTTP-Referer": settings.OPENROUTER_REFERER,
                    "X-Title": settings.OPENROUTER_TITLE,
                },
            )
        logger.info(f"✅ LLM client initialized: {self.provider} ({self.model})")
        return client

    async def generate(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """
        Send one prompt and return the reply text.

        Raises:
            LLMRateLimitError: the provider answered 429
            LLMError: any other failure, or an empty reply
        """
        messages: List[dict] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        attempt = 0
        while True:
            try:
                response = await self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=settings.LLM_TEMPERATURE,
                    max_tokens=settings.LLM_MAX_TOKENS,
                )
                break
            except RATE_LIMIT_ERRORS as e:
                logger.error(f"❌ {self.provider} rate limit exceeded")
                raise LLMRateLimitError() from e
            except CONNECTION_ERRORS as e:
                if attempt >= self.max_retries:
                    logger.error(f"❌ {self.provider} connection failed after {attempt + 1} attempt(s): {e}")
                    raise LLMError(f"LLM connection failed: {e}") from e
                attempt += 1
                logger.warning(f"Retrying... ({attempt}/{self.max_retries})")
                await asyncio.sleep(self.retry_delay * attempt)
            except API_ERRORS as e:
                logger.error(f"❌ {self.provider} API error: {e}")
                raise LLMError(f"API request failed: {e}") from e

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content:
            logger.error(f"❌ Unexpected {self.provider} response structure")
            raise LLMError("Unexpected response structure from LLM API")
        return content
