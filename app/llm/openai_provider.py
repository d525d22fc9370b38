"""
OpenAI-compatible chat completions provider.

Works against OpenAI itself or any compatible endpoint (Groq by default),
selected through ``LLM_BASE_URL``.
"""
import logging
from typing import Optional, Dict
from openai import OpenAI, APIError

from app.core import config
from app.llm.provider import LLMProvider, LLMResponse

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """Provider using the official OpenAI SDK."""
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the client with SDK retries disabled."""
        self.api_key = api_key or config.LLM_API_KEY
        if not self.api_key:
            raise ValueError("LLM API key not configured")
        self.client = OpenAI(
            api_key=self.api_key,
            base_url=base_url or config.LLM_BASE_URL,
            timeout=timeout or config.LLM_TIMEOUT_SECONDS,
            max_retries=0,
        )
        logger.info("OpenAI-compatible provider initialized")
    
    def chat(
        self,
        messages: list[Dict[str, str]],
        model: str = "llama-3.1-8b-instant",
        temperature: float = 0.1,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate a chat completion."""
        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens or 1000,
                **kwargs
            )
            
            usage = response.usage
            return LLMResponse(
                content=response.choices[0].message.content or "",
                tokens_in=usage.prompt_tokens if usage else 0,
                tokens_out=usage.completion_tokens if usage else 0,
                model=model,
                metadata={
                    "finish_reason": response.choices[0].finish_reason,
                }
            )
        except APIError as e:
            logger.error(f"LLM API error: {e}", exc_info=True)
            raise
        except Exception as e:
            logger.error(f"LLM error: {e}", exc_info=True)
            raise
