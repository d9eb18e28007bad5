"""LLM service for BrickQuote.

Provides the LangChain/OpenAI vision call that produces a raw estimate.
"""

from typing import Any, Dict, List, Optional
import structlog
from langchain_openai import ChatOpenAI
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from brickquote.config.settings import settings
from brickquote.config.errors import ProviderError

logger = structlog.get_logger()

JSON_RESPONSE_FORMAT = {"type": "json_object"}


class LLMService:
    """Service for vision LLM operations using LangChain.

    Provides a wrapper around ChatOpenAI with token tracking
    and error handling. Never retries; a failed call surfaces
    as ProviderError for the user to try again.
    """

    def __init__(
        self,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        api_key: Optional[str] = None,
        max_tokens: Optional[int] = None,
        image_detail: Optional[str] = None
    ):
        """Initialize LLMService.

        Args:
            model: Model name (default from settings).
            temperature: Temperature (default from settings).
            api_key: OpenAI API key (default from settings).
            max_tokens: Response token limit (default from settings).
            image_detail: Vision detail level, "low" or "high" (default from settings).
        """
        self.model = model or settings.llm_model
        self.temperature = temperature if temperature is not None else settings.llm_temperature
        self.api_key = api_key or settings.openai_api_key
        self.max_tokens = max_tokens or settings.llm_max_tokens
        self.image_detail = image_detail or settings.llm_image_detail

        self._client: Optional[ChatOpenAI] = None
        self._total_tokens_used = 0

    @property
    def client(self) -> ChatOpenAI:
        """Get LangChain ChatOpenAI client (lazy initialization)."""
        if self._client is None:
            if not self.api_key:
                raise ProviderError("OpenAI API key is required")
            self._client = ChatOpenAI(
                model=self.model,
                temperature=self.temperature,
                api_key=self.api_key
            )
        return self._client

    @property
    def total_tokens_used(self) -> int:
        """Get total tokens used across all calls."""
        return self._total_tokens_used

    def build_messages(
        self,
        system_prompt: str,
        user_message: str,
        image_url: str
    ) -> List[BaseMessage]:
        """System prompt plus a multimodal user message (text, then photo)."""
        return [
            SystemMessage(content=system_prompt),
            HumanMessage(content=[
                {"type": "text", "text": user_message},
                {
                    "type": "image_url",
                    "image_url": {"url": image_url, "detail": self.image_detail},
                },
            ]),
        ]

    async def generate(
        self,
        messages: List[BaseMessage],
        **kwargs: Any
    ) -> Dict[str, Any]:
        """Generate a response from the LLM.

        Args:
            messages: List of LangChain messages.
            **kwargs: Extra request parameters (response_format, ...).

        Returns:
            Dict with content and token usage.

        Raises:
            ProviderError: If the LLM call fails or returns nothing.
        """
        client = self.client
        try:
            response = await client.ainvoke(messages, max_tokens=self.max_tokens, **kwargs)
        except Exception as e:
            error_msg = str(e)
            status_code = getattr(e, "status_code", None)
            logger.error(
                "llm_call_failed",
                model=self.model,
                status_code=status_code,
                error=error_msg
            )
            raise ProviderError(
                message=error_msg or f"OpenAI API error: {status_code}",
                status_code=status_code,
                details={"original_error": error_msg}
            )

        tokens_used = 0
        if hasattr(response, "response_metadata"):
            usage = response.response_metadata.get("token_usage", {}) or {}
            tokens_used = usage.get("total_tokens", 0)
            self._total_tokens_used += tokens_used

        content = response.content if isinstance(response.content, str) else ""
        if not content:
            raise ProviderError("No response from OpenAI")

        logger.info(
            "llm_generated",
            model=self.model,
            tokens_used=tokens_used,
            content_length=len(content)
        )

        return {
            "content": content,
            "tokens_used": tokens_used
        }

    async def generate_estimate(
        self,
        system_prompt: str,
        user_message: str,
        image_url: str
    ) -> str:
        """Ask the vision model for a JSON estimate of the photographed job.

        Args:
            system_prompt: System prompt for context.
            user_message: Structured job description.
            image_url: Data URI or remote URL of the job photo.

        Returns:
            Raw response text (expected to be a JSON object).

        Raises:
            ProviderError: If the call fails.
        """
        messages = self.build_messages(system_prompt, user_message, image_url)
        result = await self.generate(messages, response_format=JSON_RESPONSE_FORMAT)
        return result["content"]
