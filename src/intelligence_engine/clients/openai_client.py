"""
OpenAI client wrapper for the Intelligence Processing Engine.

Handles:
- Chat completions in JSON mode
- Translation of SDK failures into UpstreamServiceError subclasses

No retries are performed here: a rate-limit or transport error surfaces
immediately so the caller can decide whether to retry.
"""

import openai
from openai import AsyncOpenAI

from ..config import get_settings
from ..errors import ConfigurationError, wrap_upstream_error


class OpenAIClient:
    """
    Async OpenAI client returning raw completion text.

    Configuration via environment variables:
    - OPENAI_API_KEY: Required API key
    - OPENAI_CHAT_MODEL: Chat model (default: gpt-4.1-mini)
    """

    def __init__(
        self,
        api_key: str | None = None,
        chat_model: str | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the OpenAI client.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY setting)
            chat_model: Model for chat completions (defaults to OPENAI_CHAT_MODEL)
            timeout: Per-request timeout in seconds (SDK default if None)
        """
        settings = get_settings()
        self.api_key = api_key or settings.OPENAI_API_KEY
        if not self.api_key:
            raise ConfigurationError('OPENAI_API_KEY is required')

        self.chat_model = chat_model or settings.OPENAI_CHAT_MODEL

        client_kwargs = {'api_key': self.api_key, 'max_retries': 0}
        if timeout is not None:
            client_kwargs['timeout'] = timeout
        self._client = AsyncOpenAI(**client_kwargs)

    async def chat_completion(
        self,
        messages: list[dict[str, str]],
        model: str | None = None,
        temperature: float = 0.0,
        max_tokens: int | None = None,
        json_mode: bool = True,
    ) -> str:
        """
        Get a chat completion response.

        Args:
            messages: List of message dicts with 'role' and 'content'
            model: Override the default chat model
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response
            json_mode: Ask the model for a JSON object response

        Returns:
            The assistant's response text (may be empty)

        Raises:
            UpstreamServiceError: The API call failed (auth, rate limit, transport)
        """
        request = {
            'model': model or self.chat_model,
            'messages': messages,
            'temperature': temperature,
        }
        if max_tokens is not None:
            request['max_tokens'] = max_tokens
        if json_mode:
            request['response_format'] = {'type': 'json_object'}

        try:
            response = await self._client.chat.completions.create(**request)  # type: ignore
        except openai.OpenAIError as e:
            raise wrap_upstream_error(e, context={'model': request['model']}) from e

        if not response.choices:
            return ''
        return response.choices[0].message.content or ''

    async def health_check(self) -> dict[str, bool | str]:
        """
        Verify API connectivity with a minimal request.

        Returns:
            Dict with 'healthy' bool and optional 'error' message
        """
        try:
            await self._client.models.retrieve(self.chat_model)
            return {'healthy': True, 'chat_model': self.chat_model}
        except openai.OpenAIError as e:
            return {'healthy': False, 'error': str(e)}

    async def close(self):
        """Close the client connection."""
        await self._client.close()
