"""
OpenAI client wrapper for the procurement AI pipeline.

Handles:
- Chat completions in JSON-output mode
- Bounded request timeout
- Classification of SDK failures into typed ModelErrors

Retries are owned by the ModelGateway, so SDK-internal retries are disabled.
"""

import openai
from openai import AsyncOpenAI

from ..config import Settings
from ..errors import ConfigurationError, wrap_openai_error


class OpenAIClient:
    """
    Async OpenAI chat client.

    Configuration comes from an explicit Settings value:
    - OPENAI_API_KEY: Required API key
    - OPENAI_CHAT_MODEL: Chat model (default: gpt-4o-mini)
    - OPENAI_BASE_URL: Optional alternative endpoint
    - MODEL_TIMEOUT_SECONDS: Per-request timeout (default: 30)
    """

    def __init__(
        self,
        api_key: str,
        chat_model: str = 'gpt-4o-mini',
        timeout_seconds: float = 30.0,
        base_url: str | None = None,
    ):
        """
        Initialize the OpenAI client.

        Args:
            api_key: OpenAI API key
            chat_model: Model for chat completions
            timeout_seconds: Request deadline for each call
            base_url: Override the API endpoint

        Raises:
            ConfigurationError: api_key is empty
        """
        if not api_key:
            raise ConfigurationError('OPENAI_API_KEY is required')

        self.chat_model = chat_model
        self.timeout_seconds = timeout_seconds
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=0,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> 'OpenAIClient':
        """Build a client from application settings."""
        return cls(
            api_key=settings.OPENAI_API_KEY,
            chat_model=settings.OPENAI_CHAT_MODEL,
            timeout_seconds=settings.MODEL_TIMEOUT_SECONDS,
            base_url=settings.OPENAI_BASE_URL,
        )

    async def chat_complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        json_mode: bool = True,
    ) -> str:
        """
        Get a chat completion response.

        Args:
            system_prompt: System message content
            user_prompt: User message content
            temperature: Sampling temperature
            json_mode: Request a JSON object response

        Returns:
            The assistant's raw response text ('' if the model sent none)

        Raises:
            ModelError: classified transport failure
        """
        request: dict = {
            'model': self.chat_model,
            'messages': [
                {'role': 'system', 'content': system_prompt},
                {'role': 'user', 'content': user_prompt},
            ],
            'temperature': temperature,
        }
        if json_mode:
            request['response_format'] = {'type': 'json_object'}

        try:
            response = await self._client.chat.completions.create(**request)
        except openai.OpenAIError as exc:
            raise wrap_openai_error(exc, context={'model': self.chat_model}) from exc

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
