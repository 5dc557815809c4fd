"""
Model gateway: the single choke point for language model calls.

Every call goes through ModelGateway.invoke(), which:
- sends the prompt in JSON-output mode at a fixed low temperature
- retries rate limits and server errors with exponential backoff
- retries malformed responses immediately
- normalizes the completion into a JSON object

The gateway holds no per-call state and is safe to share between
concurrent pipeline invocations.
"""

import asyncio
from typing import Any, Awaitable, Callable, Protocol

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .clients.openai_client import OpenAIClient
from .config import Settings
from .errors import ConfigurationError, MalformedResponse, ModelError
from .logging import get_logger
from .parsing import normalize_response
from .prompts.common import JSON_SYSTEM_PROMPT

logger = get_logger(__name__)


class ModelClient(Protocol):
    """Anything that can run a chat completion and return raw text."""

    async def chat_complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = ...,
        json_mode: bool = ...,
    ) -> str: ...


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, ModelError) and exc.retryable


class ModelGateway:
    """
    Invokes the language model with retry, backoff and response normalization.

    Retry policy is dispatched on the classified FailureKind:
    - RATE_LIMITED / SERVER_ERROR: exponential backoff (base, 2x base, ...)
    - MALFORMED_RESPONSE: retried without waiting
    - anything else: raised immediately
    """

    def __init__(
        self,
        client: ModelClient,
        settings: Settings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the gateway.

        Args:
            client: Model endpoint client (OpenAIClient or a test double)
            settings: Explicit configuration; the API key must be present
            sleep: Coroutine used for backoff waits

        Raises:
            ConfigurationError: required settings are missing
        """
        missing = settings.validate_required()
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}",
                context={'missing': missing},
            )

        self.client = client
        self.temperature = settings.MODEL_TEMPERATURE
        self.max_retries = settings.MODEL_MAX_RETRIES
        self._sleep = sleep
        self._backoff = wait_exponential(
            multiplier=settings.MODEL_BACKOFF_BASE_SECONDS, exp_base=2
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> 'ModelGateway':
        """Build a gateway backed by the OpenAI client."""
        return cls(client=OpenAIClient.from_settings(settings), settings=settings)

    async def invoke(
        self,
        prompt: str,
        max_retries: int | None = None,
        system_prompt: str = JSON_SYSTEM_PROMPT,
    ) -> dict[str, Any]:
        """
        Call the model and return its response as a JSON object.

        Args:
            prompt: User prompt text
            max_retries: Additional attempts after the first (defaults to settings)
            system_prompt: System message sent with the prompt

        Returns:
            Parsed JSON object from the model

        Raises:
            ModelUnavailable: transport failure (retries exhausted or not retryable)
            ModelTimeout: the request deadline elapsed
            MalformedResponse: no JSON object could be recovered after all attempts
        """
        retries = self.max_retries if max_retries is None else max_retries
        log = logger.bind(prompt_chars=len(prompt), max_retries=retries)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(retries + 1),
            retry=retry_if_exception(_is_retryable),
            wait=self._wait,
            sleep=self._sleep,
            before_sleep=self._log_retry,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    result = await self._attempt(prompt, system_prompt)
        except RetryError as exc:
            last_attempt = exc.last_attempt
            last_error = last_attempt.exception()
            log.error(
                'model_gateway.retries_exhausted',
                attempts=last_attempt.attempt_number,
                kind=last_error.kind.value,
                error=last_error.message,
            )
            raise last_error.with_attempts(last_attempt.attempt_number) from last_error
        except ModelError as exc:
            log.error('model_gateway.failed', kind=exc.kind.value, error=exc.message)
            raise

        log.debug('model_gateway.completed', keys=sorted(result))
        return result

    async def _attempt(self, prompt: str, system_prompt: str) -> dict[str, Any]:
        """Run a single model call and normalize its output."""
        raw = await self.client.chat_complete(
            system_prompt=system_prompt,
            user_prompt=prompt,
            temperature=self.temperature,
            json_mode=True,
        )
        if not raw or not raw.strip():
            raise MalformedResponse('Model returned no content')

        value = normalize_response(raw)
        if not isinstance(value, dict):
            raise MalformedResponse(
                'Model response is not a JSON object',
                context={'value_type': type(value).__name__},
            )
        return value

    def _wait(self, retry_state: RetryCallState) -> float:
        """Backoff for transport failures; no wait for malformed responses."""
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(exc, ModelError) and exc.kind.backs_off:
            return self._backoff(retry_state)
        return 0.0

    def _log_retry(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            'model_gateway.retry',
            attempt=retry_state.attempt_number,
            kind=exc.kind.value if isinstance(exc, ModelError) else None,
            wait_seconds=retry_state.next_action.sleep if retry_state.next_action else 0.0,
            error=str(exc),
        )
