"""Azure OpenAI embedding client wrapper.

Classes:
    TextEmbedder: Protocol for anything that turns one text into one vector.
    Embedder: Turns a single text into one dense vector through an Azure OpenAI embedding deployment.

Functions:
    normalise_embedding_input(text): Collapse newlines to spaces for single-line model input.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from openai import (
    APIConnectionError,
    APITimeoutError,
    AsyncAzureOpenAI,
    OpenAIError,
    RateLimitError,
)
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from asset_search.core.config import Settings
from asset_search.core.exceptions import (
    EmbedderConfigurationError,
    EmbeddingProviderError,
    InvalidInputError,
)

_LOGGER = logging.getLogger(__name__)

_TRANSIENT_ERRORS = (APIConnectionError, APITimeoutError, RateLimitError)


def normalise_embedding_input(text: str) -> str:
    return text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


class TextEmbedder(Protocol):
    async def embed(self, text: Optional[str]) -> list[float]:
        ...


class Embedder:
    """One text in, one vector out.

    The underlying client is built once and shared by every request; it only holds
    configuration and a connection pool. Calls make a single attempt unless
    ``max_attempts`` is raised, in which case transient provider errors are retried
    with exponential backoff.
    """

    def __init__(
        self,
        client: Any,
        *,
        deployment: str,
        dimensions: Optional[int] = None,
        max_attempts: int = 1,
        backoff: Any = None,
    ) -> None:
        if not deployment:
            raise EmbedderConfigurationError("An embedding deployment name is required.")
        if max_attempts < 1:
            raise EmbedderConfigurationError("max_attempts must be at least 1.")
        self._client = client
        self._deployment = deployment
        self._dimensions = dimensions
        self._max_attempts = max_attempts
        self._backoff = backoff if backoff is not None else wait_exponential(multiplier=1, min=1, max=20)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Embedder":
        api_key = settings.azure_openai_api_key.get_secret_value() if settings.azure_openai_api_key else None
        missing = [
            name
            for name, value in (
                ("AZURE_OPENAI_ENDPOINT", settings.azure_openai_endpoint),
                ("AZURE_OPENAI_API_KEY", api_key),
                ("AZURE_OPENAI_DEPLOYMENT_NAME", settings.azure_openai_deployment_name),
            )
            if not value
        ]
        if missing:
            raise EmbedderConfigurationError(
                "Azure OpenAI environment variables are not properly configured: " + ", ".join(missing)
            )

        client = AsyncAzureOpenAI(
            api_key=api_key,
            azure_endpoint=settings.azure_openai_endpoint,
            api_version=settings.azure_openai_api_version,
            timeout=settings.embedding_timeout_seconds,
            max_retries=0,
        )
        return cls(
            client,
            deployment=settings.azure_openai_deployment_name,  # type: ignore[arg-type]
            dimensions=settings.embedding_dimensions,
            max_attempts=settings.embedding_max_attempts,
        )

    @property
    def deployment(self) -> str:
        return self._deployment

    @property
    def dimensions(self) -> Optional[int]:
        return self._dimensions

    async def embed(self, text: Optional[str]) -> list[float]:
        if text is None or not text.strip():
            raise InvalidInputError("Embedding text cannot be empty")

        payload = dict(model=self._deployment, input=[normalise_embedding_input(text)])
        try:
            response = await self._create(payload)
        except OpenAIError as exc:
            _LOGGER.warning("Embedding request to deployment %s failed: %s", self._deployment, exc)
            raise EmbeddingProviderError("Embedding provider request failed", detail=str(exc)) from exc

        data = getattr(response, "data", None)
        if not data:
            raise EmbeddingProviderError("Received an empty embedding response from the provider")
        vector = getattr(data[0], "embedding", None)
        if not vector:
            raise EmbeddingProviderError("Embedding response contained no vector")

        values = [float(value) for value in vector]
        if self._dimensions is not None and len(values) != self._dimensions:
            raise EmbeddingProviderError(
                f"Embedding has {len(values)} dimensions, expected {self._dimensions}"
            )
        return values

    async def close(self) -> None:
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()

    async def _create(self, payload: dict[str, Any]):
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=self._backoff,
            retry=retry_if_exception_type(_TRANSIENT_ERRORS),
            reraise=True,
        ):
            with attempt:
                return await self._client.embeddings.create(**payload)
