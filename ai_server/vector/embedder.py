"""
Text Embedder - OpenAI-compatible embeddings endpoint

Talks to any server exposing ``/v1/embeddings`` (LM Studio, OpenAI,
vLLM...). A failed call is always raised as ``EmbeddingUnavailable``;
callers decide whether to skip the item or abort.
"""

import asyncio
import logging
import math

from openai import AsyncOpenAI, OpenAIError

from ai_server.core.errors import EmbeddingUnavailable
from ai_server.core.settings import settings

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """
    Async wrapper around ``client.embeddings.create``.

    Usage:
        embedder = EmbeddingClient()
        vector = await embedder.embed("historic palace in district 1")
    """

    def __init__(
        self,
        client: AsyncOpenAI | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ):
        self.model = model or settings.EMBEDDING_MODEL
        self.timeout = settings.EMBEDDING_TIMEOUT_SECONDS if timeout is None else timeout
        self._client = client or AsyncOpenAI(
            base_url=settings.EMBEDDING_BASE_URL,
            api_key=settings.EMBEDDING_API_KEY,
            timeout=self.timeout,
            max_retries=settings.EMBEDDING_MAX_RETRIES,
        )
        logger.info(f"EmbeddingClient initialized (model={self.model}, timeout={self.timeout}s)")

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Non-empty text; long inputs are left to the model to truncate

        Returns:
            Dense vector of floats

        Raises:
            ValueError: text is empty
            EmbeddingUnavailable: endpoint unreachable, timed out, or
                returned malformed / empty data
        """
        if not text or not text.strip():
            raise ValueError("Text to embed must be non-empty")

        try:
            response = await asyncio.wait_for(
                self._client.embeddings.create(
                    model=self.model,
                    input=text,
                    encoding_format="float",
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise EmbeddingUnavailable(
                f"Embedding request timed out after {self.timeout}s"
            ) from e
        except OpenAIError as e:
            raise EmbeddingUnavailable(f"Embedding request failed: {e}") from e

        vector = self._parse_response(response)
        logger.debug(f'Embedded text "{text[:20]}...": length {len(vector)}')
        return vector

    @staticmethod
    def _parse_response(response) -> list[float]:
        data = getattr(response, "data", None)
        if not data:
            raise EmbeddingUnavailable("No embedding data returned from API")

        raw = getattr(data[0], "embedding", None)
        if not raw or isinstance(raw, str):
            # a str here means the server ignored encoding_format=float
            raise EmbeddingUnavailable("Empty embedding array returned")

        try:
            vector = [float(x) for x in raw]
        except (TypeError, ValueError) as e:
            raise EmbeddingUnavailable(f"Malformed embedding values: {e}") from e

        if not all(math.isfinite(x) for x in vector):
            raise EmbeddingUnavailable("Embedding contains non-finite values")

        return vector


# Singleton accessor
_embedder: EmbeddingClient | None = None


def get_embedder() -> EmbeddingClient:
    """Get the global embedding client."""
    global _embedder
    if _embedder is None:
        _embedder = EmbeddingClient()
    return _embedder
