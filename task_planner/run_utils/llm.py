import logging
import threading
import time
from typing import Optional

import httpx

from task_planner import config
from task_planner.run_utils.metrics import record_provider_call

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Base class for failures reaching the generative-text provider."""


class ProviderError(LLMError):
    """The provider answered with a non-success HTTP status."""

    def __init__(self, status: int, body: str):
        super().__init__(f"Gemini HTTP {status}: {body[:300]}")
        self.status = status
        self.body = body


class TransportError(LLMError):
    """The provider could not be reached (connection failure or timeout)."""


class GeminiClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        max_concurrency: Optional[int] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = config.GEMINI_API_KEY if api_key is None else api_key
        self.model = (model or config.GEMINI_MODEL).replace("/", "-").strip()
        self.base_url = (base_url or config.GEMINI_BASE_URL).rstrip("/")
        self.timeout_s = timeout_s or config.LLM_TIMEOUT_SECONDS
        self._slots = threading.BoundedSemaphore(
            max_concurrency or config.LLM_MAX_CONCURRENCY
        )
        self._transport = transport
        if not self.api_key:
            logger.warning("GEMINI_API_KEY is not set; provider calls will be rejected")

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        """
        POST ``prompt`` to ``generateContent`` and return the raw response body.

        Raises ProviderError for a non-success status and TransportError when
        the endpoint is unreachable or times out. One attempt per call.
        """
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        with self._slots:
            t0 = time.perf_counter()
            try:
                with httpx.Client(
                    timeout=self.timeout_s, transport=self._transport
                ) as client:
                    r = client.post(self.url, params={"key": self.api_key}, json=body)
            except httpx.TransportError as e:
                ms = (time.perf_counter() - t0) * 1000
                record_provider_call(False, ms)
                logger.error("Gemini transport error after %.0f ms: %s", ms, e)
                raise TransportError(f"Gemini unreachable at {self.url}: {e}") from e

        ms = (time.perf_counter() - t0) * 1000
        if r.is_error:
            record_provider_call(False, ms)
            logger.error("Gemini HTTP error: %s", r.status_code)
            logger.error("Gemini error body: %s", r.text[:1000])
            raise ProviderError(r.status_code, r.text)

        record_provider_call(True, ms)
        logger.debug("Gemini responded in %.0f ms", ms)
        return r.text
