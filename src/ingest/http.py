from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from src.ingest.base import RawResult, RetrievalClient
from src.ingest.errors import RetrievalError
from src.ingest.query import StructuredRequest

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_USER_AGENT = "HackathonFinder/0.1"
logger = logging.getLogger(__name__)
_SLOW_REQUEST_SECONDS = 5.0


@dataclass(slots=True)
class GeminiClient(RetrievalClient):
    api_key: str | None
    timeout_seconds: float = 60.0
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    session: requests.Session | None = field(default=None, repr=False)
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.session is not None:
            self._session = self.session
            return

        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})
        # One attempt per lookup; failures go straight back to the caller.
        adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    def close(self) -> None:
        self._session.close()

    @property
    def timeout_tuple(self) -> tuple[float, float]:
        connect_timeout = max(1.0, min(self.timeout_seconds, 5.0))
        read_timeout = max(connect_timeout, self.timeout_seconds)
        return connect_timeout, read_timeout

    def endpoint(self, model: str) -> str:
        return f"{self.base_url.rstrip('/')}/models/{model}:generateContent"

    def retrieve(self, request: StructuredRequest) -> RawResult:
        if not self.api_key:
            raise RetrievalError("No API key configured for the retrieval engine.")

        url = self.endpoint(request.model)
        started_at = time.monotonic()
        try:
            response = self._session.post(
                url,
                json=request.to_payload(),
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout_tuple,
            )
        except requests.RequestException as exc:
            raise RetrievalError(f"Request to retrieval engine failed: {exc}") from exc

        elapsed = time.monotonic() - started_at
        if elapsed > _SLOW_REQUEST_SECONDS:
            logger.warning("Slow engine call %.3fs model=%s region=%s", elapsed, request.model, request.region)

        if not response.ok:
            raise RetrievalError(
                f"Retrieval engine returned HTTP {response.status_code}: {_error_message(response)}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise RetrievalError("Retrieval engine returned a non-JSON response.") from exc

        text = extract_candidate_text(body)
        logger.info("Engine call finished model=%s region=%s chars=%d", request.model, request.region, len(text))
        return RawResult(text=text, model=request.model, fetched_at=self.utcnow())


def extract_candidate_text(body: Any) -> str:
    if not isinstance(body, dict):
        raise RetrievalError("Retrieval engine returned an unexpected payload.")

    feedback = body.get("promptFeedback") or {}
    if not isinstance(feedback, dict):
        raise RetrievalError("Retrieval engine returned malformed prompt feedback.")
    block_reason = feedback.get("blockReason")
    if block_reason:
        raise RetrievalError(f"Retrieval engine rejected the request ({block_reason}).")

    candidates = body.get("candidates") or []
    if not isinstance(candidates, list):
        raise RetrievalError("Retrieval engine returned malformed candidates.")
    if not candidates:
        raise RetrievalError("Retrieval engine returned no candidates.")

    candidate = candidates[0] or {}
    if not isinstance(candidate, dict):
        raise RetrievalError("Retrieval engine returned a malformed candidate.")
    content = candidate.get("content") or {}
    if not isinstance(content, dict):
        raise RetrievalError("Retrieval engine returned malformed candidate content.")
    parts = content.get("parts") or []
    if not isinstance(parts, list):
        raise RetrievalError("Retrieval engine returned malformed content parts.")

    texts = [str(part["text"]) for part in parts if isinstance(part, dict) and part.get("text")]
    if not texts:
        finish_reason = candidate.get("finishReason") or "unknown"
        raise RetrievalError(f"Retrieval engine returned no text (finishReason={finish_reason}).")
    return "".join(texts)


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.reason or "unknown error"
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.reason or "unknown error"
