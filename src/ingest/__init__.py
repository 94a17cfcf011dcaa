from __future__ import annotations

from .base import RawResult, RetrievalClient
from .errors import LookupInProgressError, RetrievalError
from .http import GeminiClient
from .query import StructuredRequest, build_request
from .validate import validate

__all__ = [
    "GeminiClient",
    "LookupInProgressError",
    "RawResult",
    "RetrievalClient",
    "RetrievalError",
    "StructuredRequest",
    "build_request",
    "validate",
]
