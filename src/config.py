from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from src.ingest.query import DEFAULT_MODEL

ROOT_DIR = Path(__file__).resolve().parents[1]
DEFAULT_HISTORY_PATH = ROOT_DIR / "data" / "history.json"
DEFAULT_TIMEOUT_SECONDS = 60.0
API_KEY_VARIABLES = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class Settings:
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    history_path: Path = DEFAULT_HISTORY_PATH
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.model.strip():
            raise ValueError("Model name must not be empty.")
        timeout = float(self.timeout_seconds)
        if not math.isfinite(timeout) or timeout <= 0.0:
            raise ValueError("Timeout must be a positive, finite number of seconds.")
        if self.log_level.upper() not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level '{self.log_level}'.")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        values = os.environ if environ is None else environ
        api_key = next((values[name] for name in API_KEY_VARIABLES if values.get(name)), None)
        history_text = values.get("HACKATHON_FINDER_HISTORY_PATH")
        history_path = Path(history_text) if history_text else DEFAULT_HISTORY_PATH
        if not history_path.is_absolute():
            history_path = ROOT_DIR / history_path
        return cls(
            api_key=api_key,
            model=values.get("HACKATHON_FINDER_MODEL") or DEFAULT_MODEL,
            timeout_seconds=float(values.get("HACKATHON_FINDER_TIMEOUT_SECONDS") or DEFAULT_TIMEOUT_SECONDS),
            history_path=history_path,
            log_level=(values.get("HACKATHON_FINDER_LOG_LEVEL") or "INFO").upper(),
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
