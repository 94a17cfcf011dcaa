from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.normalize.schema import FIELD_NAMES, SENTINEL

DEFAULT_MODEL = "gemini-3-flash-preview"
TARGET_YEARS = (2024, 2025)
PREFERRED_SOURCES = ("GDSC 2024/25", "College 2024 Notices", "Recent Devpost")


@dataclass(frozen=True, slots=True)
class StructuredRequest:
    region: str
    model: str
    prompt: str
    response_schema: dict[str, Any]
    response_mime_type: str = "application/json"
    use_search_grounding: bool = True

    def to_payload(self) -> dict[str, Any]:
        """JSON body for a Gemini ``generateContent`` call."""

        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": self.prompt}]}],
            "generationConfig": {
                "responseMimeType": self.response_mime_type,
                "responseSchema": self.response_schema,
            },
        }
        if self.use_search_grounding:
            payload["tools"] = [{"google_search": {}}]
        return payload


def build_response_schema() -> dict[str, Any]:
    return {
        "type": "ARRAY",
        "items": {
            "type": "OBJECT",
            "properties": {name: {"type": "STRING"} for name in FIELD_NAMES},
            "required": list(FIELD_NAMES),
            "propertyOrdering": list(FIELD_NAMES),
        },
    }


def build_prompt(region: str) -> str:
    first_year, last_year = TARGET_YEARS
    column_order = ", ".join(f"{index}. {name}" for index, name in enumerate(FIELD_NAMES, start=1))
    return "\n".join(
        [
            f"DISTRICT NAME: {region}",
            f"TASK: Find ALL HACKATHON / COMMUNITY PROGRAMS conducted in {first_year} and {last_year} ONLY.",
            "",
            "STRICT TEMPORAL RULE:",
            f"- ONLY include events that occurred in {first_year} or are scheduled for {last_year}.",
            f"- EXCLUDE all {first_year - 1}, {first_year - 2}, or older records.",
            "",
            "STRICT COLUMN ORDER:",
            column_order,
            "",
            "HARD RULES:",
            "- Output must be valid JSON array of objects.",
            "- Phone numbers -> digits only.",
            "- Email must contain '@'.",
            f'- If field is not found, use "{SENTINEL}".',
            f"- Do NOT guess. Use official sources ({', '.join(PREFERRED_SOURCES)}).",
        ]
    )


def build_request(region: str, *, model: str = DEFAULT_MODEL) -> StructuredRequest:
    return StructuredRequest(
        region=region,
        model=model,
        prompt=build_prompt(region),
        response_schema=build_response_schema(),
    )
