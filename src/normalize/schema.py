from __future__ import annotations

from dataclasses import astuple, dataclass, fields
from typing import Any, Mapping

SENTINEL = "Not Available"

# External column names in the order the engine is asked to return them and
# the order every export writes them.
FIELD_NAMES: tuple[str, ...] = (
    "INTERN NAME",
    "Community College Name",
    "Community name",
    "Leader name",
    "Leader Number",
    "Leader Email",
    "Member name",
    "Member No.",
    "Member Email",
    "Hackathon Name",
)


def _coerce_field(value: Any) -> str:
    if value is None:
        return SENTINEL
    text = str(value).strip()
    return text or SENTINEL


@dataclass(frozen=True, slots=True)
class HackathonRecord:
    """One community hackathon program row, fields kept in export order."""

    intern_name: str = SENTINEL
    community_college_name: str = SENTINEL
    community_name: str = SENTINEL
    leader_name: str = SENTINEL
    leader_phone: str = SENTINEL
    leader_email: str = SENTINEL
    member_name: str = SENTINEL
    member_phone: str = SENTINEL
    member_email: str = SENTINEL
    hackathon_name: str = SENTINEL

    def __post_init__(self) -> None:
        for field_info in fields(self):
            value = getattr(self, field_info.name)
            if not isinstance(value, str) or not value:
                raise ValueError(
                    f"Field '{field_info.name}' must be a non-empty string; use '{SENTINEL}' when unknown."
                )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> HackathonRecord:
        values = [_coerce_field(payload.get(name)) for name in FIELD_NAMES]
        return cls(*values)

    def values(self) -> tuple[str, ...]:
        return astuple(self)

    def to_dict(self) -> dict[str, str]:
        return dict(zip(FIELD_NAMES, self.values(), strict=True))

    @property
    def is_sentinel(self) -> bool:
        return all(value == SENTINEL for value in self.values())


def sentinel_record() -> HackathonRecord:
    return HackathonRecord()
