from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from src.ingest.base import RawResult
from src.ingest.validate import validate
from src.normalize.schema import FIELD_NAMES, SENTINEL, HackathonRecord, sentinel_record


def _raw(text: str) -> RawResult:
    return RawResult(text=text, model="gemini-test", fetched_at=datetime(2025, 3, 1, tzinfo=UTC))


def _full_row(**overrides: str) -> dict[str, str]:
    row = {name: f"value {index}" for index, name in enumerate(FIELD_NAMES, start=1)}
    row.update(overrides)
    return row


def test_empty_array_yields_single_sentinel_record() -> None:
    records = validate(_raw("[]"))

    assert len(records) == 1
    assert records[0].to_dict() == {name: SENTINEL for name in FIELD_NAMES}


@pytest.mark.parametrize("text", ["", "not json", "{\"INTERN NAME\": \"x\"}", "[1, 2, \"three\"]", "null"])
def test_unusable_payloads_fall_back_to_sentinel(text: str) -> None:
    records = validate(_raw(text))

    assert len(records) == 1
    assert records[0].is_sentinel


def test_deeply_nested_payload_falls_back_to_sentinel() -> None:
    records = validate(_raw("[" * 100000 + "]" * 100000))

    assert records == [sentinel_record()]


def test_none_and_plain_text_inputs_are_accepted() -> None:
    assert validate(None)[0].is_sentinel
    assert validate(json.dumps([_full_row()]))[0].intern_name == "value 1"


def test_records_keep_engine_order_and_values() -> None:
    rows = [_full_row(**{"Hackathon Name": "HackPune 2024"}), _full_row(**{"Hackathon Name": "DevFest 2025"})]

    records = validate(_raw(json.dumps(rows)))

    assert [record.hackathon_name for record in records] == ["HackPune 2024", "DevFest 2025"]
    assert records[0].values() == tuple(rows[0][name] for name in FIELD_NAMES)


def test_missing_null_and_blank_fields_become_sentinel() -> None:
    row = _full_row()
    del row["Leader Email"]
    row["Member No."] = None  # type: ignore[assignment]
    row["Community name"] = "   "

    record = validate(_raw(json.dumps([row])))[0]

    assert record.leader_email == SENTINEL
    assert record.member_phone == SENTINEL
    assert record.community_name == SENTINEL
    assert record.intern_name == "value 1"


def test_field_formats_are_passed_through_unchanged() -> None:
    row = _full_row(**{"Leader Number": "+91 98450-12345", "Leader Email": "lead at example.org"})

    record = validate(_raw(json.dumps([row])))[0]

    assert record.leader_phone == "+91 98450-12345"
    assert record.leader_email == "lead at example.org"


def test_record_rejects_empty_values() -> None:
    with pytest.raises(ValueError):
        HackathonRecord(intern_name="")
