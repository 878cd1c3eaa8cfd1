from __future__ import annotations

from pet_browser.core.records import DEFAULT_NAME, DEFAULT_STATUS, Record, normalise_records


def test_null_id_entries_are_dropped():
    payload = [
        {"id": 1, "name": "Rex", "status": "available"},
        {"id": None, "name": "Ghost"},
    ]
    assert normalise_records(payload) == [Record(id=1, name="Rex", status="available")]


def test_missing_name_gets_placeholder():
    records = normalise_records([{"id": 2, "status": "pending"}])
    assert records == [Record(id=2, name=DEFAULT_NAME, status="pending")]
    assert records[0].name == "No name"


def test_missing_or_empty_status_defaults_to_unknown():
    records = normalise_records([{"id": 3, "name": "Tom"}, {"id": 4, "name": "Jo", "status": ""}])
    assert [r.status for r in records] == [DEFAULT_STATUS, DEFAULT_STATUS]


def test_zero_id_is_kept():
    assert normalise_records([{"id": 0, "name": "Zero"}])[0].id == 0


def test_non_list_payload_is_empty():
    assert normalise_records({"message": "not a list"}) == []
    assert normalise_records(None) == []
    assert normalise_records("oops") == []


def test_non_mapping_and_unusable_ids_are_dropped():
    payload = [
        42,
        "cat",
        {"name": "no id"},
        {"id": "abc", "name": "bad id"},
        {"id": "7", "name": "string id"},
    ]
    assert normalise_records(payload) == [Record(id=7, name="string id", status=DEFAULT_STATUS)]


def test_order_is_preserved():
    payload = [{"id": i, "name": f"pet{i}", "status": "sold"} for i in (5, 3, 9)]
    assert [r.id for r in normalise_records(payload)] == [5, 3, 9]


def test_record_to_dict():
    assert Record(id=1, name="Rex", status="available").to_dict() == {
        "id": 1,
        "name": "Rex",
        "status": "available",
    }


def test_float_and_fractional_ids_are_dropped():
    payload = [
        {"id": 1.9, "name": "float id"},
        {"id": 2.0, "name": "whole float id"},
        {"id": "3.5", "name": "fractional string id"},
        {"id": True, "name": "bool id"},
        {"id": " 12 ", "name": "padded string id"},
        {"id": "-4", "name": "negative string id"},
    ]
    assert normalise_records(payload) == [
        Record(id=12, name="padded string id", status=DEFAULT_STATUS),
        Record(id=-4, name="negative string id", status=DEFAULT_STATUS),
    ]
