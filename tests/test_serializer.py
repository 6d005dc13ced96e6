"""Form serializer tests"""

from datetime import datetime, timezone

import pytest

from sciadmin.enums import FormPolicy
from sciadmin.errors import SchemaViolation
from sciadmin.models import FormFile
from sciadmin.schema import Schema
from sciadmin.serializer import default_values, parse_data, parse_form_data


@pytest.fixture
def study_schema():
    return Schema(
        {
            "title": {"type": "text", "required": True},
            "startDate": {"type": "date"},
            "investigationId": {"type": "select", "labelKey": "investigation", "fetcherKey": "investigation"},
            "staff": {"type": "select", "multiple": True},
            "attachment": {"type": "file"},
        }
    )


class TestTolerantPolicy:
    def test_unknown_key_dropped(self, study_schema):
        result = parse_form_data(study_schema, [("title", "x"), ("unknown", "y")])
        assert result == {"title": "x"}

    def test_multi_select_collects_in_order(self, study_schema):
        result = parse_form_data(study_schema, [("staff", "s2"), ("title", "x"), ("staff", "s1")])
        assert result["staff"] == ["s2", "s1"]

    def test_multi_select_single_value_is_list(self, study_schema):
        result = parse_form_data(study_schema, [("staff", "s1")])
        assert result["staff"] == ["s1"]

    def test_multi_select_empty_is_none(self, study_schema):
        result = parse_form_data(study_schema, [("staff", "")])
        assert result["staff"] is None

    def test_multi_select_empty_collapses_whole_field(self, study_schema):
        result = parse_form_data(study_schema, [("staff", "s1"), ("staff", ""), ("staff", "s2")])
        assert result["staff"] is None

    def test_single_select_last_wins(self, study_schema):
        result = parse_form_data(study_schema, [("investigationId", "a"), ("investigationId", "b")])
        assert result["investigationId"] == "b"

    def test_coercion(self, study_schema):
        upload = FormFile(filename="notes.txt", content=b"hi", content_type="text/plain")
        result = parse_form_data(
            study_schema,
            [("title", ""), ("startDate", "2024-01-01"), ("attachment", upload)],
        )
        assert result == {
            "title": None,
            "startDate": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "attachment": upload,
        }

    def test_base_fields_accepted(self, study_schema):
        result = parse_form_data(study_schema, [("id", "abc"), ("createdAt", "")])
        assert result == {"id": "abc", "createdAt": None}

    def test_empty_submission(self, study_schema):
        assert parse_form_data(study_schema, []) == {}


class TestStrictPolicy:
    def test_unknown_key_raises(self, study_schema):
        with pytest.raises(SchemaViolation) as exc_info:
            parse_form_data(study_schema, [("title", "x"), ("unknown", "y")], policy=FormPolicy.STRICT)
        assert exc_info.value.key == "unknown"
        assert "unknown" in str(exc_info.value)

    def test_parse_data_is_strict(self, study_schema):
        with pytest.raises(SchemaViolation):
            parse_data(study_schema, [("bogus", "1")])

    def test_same_coercion_as_tolerant(self, study_schema):
        pairs = [("title", "x"), ("startDate", "2024-02-03"), ("staff", "a"), ("staff", "b")]
        assert parse_data(study_schema, pairs) == parse_form_data(study_schema, pairs)


def test_default_values(study_schema):
    record = {
        "id": "1",
        "createdAt": "2024-01-01T08:00:00.000Z",
        "title": "Study",
        "startDate": "2024-03-04T00:00:00.000Z",
        "staff": ["s1", "s2"],
        "investigationId": None,
    }
    defaults = default_values(study_schema, record)

    assert defaults["createdAt"] == "2024-01-01"
    assert defaults["startDate"] == "2024-03-04"
    assert defaults["staff"] == ["s1", "s2"]
    assert defaults["investigationId"] == ""
    assert defaults["updatedAt"] == ""
    assert list(defaults) == list(study_schema)


def test_default_values_without_record(study_schema):
    assert set(default_values(study_schema, None).values()) == {""}
