from sciadmin.enums import FieldType, FormPolicy, ResponsePolicy


def test_policy_enum_values():
    assert ResponsePolicy.PERMISSIVE.value == "permissive"
    assert ResponsePolicy.STRICT.value == "strict"
    assert FormPolicy.TOLERANT.value == "tolerant"
    assert FormPolicy.STRICT.value == "strict"


def test_field_type_is_string_enum():
    assert isinstance(FieldType.DATE, str)
    assert FieldType.DATE == "date"
    assert FieldType("select") is FieldType.SELECT
