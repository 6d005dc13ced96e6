"""Derivation helpers answering display and coercion questions from a schema."""

from datetime import datetime
from typing import Optional, Union

from .consts import DATE_PREFIX_LENGTH, DEFAULT_TITLE_KEY, PLACEHOLDER_PREFIX, REQUIRED_MARKER
from .enums import FieldType
from .models import FormFile
from .schema import SchemaElement
from .utils import string_to_date

FormValue = Union[str, FormFile]
SubmissionValue = Union[str, list[str], datetime, FormFile, None]


def get_title_key(schema: SchemaElement) -> str:
    return schema.title_key or DEFAULT_TITLE_KEY


def get_multiple_value(schema: SchemaElement) -> bool:
    return bool(schema.multiple)


def get_hidden_value(schema: SchemaElement) -> bool:
    """Whether the input/select element for this field should be hidden."""
    return bool(schema.hidden)


def get_required(schema: SchemaElement) -> bool:
    """Whether the field is required. Only true when ``required`` is set."""
    return bool(schema.required)


def get_fetcher_key(schema: SchemaElement, key: str) -> str:
    """Get the name of the data source feeding a select field.

    A select whose key differs from the resource it lists, such as
    ``institutionType`` listing ``vocabulary`` records, sets ``fetcher_key``.

    Args:
        schema: Schema of the field
        key: Field key, also the name of the select element

    Returns:
        ``schema.fetcher_key`` if provided, otherwise ``key``
    """
    return schema.fetcher_key if schema.fetcher_key else key


def capitalise(key: str) -> str:
    return key[0].upper() + key[1:] if len(key) >= 1 else key


def get_table_display_key(schema: SchemaElement, key: str) -> str:
    """Get the table header text for a field.

    Args:
        schema: Schema of the field
        key: Field key

    Returns:
        Capitalised ``schema.label_key`` if provided, otherwise capitalised key
    """
    return capitalise(schema.label_key if schema.label_key else key)


def get_form_display_key(schema: SchemaElement, key: str) -> str:
    """Get the form label for a field: the table header plus ``*`` if required."""
    display_key = get_table_display_key(schema, key)
    return display_key + REQUIRED_MARKER if get_required(schema) else display_key


def get_placeholder_value(schema: SchemaElement, key: str) -> str:
    if schema.placeholder:
        return schema.placeholder
    return PLACEHOLDER_PREFIX + get_table_display_key(schema, key)


def get_default_value(
    schema: SchemaElement,
    value: Union[str, list[str], None],
) -> Union[str, list[str]]:
    """Get the default value of an input/select from a value fetched from the server.

    Used to pre-fill update forms. Date values keep only their ``YYYY-MM-DD``
    prefix; empty values become ``""``.

    Args:
        schema: Schema of the field
        value: Value obtained from the server, possibly None or a list

    Returns:
        Default value for the input/select element
    """
    if isinstance(value, list):
        return [_get_default_value(schema, item) for item in value]
    return _get_default_value(schema, value)


def _get_default_value(schema: SchemaElement, value: Optional[str]) -> str:
    if not value:
        return ""
    if schema.type == FieldType.DATE:
        return value[:DATE_PREFIX_LENGTH]
    return value


def get_submission_value(schema: SchemaElement, raw_value: FormValue) -> SubmissionValue:
    """Convert a raw submitted form value into its typed submission value.

    Form submissions only carry strings and files. Empty strings become
    None and date fields are parsed into datetimes so they serialise as
    ISO timestamps; everything else is returned as is.

    Args:
        schema: Schema of the field
        raw_value: String or FormFile from the submission

    Returns:
        None, datetime, or the raw value unchanged

    Raises:
        InvalidFieldValue: If a date field holds an unparseable string
    """
    if raw_value == "":
        return None
    if schema.type == FieldType.DATE and isinstance(raw_value, str):
        return string_to_date(raw_value)
    return raw_value
