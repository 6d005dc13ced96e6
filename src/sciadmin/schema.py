"""Declarative field schemas for admin resources."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from .consts import CREATED_AT_FIELD, DEFAULT_TITLE_KEY, ID_FIELD, UPDATED_AT_FIELD
from .enums import FieldType
from .errors import SchemaException


class SchemaElement(BaseModel):
    """Metadata for one field of a resource.

    Accepts both snake_case and camelCase keys, so ``labelKey`` and
    ``label_key`` are equivalent in configuration files.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    type: FieldType = FieldType.TEXT
    hidden: bool = False
    required: bool = False
    multiple: bool = False
    title_key: str = DEFAULT_TITLE_KEY
    label_key: Optional[str] = None
    placeholder: Optional[str] = None
    fetcher_key: Optional[str] = None

    @model_validator(mode="after")
    def validate_multiple(self) -> "SchemaElement":
        if self.multiple and self.type != FieldType.SELECT:
            raise ValueError("multiple is only supported for select fields")
        return self


BASE_FIELDS: dict[str, SchemaElement] = {
    ID_FIELD: SchemaElement(type=FieldType.TEXT, hidden=True),
    CREATED_AT_FIELD: SchemaElement(type=FieldType.DATE, hidden=True),
    UPDATED_AT_FIELD: SchemaElement(type=FieldType.DATE, hidden=True),
}


def _coerce_element(key: str, value: Any) -> SchemaElement:
    if isinstance(value, SchemaElement):
        return value
    try:
        return SchemaElement.model_validate(value)
    except ValidationError as e:
        error_lines = [f"Invalid schema for field '{key}':"]
        for error in e.errors():
            loc = " -> ".join(str(item) for item in error["loc"]) or key
            error_lines.append(f"  - {loc}: {error['msg']}")
        raise SchemaException("\n".join(error_lines)) from e


class Schema(Mapping[str, SchemaElement]):
    """Immutable, ordered mapping of field key to SchemaElement.

    Every schema starts with the hidden ``id``, ``createdAt`` and
    ``updatedAt`` fields. Fields are validated once, here.
    """

    def __init__(self, fields: Mapping[str, Any] | None = None, *, include_base: bool = True):
        elements: dict[str, SchemaElement] = dict(BASE_FIELDS) if include_base else {}
        for key, value in (fields or {}).items():
            if not isinstance(key, str) or not key:
                raise SchemaException(f"Schema keys must be non-empty strings, got {key!r}")
            elements[key] = _coerce_element(key, value)
        self._elements = elements

    def __getitem__(self, key: str) -> SchemaElement:
        return self._elements[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"Schema({list(self._elements)})"

    def visible_keys(self) -> list[str]:
        return [key for key, element in self._elements.items() if not element.hidden]
