"""Enumeration type definitions"""

from enum import Enum


class FieldType(str, Enum):
    """Input control types a schema field can declare"""

    TEXT = "text"
    DATE = "date"
    SELECT = "select"
    TEXTAREA = "textarea"
    NUMBER = "number"
    FILE = "file"


class ResponsePolicy(str, Enum):
    """How the resource client treats a non-2xx response.

    PERMISSIVE logs the response and still decodes and returns its body.
    STRICT logs the response and raises it wrapped in NonSuccessResponse.
    """

    PERMISSIVE = "permissive"
    STRICT = "strict"


class FormPolicy(str, Enum):
    """How the serializer treats submitted keys missing from the schema.

    TOLERANT drops them silently, STRICT raises SchemaViolation.
    """

    TOLERANT = "tolerant"
    STRICT = "strict"
