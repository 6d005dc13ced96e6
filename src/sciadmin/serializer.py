"""Form submission serializer driven by a resource schema."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Union

from .enums import FieldType, FormPolicy
from .errors import SchemaViolation
from .helpers import (
    FormValue,
    SubmissionValue,
    get_default_value,
    get_multiple_value,
    get_submission_value,
)
from .schema import Schema

logger = logging.getLogger(__name__)

SubmissionForm = dict[str, SubmissionValue]


def parse_form_data(
    schema: Schema,
    form_pairs: Iterable[tuple[str, FormValue]],
    policy: FormPolicy = FormPolicy.TOLERANT,
) -> SubmissionForm:
    """Convert submitted ``(key, value)`` pairs into a typed submission.

    Multi-valued select fields collect their values into a list in
    submission order; an empty selection collapses the field to None.
    Single-valued fields are coerced with ``get_submission_value`` and the
    last occurrence of a key wins.

    Args:
        schema: Schema of the resource being submitted
        form_pairs: Ordered pairs as produced by a form submission
        policy: TOLERANT drops keys missing from the schema, STRICT raises

    Returns:
        Mapping of field key to typed value, restricted to schema keys

    Raises:
        SchemaViolation: STRICT policy and a key is missing from the schema
        InvalidFieldValue: A date field holds an unparseable string
    """
    submit_data: SubmissionForm = {}
    collapsed: set[str] = set()
    for key, value in form_pairs:
        if key not in schema:
            if policy == FormPolicy.STRICT:
                logger.error(f"Submitted key not in schema: {key}")
                raise SchemaViolation(key)
            logger.debug(f"Dropping submitted key not in schema: {key}")
            continue

        element = schema[key]
        if get_multiple_value(element) and element.type == FieldType.SELECT:
            # an empty selection nulls the whole field, later values included
            if value == "" or key in collapsed:
                submit_data[key] = None
                collapsed.add(key)
                continue
            current = submit_data.get(key)
            if isinstance(current, list):
                current.append(value)
            else:
                submit_data[key] = [value]
        else:
            submit_data[key] = get_submission_value(element, value)
    return submit_data


def parse_data(schema: Schema, form_pairs: Iterable[tuple[str, FormValue]]) -> SubmissionForm:
    return parse_form_data(schema, form_pairs, policy=FormPolicy.STRICT)


def default_values(schema: Schema, record: Mapping[str, Any] | None) -> dict[str, Union[str, list[str]]]:
    """Map a fetched entity record to input default values for every schema field."""
    record = record or {}
    return {key: get_default_value(element, record.get(key)) for key, element in schema.items()}
