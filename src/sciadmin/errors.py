"""Exception definitions for sciadmin"""


class AdminException(Exception):
    """Base exception for all sciadmin errors.

    All custom exceptions in sciadmin inherit from this class. Use this as a
    catch-all when you don't need to handle specific exception types.
    """

    pass


class ConfigException(AdminException):
    """Raised when configuration validation or loading fails.

    Use this exception when:
    - The configuration file cannot be found
    - The TOML syntax is invalid
    - Configuration validation fails (missing required fields, invalid values)
    - A resource name is not present in the configuration
    """

    pass


class SchemaException(AdminException):
    """Raised when a schema definition is invalid."""

    pass


class TransportFailure(AdminException):
    """Raised when an HTTP request could not be completed.

    Network errors, DNS failures, refused connections and timeouts all end up
    here. No response is available.
    """

    pass


class NonSuccessResponse(AdminException):
    """Raised by the strict response policy for HTTP statuses outside 2xx.

    The original response is kept on ``response`` so callers can inspect the
    status, headers or body themselves.
    """

    def __init__(self, response):
        self.response = response
        self.status_code = getattr(response, "status_code", None)
        super().__init__(
            f"Request to {getattr(response, 'url', '') or 'resource'} failed "
            f"(status: {self.status_code})"
        )


class SchemaViolation(AdminException):
    """Raised when a submitted key is not part of the active schema."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Key cannot be found in schema: {key}")


class InvalidFieldValue(AdminException):
    """Raised when a submitted value cannot be coerced or encoded, such as an
    unparseable date or a file in a JSON payload."""

    pass


class DecodeFailure(AdminException):
    """Raised when a response body is not valid JSON or not a valid entity."""

    pass


class MissingRouteParameter(AdminException):
    """Raised by actions when the route parameter carrying the entity id is
    absent. Loaders return None instead."""

    pass
