"""Generic REST client for one admin resource."""

import json
import logging
from typing import Any, Generic, NoReturn, Optional, TypeVar, Union

import requests
from pydantic import TypeAdapter, ValidationError

from .consts import JSON_CONTENT_TYPE, TITLE_QUERY_PARAM
from .enums import ResponsePolicy
from .errors import DecodeFailure, InvalidFieldValue, NonSuccessResponse, TransportFailure
from .utils import json_default

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")


def _handle_request_exception(exception: requests.RequestException, operation: str) -> NoReturn:
    """Log a transport error and raise TransportFailure.

    Args:
        exception: The RequestException from requests library
        operation: Description of the operation being performed (e.g., "GET /api/study")

    Raises:
        TransportFailure: Always raises with formatted error message
    """
    logger.error(f"Failed to {operation}: {exception}")
    raise TransportFailure(f"Failed to {operation}: {exception}") from exception


def is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


class ResourceClient(Generic[EntityT]):
    """Client issuing list/get/create/update/remove requests against one resource URL.

    Non-2xx responses are always logged. What happens next depends on
    ``policy``: PERMISSIVE decodes the body anyway and returns it, STRICT
    raises NonSuccessResponse with the response attached.

    When ``entity_type`` is given, successful bodies are validated into that
    type with pydantic; otherwise decoded JSON is returned as is.
    """

    def __init__(
        self,
        url: str,
        policy: ResponsePolicy = ResponsePolicy.PERMISSIVE,
        entity_type: Optional[type[EntityT]] = None,
        timeout: Optional[float] = None,
    ):
        self.url = url.rstrip("/")
        self.policy = ResponsePolicy(policy)
        self.timeout = timeout
        self._entity_adapter = TypeAdapter(entity_type) if entity_type is not None else None
        self._list_adapter = TypeAdapter(list[entity_type]) if entity_type is not None else None

        logger.debug(
            f"ResourceClient initialized: url={self.url}, "
            f"policy={self.policy.value}, timeout={self.timeout}"
        )

    def _item_url(self, id: str) -> str:
        return f"{self.url}/{id}"

    def _check(
        self,
        response: requests.Response,
        operation: str,
        policy: Optional[ResponsePolicy] = None,
    ) -> requests.Response:
        if not is_success(response):
            logger.error(f"Failed to {operation}: status_code={response.status_code}")
            if (policy or self.policy) == ResponsePolicy.STRICT:
                raise NonSuccessResponse(response)
        return response

    def _decode(self, response: requests.Response, adapter: Optional[TypeAdapter], operation: str) -> Any:
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON in response to {operation}")
            raise DecodeFailure(f"Invalid JSON in response to {operation}") from e

        # error-shaped bodies from permissive responses are returned unvalidated
        if adapter is None or not is_success(response):
            return data
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            logger.error(f"Unexpected response shape for {operation}: {e.error_count()} errors")
            raise DecodeFailure(f"Unexpected response shape for {operation}") from e

    def _encode(self, payload: Any, operation: str) -> str:
        try:
            return json.dumps(payload, default=json_default)
        except TypeError as e:
            logger.error(f"Cannot encode payload for {operation}: {e}")
            raise InvalidFieldValue(f"Cannot encode payload for {operation}: {e}") from e

    def list(self, title: Optional[str] = None, policy: Optional[ResponsePolicy] = None) -> list[EntityT]:
        """List entities, optionally filtered by title.

        Args:
            title: Value of the ``title`` query parameter; omitted when empty
            policy: Overrides the client policy for this call

        Returns:
            Decoded list of entities
        """
        operation = f"GET {self.url}"
        params = {TITLE_QUERY_PARAM: title} if title else None
        logger.debug(f"Listing {self.url} (title={title!r})")
        try:
            response = requests.get(self.url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            _handle_request_exception(e, operation)
        self._check(response, operation, policy)
        return self._decode(response, self._list_adapter, operation)

    def get_by_id(self, id: str, policy: Optional[ResponsePolicy] = None) -> EntityT:
        url = self._item_url(id)
        operation = f"GET {url}"
        logger.debug(f"Fetching {url}")
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            _handle_request_exception(e, operation)
        self._check(response, operation, policy)
        return self._decode(response, self._entity_adapter, operation)

    def create(self, payload: dict[str, Any]) -> EntityT:
        operation = f"POST {self.url}"
        logger.info(f"Creating entity at {self.url}")
        try:
            response = requests.post(
                self.url,
                data=self._encode(payload, operation),
                headers={"Content-Type": JSON_CONTENT_TYPE},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            _handle_request_exception(e, operation)
        self._check(response, operation)
        return self._decode(response, self._entity_adapter, operation)

    def update(self, payload: dict[str, Any], id: str) -> EntityT:
        url = self._item_url(id)
        operation = f"PUT {url}"
        logger.info(f"Updating entity at {url}")
        try:
            response = requests.put(
                url,
                data=self._encode(payload, operation),
                headers={"Content-Type": JSON_CONTENT_TYPE},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            _handle_request_exception(e, operation)
        self._check(response, operation)
        return self._decode(response, self._entity_adapter, operation)

    def remove(self, id: str) -> Union[EntityT, requests.Response]:
        """Delete an entity.

        Args:
            id: Entity identifier

        Returns:
            Decoded body under PERMISSIVE policy, the raw response under STRICT

        Raises:
            TransportFailure: If the request could not be sent
            NonSuccessResponse: STRICT policy and a non-2xx status
            DecodeFailure: PERMISSIVE policy and a body that is not JSON
        """
        url = self._item_url(id)
        operation = f"DELETE {url}"
        logger.info(f"Deleting entity at {url}")
        try:
            response = requests.delete(url, timeout=self.timeout)
        except requests.RequestException as e:
            _handle_request_exception(e, operation)
        self._check(response, operation)
        if self.policy == ResponsePolicy.STRICT:
            return response
        return self._decode(response, self._entity_adapter, operation)
