"""Loader/action bindings that connect a resource schema and client to the page router."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, Optional, Union

import requests

from .client import EntityT, ResourceClient
from .consts import TITLE_QUERY_PARAM
from .enums import FormPolicy, ResponsePolicy
from .errors import MissingRouteParameter
from .models import RouteRequest
from .schema import Schema
from .serializer import SubmissionForm, parse_form_data

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceConfig:
    """Immutable settings captured when a binding is built."""

    url: str
    id_key: str
    response_policy: ResponsePolicy = ResponsePolicy.PERMISSIVE
    form_policy: FormPolicy = FormPolicy.TOLERANT
    null_on_read_failure: bool = True
    timeout: Optional[float] = None


class RouteBinding(Generic[EntityT]):
    """Loaders and actions for one resource.

    Loaders read and, unless ``null_on_read_failure`` is off, turn any
    failure, non-2xx responses included, into None so the page renders an
    empty state. With the flag off, loaders follow the client policy.
    Actions parse the submitted form, write, and let every failure
    propagate to the router.
    """

    def __init__(
        self,
        config: ResourceConfig,
        schema: Schema,
        client: Optional[ResourceClient[EntityT]] = None,
    ):
        self.config = config
        self.schema = schema
        self.client = client or ResourceClient(
            config.url,
            policy=config.response_policy,
            timeout=config.timeout,
        )

    def _route_id(self, params: Mapping[str, str]) -> str:
        value = params.get(self.config.id_key)
        if not value:
            raise MissingRouteParameter(f"Missing route parameter: {self.config.id_key}")
        return value

    def _read_policy(self) -> Optional[ResponsePolicy]:
        # a non-2xx read counts as a failure even for permissive clients
        return ResponsePolicy.STRICT if self.config.null_on_read_failure else None

    def parse_request(self, request: RouteRequest) -> SubmissionForm:
        return parse_form_data(self.schema, request.form, policy=self.config.form_policy)

    def loader_all(self, request: RouteRequest) -> Optional[list[EntityT]]:
        try:
            title = request.query_param(TITLE_QUERY_PARAM)
            return self.client.list(title, policy=self._read_policy())
        except Exception as e:
            if not self.config.null_on_read_failure:
                raise
            logger.warning(f"Loading {self.config.url} failed, returning no data: {e}")
            return None

    def loader_by_id(self, params: Mapping[str, str]) -> Optional[EntityT]:
        try:
            return self.client.get_by_id(self._route_id(params), policy=self._read_policy())
        except Exception as e:
            if not self.config.null_on_read_failure:
                raise
            logger.warning(f"Loading {self.config.url} by id failed, returning no data: {e}")
            return None

    def action_create(self, request: RouteRequest) -> EntityT:
        submit_data = self.parse_request(request)
        result = self.client.create(submit_data)
        logger.debug(f"POST result: {result}")
        return result

    def action_update(self, request: RouteRequest, params: Mapping[str, str]) -> EntityT:
        submit_data = self.parse_request(request)
        return self.client.update(submit_data, self._route_id(params))

    def action_delete(self, params: Mapping[str, str]) -> Union[EntityT, requests.Response]:
        return self.client.remove(self._route_id(params))


def create_handlers(url: str, entity_type: Optional[type] = None) -> ResourceClient[Any]:
    """Build a permissive client for ``url``."""
    return ResourceClient(url, policy=ResponsePolicy.PERMISSIVE, entity_type=entity_type)


def create_loader_action(
    url: str,
    schema: Schema,
    id_key: str,
    entity_type: Optional[type] = None,
) -> RouteBinding[Any]:
    """Bind ``schema`` and ``url`` with a tolerant serializer and a permissive client."""
    config = ResourceConfig(
        url=url,
        id_key=id_key,
        response_policy=ResponsePolicy.PERMISSIVE,
        form_policy=FormPolicy.TOLERANT,
    )
    return RouteBinding(config, schema, create_handlers(url, entity_type))


def create_handler(
    schema: Schema,
    url: str,
    id_key: str,
    entity_type: Optional[type] = None,
) -> RouteBinding[Any]:
    """Bind ``schema`` and ``url`` with a strict serializer and a strict client."""
    config = ResourceConfig(
        url=url,
        id_key=id_key,
        response_policy=ResponsePolicy.STRICT,
        form_policy=FormPolicy.STRICT,
    )
    client = ResourceClient(url, policy=ResponsePolicy.STRICT, entity_type=entity_type)
    return RouteBinding(config, schema, client)
