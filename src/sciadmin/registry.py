"""Per-resource bindings built from configuration."""

import logging
from typing import Any

from .binding import ResourceConfig, RouteBinding
from .config import Config
from .errors import ConfigException, SchemaException

logger = logging.getLogger(__name__)


class Registry:
    """Holds one RouteBinding per configured resource, keyed by resource name."""

    def __init__(self, bindings: dict[str, RouteBinding[Any]], list_fields: dict[str, list[str]] | None = None):
        self._bindings = dict(bindings)
        self._list_fields = dict(list_fields or {})

    @classmethod
    def from_config(cls, config: Config) -> "Registry":
        bindings = {}
        list_fields = {}
        for name, resource in config.resources.items():
            try:
                schema = resource.build_schema()
            except SchemaException as e:
                raise ConfigException(f"Invalid schema for resource '{name}': {e}") from e

            resource_config = ResourceConfig(
                url=config.resource_url(name),
                id_key=resource.id_key,
                response_policy=resource.response_policy,
                form_policy=resource.form_policy,
                null_on_read_failure=resource.null_on_read_failure,
                timeout=config.api.timeout,
            )
            bindings[name] = RouteBinding(resource_config, schema)
            list_fields[name] = list(resource.list_fields) or schema.visible_keys()
            logger.debug(f"Registered resource {name} at {resource_config.url}")

        logger.info(f"Registered {len(bindings)} resources")
        return cls(bindings, list_fields)

    def get(self, name: str) -> RouteBinding[Any]:
        try:
            return self._bindings[name]
        except KeyError:
            raise ConfigException(
                f"Unknown resource: {name}. Available: {', '.join(self.names()) or 'none'}"
            ) from None

    def names(self) -> list[str]:
        return sorted(self._bindings)

    def table_fields(self, name: str) -> list[str]:
        binding = self.get(name)
        return self._list_fields.get(name) or binding.schema.visible_keys()

    def __contains__(self, name: str) -> bool:
        return name in self._bindings
