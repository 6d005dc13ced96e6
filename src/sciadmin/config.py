"""Configuration file loading and validation."""

import logging
import tomllib
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, HttpUrl, ValidationError, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .consts import ENV_NESTED_DELIMITER, ENV_PREFIX, LOG_FILE_DEFAULT
from .enums import FormPolicy, ResponsePolicy
from .errors import ConfigException
from .schema import BASE_FIELDS, Schema, SchemaElement

logger = logging.getLogger(__name__)


class ApiConfig(BaseModel):
    """Admin REST API configuration."""

    base_url: HttpUrl
    timeout: Optional[float] = Field(default=None, gt=0)


class LogConfig(BaseModel):
    file: str = LOG_FILE_DEFAULT


class ResourceSettings(BaseModel):
    """One entity type exposed by the API.

    ``path`` defaults to the resource name and ``id_key`` to ``<name>Id``.
    """

    path: str = ""
    id_key: str = ""
    response_policy: ResponsePolicy = ResponsePolicy.PERMISSIVE
    form_policy: FormPolicy = FormPolicy.TOLERANT
    null_on_read_failure: bool = True
    list_fields: List[str] = Field(default_factory=list)
    fields: Dict[str, SchemaElement] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_list_fields(self) -> "ResourceSettings":
        known = set(BASE_FIELDS) | set(self.fields)
        unknown = [key for key in self.list_fields if key not in known]
        if unknown:
            raise ValueError(f"list_fields not declared in fields: {', '.join(unknown)}")
        return self

    def build_schema(self) -> Schema:
        return Schema(self.fields)


class Config(BaseSettings):
    """Application configuration."""

    api: ApiConfig
    log: LogConfig = Field(default_factory=LogConfig)
    resources: Dict[str, ResourceSettings] = Field(default_factory=dict)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter=ENV_NESTED_DELIMITER,
    )

    @field_validator("resources", mode="after")
    @classmethod
    def fill_resource_defaults(cls, v: Dict[str, ResourceSettings]) -> Dict[str, ResourceSettings]:
        filled = {}
        for name, resource in v.items():
            filled[name] = resource.model_copy(
                update={
                    "path": (resource.path or name).strip("/"),
                    "id_key": resource.id_key or f"{name}Id",
                }
            )
        return filled

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> "Config":
        """Load configuration from specified path."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigException(f"Configuration file not found: {config_path}")

        class _Config(cls):
            model_config = SettingsConfigDict(
                toml_file=str(path),
                env_prefix=ENV_PREFIX,
                env_nested_delimiter=ENV_NESTED_DELIMITER,
            )

        try:
            return _Config()
        except ValidationError as e:
            error_lines = ["Configuration validation failed:"]
            for error in e.errors():
                loc = " -> ".join(str(item) for item in error["loc"])
                error_lines.append(f"  - {loc}: {error['msg']}")
            raise ConfigException("\n".join(error_lines)) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigException(f"Invalid TOML in {config_path}: {e}") from e

    def resource_url(self, name: str) -> str:
        resource = self.get_resource(name)
        return f"{str(self.api.base_url).rstrip('/')}/{resource.path}"

    def get_resource(self, name: str) -> ResourceSettings:
        try:
            return self.resources[name]
        except KeyError:
            raise ConfigException(f"Unknown resource: {name}") from None
