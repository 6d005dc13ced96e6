"""CLI main entry point."""

import json
import logging
from urllib.parse import urlencode

import click

from .config import Config
from .consts import CONFIG_FILE_DEFAULT, TITLE_QUERY_PARAM
from .enums import FieldType, ResponsePolicy
from .errors import AdminException
from .helpers import (
    get_fetcher_key,
    get_form_display_key,
    get_hidden_value,
    get_placeholder_value,
)
from .log import setup as setup_log
from .models import RouteRequest
from .registry import Registry
from .utils import json_default

logger = logging.getLogger(__name__)


def parse_field_options(values: tuple[str, ...]) -> list[tuple[str, str]]:
    """Split repeated ``key=value`` options into ordered form pairs.

    Args:
        values: Raw option values, a key may repeat for multi-valued selects

    Returns:
        List of (key, value) pairs in the order given

    Raises:
        click.BadParameter: If a value has no ``=``
    """
    pairs = []
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got '{item}'", param_hint="--field")
        pairs.append((key, value))
    return pairs


def echo_result(result) -> None:
    click.echo(json.dumps(result, indent=2, ensure_ascii=False, default=json_default))


def load_registry(ctx) -> Registry:
    """Load configuration, set up logging and build the resource registry."""
    if "registry" in ctx.obj:
        return ctx.obj["registry"]

    config_path = ctx.obj["config_path"]
    cfg = Config.load_from_file(config_path)
    setup_log(cfg.log.file, verbose=ctx.obj.get("verbose", False))
    logger.info(f"Loaded configuration file: {config_path}")

    registry = Registry.from_config(cfg)
    ctx.obj["registry"] = registry
    return registry


def run(ctx, func):
    try:
        return func(load_registry(ctx))
    except AdminException as e:
        logger.error(f"Application error: {e}", exc_info=True)
        raise click.ClickException(str(e))


@click.group()
@click.option("--config", "-c", default=CONFIG_FILE_DEFAULT, help="Configuration file path")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output to console")
@click.pass_context
def cli(ctx, config: str, verbose: bool):
    """sciadmin - manage scientific records through the admin API."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command(name="resources")
@click.pass_context
def resources(ctx):
    """List configured resources."""

    def _run(registry: Registry):
        click.echo("name\turl\tid_key")
        for name in registry.names():
            binding = registry.get(name)
            click.echo(f"{name}\t{binding.config.url}\t{binding.config.id_key}")

    run(ctx, _run)


@cli.command(name="fields")
@click.argument("name")
@click.option("--all", "show_all", is_flag=True, default=False, help="Include hidden fields")
@click.pass_context
def fields(ctx, name: str, show_all: bool):
    """Show form fields of a resource."""

    def _run(registry: Registry):
        schema = registry.get(name).schema
        click.echo("key\tlabel\ttype\tplaceholder\tsource")
        for key, element in schema.items():
            if get_hidden_value(element) and not show_all:
                continue
            click.echo(
                f"{key}\t{get_form_display_key(element, key)}\t{element.type.value}\t"
                f"{get_placeholder_value(element, key)}\t"
                f"{get_fetcher_key(element, key) if element.type == FieldType.SELECT else ''}"
            )

    run(ctx, _run)


@cli.command(name="list")
@click.argument("name")
@click.option("--title", default=None, help="Filter by title")
@click.pass_context
def list_entities(ctx, name: str, title: str | None):
    """List entities of a resource."""

    def _run(registry: Registry):
        binding = registry.get(name)
        url = binding.config.url
        if title:
            url = f"{url}?{urlencode({TITLE_QUERY_PARAM: title})}"
        result = binding.loader_all(RouteRequest(url=url))
        if result is None:
            click.echo(f"No data loaded for {name}", err=True)
            return
        echo_result(result)

    run(ctx, _run)


@cli.command(name="get")
@click.argument("name")
@click.argument("entity_id")
@click.pass_context
def get_entity(ctx, name: str, entity_id: str):
    """Show one entity."""

    def _run(registry: Registry):
        binding = registry.get(name)
        result = binding.loader_by_id({binding.config.id_key: entity_id})
        if result is None:
            click.echo(f"No data loaded for {name} {entity_id}", err=True)
            return
        echo_result(result)

    run(ctx, _run)


@cli.command(name="create")
@click.argument("name")
@click.option("--field", "-f", "field_values", multiple=True, help="key=value, repeatable")
@click.pass_context
def create_entity(ctx, name: str, field_values: tuple[str, ...]):
    """Create an entity from key=value fields."""
    pairs = parse_field_options(field_values)

    def _run(registry: Registry):
        binding = registry.get(name)
        echo_result(binding.action_create(RouteRequest(url=binding.config.url, form=pairs)))

    run(ctx, _run)


@cli.command(name="update")
@click.argument("name")
@click.argument("entity_id")
@click.option("--field", "-f", "field_values", multiple=True, help="key=value, repeatable")
@click.pass_context
def update_entity(ctx, name: str, entity_id: str, field_values: tuple[str, ...]):
    """Replace an entity with key=value fields."""
    pairs = parse_field_options(field_values)

    def _run(registry: Registry):
        binding = registry.get(name)
        request = RouteRequest(url=f"{binding.config.url}/{entity_id}", form=pairs)
        echo_result(binding.action_update(request, {binding.config.id_key: entity_id}))

    run(ctx, _run)


@cli.command(name="delete")
@click.argument("name")
@click.argument("entity_id")
@click.pass_context
def delete_entity(ctx, name: str, entity_id: str):
    """Delete an entity."""

    def _run(registry: Registry):
        binding = registry.get(name)
        result = binding.action_delete({binding.config.id_key: entity_id})
        if binding.client.policy == ResponsePolicy.STRICT:
            click.echo(f"status: {result.status_code}")
        else:
            echo_result(result)

    run(ctx, _run)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
