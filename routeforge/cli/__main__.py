"""RouteForge CLI - Main Entry Point.

The `routeforge` command works against route tables loaded from YAML
or JSON files.

Commands:
    routes   - List registered routes
    match    - Find the route matching a method and path
    build    - Build a path for a named route
    bundle   - Dump route descriptors as JSON
    inspect  - Show how a single pattern compiles
"""

import json
import logging
import sys
from typing import Dict, Optional, Tuple

import click

from . import __version__, __cli_name__
from ..config import ConfigLoader
from ..faults import Fault
from ..patterns.cache import compile_pattern
from ..patterns.diagnostics.errors import PatternSemanticError, PatternSyntaxError
from ..routing.router import Router
from .utils.colors import error, warning, section, kv, table, _CROSS


def _parse_pairs(values: Tuple[str, ...], option: str) -> Dict[str, str]:
    """Turn ``("a=1", "b=2")`` into ``{"a": "1", "b": "2"}``."""
    pairs = {}
    for item in values:
        if "=" not in item:
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint=option)
        key, value = item.split("=", 1)
        pairs[key] = value
    return pairs


def _load_router(ctx: click.Context) -> Router:
    """Load configuration and build the router, once per invocation."""
    if ctx.obj.get("router") is not None:
        return ctx.obj["router"]

    try:
        loader = ConfigLoader.load(
            paths=list(ctx.obj["config_paths"]),
            env_file=ctx.obj["env_file"],
        )
        config = loader.to_router_config()

        if not ctx.obj["verbose"]:
            logging.getLogger("routeforge").setLevel(config.log_level.upper())

        router = Router.from_config(config)
    except Fault as fault:
        error(f"{_CROSS} {fault}")
        ctx.exit(1)

    ctx.obj["router"] = router
    return router


@click.group()
@click.version_option(version=__version__, prog_name=__cli_name__)
@click.option("--config", "-c", "config_paths", multiple=True, type=click.Path(),
              help="Route file (YAML or JSON), may be repeated")
@click.option("--env-file", type=click.Path(), default=None, help="Load ROUTEFORGE_* settings from a .env file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output")
@click.pass_context
def cli(ctx, config_paths: Tuple[str, ...], env_file: Optional[str], verbose: bool, quiet: bool):
    """Compile, match and build route patterns.

    \b
    Quick start:
      routeforge -c routes.yaml routes
      routeforge -c routes.yaml match GET /users/42
      routeforge -c routes.yaml build user -p id=42
      routeforge inspect "/articles(/<year>(/<month>))"
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_paths"] = config_paths
    ctx.obj["env_file"] = env_file
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


@cli.command("routes")
@click.pass_context
def list_routes(ctx):
    """List registered routes in lookup order."""
    router = _load_router(ctx)

    if not len(router):
        warning("No routes configured")
        return

    if not ctx.obj["quiet"]:
        section(f"Routes ({len(router)})")
    table(
        ["Name", "Method", "Pattern"],
        [(route.name, route.method, route.pattern) for route in router],
    )


@cli.command("match")
@click.argument("method")
@click.argument("path")
@click.option("--json-output", is_flag=True, help="Print the match as JSON")
@click.pass_context
def match(ctx, method: str, path: str, json_output: bool):
    """
    Find the first route matching METHOD and PATH.

    Examples:
      routeforge -c routes.yaml match GET /users/42
      routeforge -c routes.yaml match GET "/search?q=books"
    """
    router = _load_router(ctx)
    found = router.find(path, method)

    if found is None:
        error(f"{_CROSS} No route matches {method.upper()} {path}")
        ctx.exit(1)

    route, params = found
    if json_output:
        click.echo(json.dumps({"route": route.name, "params": params}, indent=2))
        return

    kv("Route", route.name)
    kv("Method", route.method)
    kv("Pattern", route.pattern)
    for key, value in params.items():
        kv(f"  {key}", value)


@cli.command("build")
@click.argument("name")
@click.option("--param", "-p", "params", multiple=True, help="Parameter as key=value, may be repeated")
@click.pass_context
def build(ctx, name: str, params: Tuple[str, ...]):
    """
    Build a path for the route registered as NAME.

    Parameters the pattern does not declare go into the query string.
    """
    router = _load_router(ctx)

    try:
        path = router.build(name, _parse_pairs(params, "--param"))
    except Fault as fault:
        error(f"{_CROSS} {fault}")
        ctx.exit(1)

    click.echo(path)


@cli.command("bundle")
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indentation")
@click.pass_context
def bundle(ctx, indent: int):
    """Dump route descriptors as JSON for another runtime."""
    router = _load_router(ctx)
    click.echo(json.dumps(router.bundle(), indent=indent or None, default=str))


@cli.command("inspect")
@click.argument("pattern")
@click.option("--condition", "-C", "conditions", multiple=True, help="Condition as name=regex")
@click.option("--default", "-d", "defaults", multiple=True, help="Default as name=value")
def inspect(pattern: str, conditions: Tuple[str, ...], defaults: Tuple[str, ...]):
    """
    Show the tree, regex and capture order PATTERN compiles to.

    The implicit query-string suffix routes get is not added here.
    """
    try:
        compiled = compile_pattern(
            pattern,
            _parse_pairs(conditions, "--condition"),
            _parse_pairs(defaults, "--default"),
            use_cache=False,
        )
    except (PatternSyntaxError, PatternSemanticError) as exc:
        error(exc.format())
        sys.exit(1)

    click.echo(compiled.to_json())


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
