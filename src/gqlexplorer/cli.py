import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import rich_click as click
from rich.traceback import install

from gqlexplorer import __version__, log
from gqlexplorer.errors import EndpointNotFoundError, ExplorerError
from gqlexplorer.introspection import IntrospectionClient
from gqlexplorer.pages.models import FieldTarget, Page, TypeTarget
from gqlexplorer.registry import DEFAULT_ENDPOINTS_FILE, Endpoint, EndpointRegistry, load_registry, save_registry
from gqlexplorer.renderer import ConsoleRenderer, Renderer
from gqlexplorer.schema.graph import TypeGraph
from gqlexplorer.schema.type_ref import is_builtin_scalar_type
from gqlexplorer.session import ExplorerSession

PROMPT = "Row number, [t]ype NAME, [b]ack or [q]uit"


def parse_headers(values: tuple[str, ...]) -> dict[str, str]:
    """Parse ``Key: Value`` header options into a dict."""
    headers: dict[str, str] = {}
    for value in values:
        key, sep, header_value = value.partition(":")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected 'Key: Value', got '{value}'", param_hint="--header")
        headers[key.strip()] = header_value.strip()
    return headers


def parse_body_fields(values: tuple[str, ...]) -> dict[str, Any]:
    """Parse ``key=value`` body options; values are decoded as JSON when possible."""
    fields: dict[str, Any] = {}
    for value in values:
        key, sep, raw = value.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected 'key=value', got '{value}'", param_hint="--body")
        try:
            fields[key.strip()] = json.loads(raw)
        except json.JSONDecodeError:
            fields[key.strip()] = raw
    return fields


name_option = click.option(
    "--name",
    "-n",
    type=str,
    help="Name of a registered endpoint",
)

url_option = click.option(
    "--url",
    "-u",
    type=str,
    help="GraphQL endpoint URL",
)

file_option = click.option(
    "--file",
    "-f",
    "introspection_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Saved introspection result (JSON)",
)

header_option = click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="HTTP header 'Key: Value' sent with --url. Can be specified multiple times.",
)

body_option = click.option(
    "--body",
    "-b",
    "body_fields",
    multiple=True,
    help="Extra JSON body field 'key=value' sent with --url. Can be specified multiple times.",
)


def fail(message: str) -> NoReturn:
    log.error(message)
    sys.exit(1)


def read_registry(ctx: click.Context) -> EndpointRegistry:
    """Load the endpoints file, exiting with an error if it cannot be read."""
    endpoints_file: Path = ctx.obj["endpoints_file"]
    try:
        return load_registry(endpoints_file)
    except (OSError, ValueError) as e:
        fail(f"Could not read endpoints file: {e}")


def build_session(ctx: click.Context, name: str | None) -> ExplorerSession:
    """Create a session; the endpoints file is only read when opening by name."""
    registry = read_registry(ctx) if name else EndpointRegistry()
    return ExplorerSession(client=IntrospectionClient(), registry=registry)


def open_source(
    session: ExplorerSession,
    name: str | None,
    url: str | None,
    introspection_file: Path | None,
    headers: tuple[str, ...],
    body_fields: tuple[str, ...],
) -> Page:
    """Open exactly one of a registered endpoint, a URL or a saved introspection file."""
    if len([source for source in (name, url, introspection_file) if source]) > 1:
        raise click.UsageError("Specify exactly one of --name, --url or --file")

    if name:
        return session.open_registered(name)
    if url:
        return session.open_url(url, parse_body_fields(body_fields), parse_headers(headers))
    if introspection_file is not None:
        return session.open_file(introspection_file)
    raise click.UsageError("Specify exactly one of --name, --url or --file")


@click.group(context_settings={"auto_envvar_prefix": "GQLEXPLORER"})
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.option(
    "--endpoints-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_ENDPOINTS_FILE,
    help="YAML file with registered endpoints",
    show_default=True,
)
@click.version_option(__version__)
@click.pass_context
def cli(ctx: click.Context, log_level: str, log_file: Path | None, endpoints_file: Path) -> None:
    """Explore GraphQL schemas through introspection."""
    ctx.ensure_object(dict)
    ctx.obj["endpoints_file"] = endpoints_file

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
        log.addHandler(file_handler)

    log.setLevel(log_level.upper())
    if log_level.upper() == "DEBUG":
        _ = install(show_locals=True)


# Endpoints
# ----------
@click.group()
def endpoints() -> None:
    """Manage registered GraphQL endpoints."""
    pass


@endpoints.command(name="list")
@click.pass_context
def endpoints_list(ctx: click.Context) -> None:
    """List registered endpoints."""
    registry = read_registry(ctx)
    if not len(registry):
        log.hint("No endpoints registered. Use 'gqlexplorer endpoints add NAME URL'.")
        return
    for name, endpoint in registry.items():
        log.key_value(name, endpoint.url, key_style="bold cyan")


@endpoints.command(name="add")
@click.argument("name")
@click.argument("url")
@header_option
@body_option
@click.pass_context
def endpoints_add(
    ctx: click.Context,
    name: str,
    url: str,
    headers: tuple[str, ...],
    body_fields: tuple[str, ...],
) -> None:
    """Register an endpoint under NAME."""
    endpoints_file: Path = ctx.obj["endpoints_file"]
    try:
        registry = load_registry(endpoints_file)
        registry.register(
            name,
            Endpoint(url=url, headers=parse_headers(headers), extra_body_fields=parse_body_fields(body_fields)),
        )
        save_registry(registry, endpoints_file)
    except (OSError, ValueError) as e:
        fail(f"Could not update {endpoints_file}: {e}")
    log.success(f"Registered endpoint '{name}' in {endpoints_file}")


@endpoints.command(name="remove")
@click.argument("name")
@click.pass_context
def endpoints_remove(ctx: click.Context, name: str) -> None:
    """Remove the endpoint registered under NAME."""
    endpoints_file: Path = ctx.obj["endpoints_file"]
    registry = read_registry(ctx)
    if not registry.remove(name):
        fail(str(EndpointNotFoundError(name)))
    try:
        save_registry(registry, endpoints_file)
    except OSError as e:
        fail(f"Could not update {endpoints_file}: {e}")
    log.success(f"Removed endpoint '{name}'")


# Browsing
# ----------
def run_interactive(session: ExplorerSession, renderer: Renderer, root: Page) -> None:
    renderer.render(root, session.cursor)
    while True:
        try:
            choice = click.prompt(PROMPT, default="q", show_default=False).strip()
        except click.Abort:
            break

        command, _, argument = choice.partition(" ")
        command = command.lower()
        page: Page | None
        if command in ("q", "quit"):
            break
        if command in ("b", "back"):
            page = session.back()
            if page is None:
                log.hint("Already at the root page")
                continue
        elif command in ("t", "type") and argument:
            type_name = argument.strip()
            if session.require_graph().resolve(type_name) is None:
                log.warning(f"Unknown type '{type_name}'")
                continue
            page = session.open_target(TypeTarget(type_name), cursor=session.cursor)
        elif command.isdigit():
            page = session.select(int(command))
            if page is None:
                continue
        else:
            log.warning(f"Unknown command '{choice}'")
            continue

        renderer.render(page, session.cursor)


@click.command()
@name_option
@url_option
@file_option
@header_option
@body_option
@click.pass_context
def browse(
    ctx: click.Context,
    name: str | None,
    url: str | None,
    introspection_file: Path | None,
    headers: tuple[str, ...],
    body_fields: tuple[str, ...],
) -> None:
    """Browse a schema interactively."""
    session = build_session(ctx, name)
    try:
        root = open_source(session, name, url, introspection_file, headers, body_fields)
        run_interactive(session, ConsoleRenderer(console=log.console), root)
    except ExplorerError as e:
        fail(str(e))
    except (OSError, ValueError) as e:
        fail(f"Could not load introspection file: {e}")
    finally:
        session.close()


@click.command()
@click.argument("type_name")
@click.argument("field_name", required=False)
@name_option
@url_option
@file_option
@header_option
@body_option
@click.pass_context
def show(
    ctx: click.Context,
    type_name: str,
    field_name: str | None,
    name: str | None,
    url: str | None,
    introspection_file: Path | None,
    headers: tuple[str, ...],
    body_fields: tuple[str, ...],
) -> None:
    """Print the page of TYPE_NAME, or of its FIELD_NAME field."""
    session = build_session(ctx, name)
    try:
        open_source(session, name, url, introspection_file, headers, body_fields)
        type_def = session.require_graph().resolve(type_name)
        if type_def is None:
            fail(f"Type '{type_name}' is not defined in the schema")
        if field_name and type_def.get_field(field_name) is None:
            fail(f"Type '{type_name}' has no field '{field_name}'")
        target = FieldTarget(type_name, field_name) if field_name else TypeTarget(type_name)
        page = session.open_target(target)
        ConsoleRenderer(console=log.console).render(page)
    except ExplorerError as e:
        fail(str(e))
    except (OSError, ValueError) as e:
        fail(f"Could not load introspection file: {e}")


@click.command()
@click.option("--kind", "-k", "kinds", multiple=True, help="Only list types of this kind (e.g. OBJECT, ENUM)")
@click.option("--all", "include_introspection", is_flag=True, help="Include introspection types (__*) and built-in scalars")
@name_option
@url_option
@file_option
@header_option
@body_option
@click.pass_context
def types(
    ctx: click.Context,
    kinds: tuple[str, ...],
    include_introspection: bool,
    name: str | None,
    url: str | None,
    introspection_file: Path | None,
    headers: tuple[str, ...],
    body_fields: tuple[str, ...],
) -> None:
    """List the named types of a schema."""
    session = build_session(ctx, name)
    try:
        open_source(session, name, url, introspection_file, headers, body_fields)
        graph = session.require_graph()
    except ExplorerError as e:
        fail(str(e))
    except (OSError, ValueError) as e:
        fail(f"Could not load introspection file: {e}")

    wanted = {kind.upper() for kind in kinds}
    for type_def in graph.named_types(include_introspection=include_introspection):
        if wanted and type_def.kind.value not in wanted:
            continue
        if not include_introspection and is_builtin_scalar_type(str(type_def.name)):
            continue
        log.key_value(type_def.kind.value, type_def.name)


@click.command()
@click.argument("term")
@click.option("--exact", is_flag=True, default=False, help="Match whole names only")
@click.option("--case-sensitive", is_flag=True, default=False, help="Compare names case-sensitively")
@name_option
@url_option
@file_option
@header_option
@body_option
@click.pass_context
def search(
    ctx: click.Context,
    term: str,
    exact: bool,
    case_sensitive: bool,
    name: str | None,
    url: str | None,
    introspection_file: Path | None,
    headers: tuple[str, ...],
    body_fields: tuple[str, ...],
) -> None:
    """Search type and field names for TERM."""
    session = build_session(ctx, name)
    try:
        open_source(session, name, url, introspection_file, headers, body_fields)
        graph = session.require_graph()
    except ExplorerError as e:
        fail(str(e))
    except (OSError, ValueError) as e:
        fail(f"Could not load introspection file: {e}")

    results = graph.search(term, partial=not exact, case_insensitive=not case_sensitive)
    if not results:
        log.warning(f"No types or fields match '{term}'")
        return
    log.rule(f"Matches for '{term}'")
    for type_name, field_names in results.items():
        log.print(f"[bold cyan]{type_name}[/bold cyan]")
        for field_name in field_names:
            log.print(f"  - {field_name}")


@click.command()
@name_option
@url_option
@header_option
@body_option
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    required=True,
    help="Output file",
)
@click.pass_context
def introspect(
    ctx: click.Context,
    name: str | None,
    url: str | None,
    headers: tuple[str, ...],
    body_fields: tuple[str, ...],
    output: Path,
) -> None:
    """Fetch an introspection result and save it as JSON."""
    if bool(name) == bool(url):
        raise click.UsageError("Specify exactly one of --name or --url")

    client = IntrospectionClient()
    try:
        if url:
            raw = client.fetch(url, parse_body_fields(body_fields), parse_headers(headers))
        else:
            endpoint = read_registry(ctx).lookup(name or "")
            if endpoint is None:
                raise EndpointNotFoundError(name or "")
            raw = client.fetch(endpoint.url, endpoint.extra_body_fields, endpoint.headers)
        graph = TypeGraph.parse(raw)
    except ExplorerError as e:
        fail(str(e))

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(raw, indent=2))
    except OSError as e:
        fail(f"Could not write {output}: {e}")
    log.success(f"Saved introspection result with {len(graph.types)} types to {output}")


cli.add_command(endpoints)
cli.add_command(browse)
cli.add_command(show)
cli.add_command(types)
cli.add_command(search)
cli.add_command(introspect)

if __name__ == "__main__":
    cli()
