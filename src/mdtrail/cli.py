#!/usr/bin/env python3
"""
mdtrail: discover markdown documents reachable through links

Usage:
    mdtrail local docs/index.md              # Walk local links (depth 2)
    mdtrail remote https://github.com/o/r    # Walk links from a repo README
    mdtrail fetch https://example.com/a.md   # Print one remote document
"""

from __future__ import annotations

import asyncio
import difflib
import json
import sys
from collections.abc import Sequence
from typing import Any, NoReturn

import click
from click.exceptions import ClickException, UsageError

from . import __version__ as MDTRAIL_VERSION
from .errors import ErrorCode, MdtrailError

# Checked in order; MissingParameter is itself a BadParameter
_USAGE_ERROR_CODES: tuple[tuple[type[UsageError], ErrorCode], ...] = (
    (click.MissingParameter, ErrorCode.MISSING_ARGUMENT),
    (click.BadParameter, ErrorCode.INVALID_ARGUMENT),
    (click.NoSuchOption, ErrorCode.UNKNOWN_OPTION),
)


def usage_error_code(exc: ClickException) -> ErrorCode:
    """Pick the --json-errors code for a command-line parsing failure."""
    for exc_type, code in _USAGE_ERROR_CODES:
        if isinstance(exc, exc_type):
            return code
    return ErrorCode.USAGE_ERROR


def _handle_error(ctx: click.Context, error: MdtrailError) -> NoReturn:
    """Report a discovery or configuration failure on stderr and exit 1."""
    if ctx.obj and ctx.obj.get("json_errors"):
        click.echo(error.to_json(), err=True)
    else:
        click.echo(f"Error: {error.message}", err=True)
    sys.exit(1)


# ─────────────────────────────────────────────────────────────────────────────
# JSON Error Handling
# ─────────────────────────────────────────────────────────────────────────────


class JsonErrorGroup(click.Group):
    """Click group that reports usage errors as JSON under --json-errors.

    Also suggests the closest command name for typos.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except UsageError as e:
            cmd_name = args[0] if args else ""
            if cmd_name and "No such command" in str(e):
                matches = difflib.get_close_matches(
                    cmd_name, self.list_commands(ctx), n=1, cutoff=0.6
                )
                if matches:
                    raise UsageError(f"No such command '{cmd_name}'. Did you mean '{matches[0]}'?")
            raise

    def main(
        self,
        args: Sequence[str] | None = None,
        prog_name: str | None = None,
        complete_var: str | None = None,
        standalone_mode: bool = True,
        **extra: Any,
    ) -> Any:
        """Accept --json-errors anywhere on the command line."""
        argv = list(args) if args is not None else list(sys.argv[1:])
        if "--json-errors" not in argv:
            return super().main(args, prog_name, complete_var, standalone_mode, **extra)

        # Move it in front of the subcommand so the group sees it
        argv = ["--json-errors"] + [a for a in argv if a != "--json-errors"]
        try:
            return super().main(argv, prog_name, complete_var, standalone_mode=False, **extra)
        except ClickException as e:
            error = {"code": usage_error_code(e).value, "message": e.format_message()}
            click.echo(json.dumps({"error": error}), err=True)
            raise SystemExit(1)


# ─────────────────────────────────────────────────────────────────────────────
# Output
# ─────────────────────────────────────────────────────────────────────────────


def _resolve_depth(ctx: click.Context, depth: int | None) -> int:
    from .config import ConfigurationError, get_default_max_depth

    if depth is not None:
        return depth
    try:
        return get_default_max_depth()
    except ConfigurationError as e:
        _handle_error(ctx, e)


def _output_documents(documents: Sequence[Any], location_field: str, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([doc.model_dump() for doc in documents], indent=2))
        return

    if not documents:
        click.echo("No linked documents found.")
        return

    for doc in documents:
        click.echo(f"{doc.title}\t{getattr(doc, location_field)}")


# ─────────────────────────────────────────────────────────────────────────────
# Main CLI Group
# ─────────────────────────────────────────────────────────────────────────────


@click.group(cls=JsonErrorGroup)
@click.version_option(version=MDTRAIL_VERSION, prog_name="mdtrail")
@click.option(
    "--json-errors",
    "json_errors",
    is_flag=True,
    help="Output errors as JSON (for programmatic use)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    envvar="MDTRAIL_QUIET",
    help="Suppress warnings about unreachable documents",
)
@click.pass_context
def cli(ctx: click.Context, json_errors: bool, quiet: bool):
    """mdtrail: discover markdown documents reachable through links.

    \b
    Examples:
      mdtrail local README.md
      mdtrail local docs/index.md --depth 3 --json
      mdtrail remote https://github.com/owner/repo
      mdtrail fetch https://example.com/guide.md

    Set MDTRAIL_MAX_DEPTH to change the default depth and MDTRAIL_LOG_LEVEL
    (DEBUG, INFO, WARNING, ERROR) for diagnostics.
    """
    from ._logging import configure_logging, set_quiet_mode

    ctx.ensure_object(dict)
    ctx.obj["json_errors"] = json_errors
    ctx.obj["quiet"] = quiet

    configure_logging()
    if quiet:
        set_quiet_mode(True)


@cli.command("local")
@click.argument("path", type=click.Path())
@click.option(
    "--depth",
    "-d",
    type=click.IntRange(min=0),
    default=None,
    help="Max link hops from PATH (default 2, or MDTRAIL_MAX_DEPTH)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def local_cmd(ctx: click.Context, path: str, depth: int | None, as_json: bool):
    """List markdown files linked from PATH.

    Follows relative links to .md and .markdown files. External URLs
    are never followed.

    \b
    Examples:
      mdtrail local README.md
      mdtrail local docs/index.md --depth 1 --json
    """
    from .discovery import discover_local

    max_depth = _resolve_depth(ctx, depth)
    try:
        documents = discover_local(path, max_depth)
    except MdtrailError as e:
        _handle_error(ctx, e)

    _output_documents(documents, "path", as_json)


@cli.command("remote")
@click.argument("url")
@click.option(
    "--depth",
    "-d",
    type=click.IntRange(min=0),
    default=None,
    help="Max link hops from URL (default 2, or MDTRAIL_MAX_DEPTH)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def remote_cmd(ctx: click.Context, url: str, depth: int | None, as_json: bool):
    """List markdown documents linked from URL.

    A GitHub repository URL (https://github.com/owner/repo) starts from
    the README on the main branch, falling back to master.

    \b
    Examples:
      mdtrail remote https://github.com/owner/repo
      mdtrail remote https://example.com/docs/index.md --depth 1
    """
    from .discovery import discover_remote_async

    max_depth = _resolve_depth(ctx, depth)
    try:
        documents = asyncio.run(discover_remote_async(url, max_depth))
    except MdtrailError as e:
        _handle_error(ctx, e)

    _output_documents(documents, "url", as_json)


@cli.command("fetch")
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def fetch_cmd(ctx: click.Context, url: str, as_json: bool):
    """Print the markdown document at URL.

    GitHub repository URLs resolve to the repository README.

    \b
    Examples:
      mdtrail fetch https://github.com/owner/repo
      mdtrail fetch https://example.com/guide.md --json
    """
    from .github import fetch_remote_markdown

    try:
        result = fetch_remote_markdown(url)
    except MdtrailError as e:
        _handle_error(ctx, e)

    if as_json:
        click.echo(json.dumps(result.model_dump(), indent=2))
    else:
        click.echo(result.content)


def main():
    """Entry point for the mdtrail CLI."""
    cli()


if __name__ == "__main__":
    main()
