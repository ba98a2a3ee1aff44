"""Rich-click command line for dumping pool files and formatting values.

Purpose
-------
Give operators a quick way to render pool regions and raw values with the
same formatting the inspection tool uses, and give packaging smoke tests a
stable entry point.

Contents
--------
* :func:`cli` - root group holding global verbosity/prefix/traceback options.
* ``info``, ``hexdump``, ``checksum``, ``size``, ``percent``, ``btt-map``,
  ``pool-type``, ``time``, ``uuid`` sub-commands.
* :func:`main` - runs the group through ``lib_cli_exit_tools``.

System Role
-----------
Presentation layer. Every command writes through the process-wide runtime so
``--prefix`` and ``-v`` behave exactly like they do for library callers.
"""

from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import Any, Sequence

import click
import lib_cli_exit_tools
import rich_click
from click.core import ParameterSource

from . import __init__conf__
from . import config as config_module
from . import runtime
from .domain.formats import SizeMode
from .domain.formatters import (
    format_btt_map,
    format_checksum,
    format_percent,
    format_pool_type,
    format_size,
    format_time,
    format_uuid,
)

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
VALUE_LEVEL = 1
DETAIL_LEVEL = 2


class AutoIntParamType(click.ParamType):
    """Integer accepting ``0x``/``0o``/``0b`` prefixes."""

    name = "integer"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> int:
        if isinstance(value, int):
            return value
        try:
            return int(str(value), 0)
        except ValueError:
            self.fail(f"{value!r} is not a valid integer", param, ctx)


AUTO_INT = AutoIntParamType()


def _non_negative(ctx: click.Context, param: click.Parameter, value: int | None) -> int | None:
    if value is not None and value < 0:
        raise click.BadParameter("must be non-negative", ctx=ctx, param=param)
    return value


def _read_region(path: Path, offset: int, length: int | None) -> bytes:
    with path.open("rb") as handle:
        handle.seek(offset)
        return handle.read(-1 if length is None else length)


@click.group(
    cls=rich_click.RichGroup,
    invoke_without_command=True,
    context_settings=CLICK_CONTEXT_SETTINGS,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load environment variables from a nearby .env (also via {config_module.DOTENV_ENV_VAR}).",
)
@click.option("-v", "--verbose", "verbose", count=True, help="Raise verbosity; repeat for more detail.")
@click.option("-q", "--quiet", is_flag=True, default=False, help="Suppress gated output.")
@click.option("--prefix", default=None, help="Prefix every gated line with '<PREFIX>: '.")
@click.option(
    "--column-width",
    type=int,
    default=None,
    callback=_non_negative,
    help="Label width for field output.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    traceback: bool,
    use_dotenv: bool,
    verbose: int,
    quiet: bool,
    prefix: str | None,
    column_width: int | None,
) -> None:
    """Render pool diagnostics the way the inspection tool prints them."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not ParameterSource.DEFAULT:
        explicit = use_dotenv
    if config_module.should_use_dotenv(explicit=explicit, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    settings: dict[str, Any] = {"verbosity": 0 if quiet else VALUE_LEVEL + verbose, "prefix": prefix}
    if column_width is not None:
        settings["column_width"] = column_width
    runtime.init(runtime.RuntimeConfig(**settings))
    ctx.call_on_close(runtime.shutdown)

    if ctx.invoked_subcommand is None:
        ctx.invoke(info)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def info() -> None:
    """Print package metadata."""

    __init__conf__.print_info(writer=lambda text: click.echo(text, nl=False))


@cli.command("hexdump", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--offset", type=AUTO_INT, default=0, callback=_non_negative, show_default=True, help="First byte to dump.")
@click.option("--length", type=AUTO_INT, default=None, callback=_non_negative, help="Number of bytes (default: to end of file).")
@click.option("--sep/--no-sep", default=False, help="Finish with a dashed separator line.")
@click.pass_context
def hexdump_command(ctx: click.Context, path: Path, offset: int, length: int | None, sep: bool) -> None:
    """Dump a file region in canonical hex+ASCII form."""

    data = _read_region(path, offset, length)
    if not data:
        runtime.print_error("nothing to dump at offset 0x%x of %s\n", offset, path)
        ctx.exit(1)
    runtime.print_field(DETAIL_LEVEL, "File", "%s", path)
    runtime.print_field(DETAIL_LEVEL, "Offset", "0x%08x", offset)
    runtime.print_field(DETAIL_LEVEL, "Length", "%s", format_size(len(data), SizeMode.BOTH))
    runtime.hexdump(VALUE_LEVEL, data, offset=offset, sep=sep)


@cli.command("checksum", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--csum-offset", type=AUTO_INT, required=True, help="Offset of the checksum field inside the region.")
@click.option("--offset", type=AUTO_INT, default=0, callback=_non_negative, show_default=True, help="Start of the region.")
@click.option("--length", type=AUTO_INT, default=None, callback=_non_negative, help="Region length (default: to end of file).")
@click.pass_context
def checksum_command(ctx: click.Context, path: Path, csum_offset: int, offset: int, length: int | None) -> None:
    """Validate the Fletcher64 checksum of a file region."""

    region = bytearray(_read_region(path, offset, length))
    try:
        verdict = format_checksum(region, csum_offset)
    except ValueError as exc:
        runtime.print_error("%s\n", exc)
        ctx.exit(1)
    runtime.print_field(VALUE_LEVEL, "Checksum", "%s", verdict)


@cli.command("size", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("value", type=AUTO_INT)
@click.option(
    "--mode",
    type=click.Choice([mode.value for mode in SizeMode], case_sensitive=False),
    default=SizeMode.HUMAN.value,
    show_default=True,
)
def size_command(value: int, mode: str) -> None:
    """Format a byte count."""

    try:
        text = format_size(value, SizeMode.from_name(mode))
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="VALUE") from exc
    runtime.print_at(VALUE_LEVEL, "%s\n", text)


@cli.command("percent", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("value", type=float)
def percent_command(value: float) -> None:
    """Format a percentage."""

    runtime.print_at(VALUE_LEVEL, "%s\n", format_percent(value))


@cli.command("btt-map", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("entry", type=AUTO_INT)
def btt_map_command(entry: int) -> None:
    """Decode a BTT map entry into its LBA and state."""

    runtime.print_at(VALUE_LEVEL, "%s\n", format_btt_map(entry))


@cli.command("pool-type", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("tag", type=AUTO_INT)
def pool_type_command(tag: int) -> None:
    """Name a pool type tag."""

    runtime.print_at(VALUE_LEVEL, "%s\n", format_pool_type(tag))


@cli.command("time", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("epoch", type=float)
def time_command(epoch: float) -> None:
    """Render seconds since the epoch in local time."""

    runtime.print_at(VALUE_LEVEL, "%s\n", format_time(epoch))


@cli.command("uuid", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("value")
def uuid_command(value: str) -> None:
    """Normalise a UUID given as 32 hex digits or canonical text."""

    try:
        parsed = uuid.UUID(value)
    except ValueError as exc:
        raise click.BadParameter(f"{value!r} is not a UUID", param_hint="VALUE") from exc
    runtime.print_at(VALUE_LEVEL, "%s\n", format_uuid(parsed.bytes))


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI and return its exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    so embedding hosts keep their own settings.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
