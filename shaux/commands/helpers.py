"""Helper commands for interactive sessions."""

from __future__ import annotations

import click

from .. import helpers
from ..console import err_console
from ..errors import CheckFailed
from ..errors import UsageError
from ..ui.display import report_result
from ..utils.error_format import escape_markup
from ..utils.error_format import format_error_message
from .checks import PASSTHROUGH


def _abort(ctx: click.Context, error: Exception) -> None:
    err_console.print(f"[red]{escape_markup(format_error_message(error))}[/red]", highlight=False)
    ctx.exit(1)


@click.command(name="file-size")
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.pass_context
def file_size_cmd(ctx: click.Context, paths: tuple[str, ...]):
    """Print the size in bytes of each PATH."""
    for path in paths:
        try:
            size = helpers.file_size(path)
        except CheckFailed as e:
            _abort(ctx, e)
        if len(paths) == 1:
            click.echo(size)
        else:
            click.echo(f"{size}\t{path}")


@click.command(name="random-string")
@click.argument("length", type=int)
@click.pass_context
def random_string_cmd(ctx: click.Context, length: int):
    """Print a random alphanumeric string of LENGTH characters."""
    try:
        click.echo(helpers.random_string(length))
    except UsageError as e:
        _abort(ctx, e)


@click.command(name="random-file")
@click.argument("path", type=click.Path(dir_okay=False))
@click.argument("size", type=int)
@click.pass_context
def random_file_cmd(ctx: click.Context, path: str, size: int):
    """Write SIZE random bytes to PATH."""
    try:
        helpers.random_file(path, size)
    except (UsageError, OSError) as e:
        _abort(ctx, e)


@click.command(name="hex-to-dec")
@click.argument("value")
@click.pass_context
def hex_to_dec_cmd(ctx: click.Context, value: str):
    """Convert a hexadecimal VALUE ([0x]DEADBEEF) to decimal."""
    try:
        click.echo(helpers.hex_to_dec(value))
    except UsageError as e:
        _abort(ctx, e)


@click.command(name="subdirs")
@click.argument("path", default=".", type=click.Path())
@click.pass_context
def subdirs_cmd(ctx: click.Context, path: str):
    """List only the subdirectories of PATH."""
    try:
        names = helpers.subdirs(path)
    except UsageError as e:
        _abort(ctx, e)
    for name in names:
        click.echo(f"{name}/")


@click.command(name="pid-alive")
@click.argument("pids", nargs=-1)
@click.pass_context
def pid_alive_cmd(ctx: click.Context, pids: tuple[str, ...]):
    """Check that every PID can be signalled."""
    ctx.exit(report_result(helpers.pid_alive(*pids)))


@click.command(name="contains")
@click.argument("pattern")
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--ignore-case", "-i", is_flag=True, help="Case-insensitive match")
@click.pass_context
def contains_cmd(ctx: click.Context, pattern: str, paths: tuple[str, ...], ignore_case: bool):
    """List files under PATHS whose contents match the regex PATTERN."""
    try:
        matches = helpers.contains(pattern, *paths, ignore_case=ignore_case)
    except UsageError as e:
        _abort(ctx, e)
    for match in matches:
        click.echo(str(match))
    ctx.exit(0 if matches else 1)


@click.command(name="ff")
@click.argument("pattern")
@click.option("--root", "-r", default=".", type=click.Path(file_okay=False), help="Directory to search")
@click.option("--ignore-case", "-i", is_flag=True, help="Case-insensitive match")
@click.pass_context
def ff_cmd(ctx: click.Context, pattern: str, root: str, ignore_case: bool):
    """Find files whose path matches the regex PATTERN."""
    try:
        matches = helpers.find_files(pattern, root, ignore_case=ignore_case)
    except UsageError as e:
        _abort(ctx, e)
    for match in matches:
        click.echo(str(match))
    ctx.exit(0 if matches else 1)


@click.command(name="with-pwd", context_settings=PASSTHROUGH)
@click.argument("directory", type=click.Path())
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
def with_pwd_cmd(ctx: click.Context, directory: str, command: tuple[str, ...]):
    """Run COMMAND with DIRECTORY as working directory.

    \b
    Example:
      shaux with-pwd /tmp -- ls -al
    """
    argv = list(command)
    if argv and argv[0] == "--":
        argv = argv[1:]
    try:
        code = helpers.run_in_dir(directory, argv)
    except (UsageError, OSError) as e:
        _abort(ctx, e)
    ctx.exit(code)
