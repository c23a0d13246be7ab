"""Check commands: require, file-assert, num-in-range, var-assert, check, preflight.

Each command exits 0 when the check passes and 1 on any failure, with the
diagnostic on stderr.
"""

from __future__ import annotations

import click

from ..app_state import get_state
from ..checks import file_assert
from ..checks import require
from ..checks import var_assert
from ..console import err_console
from ..models import CheckResult
from ..models import ResolutionMode
from ..ranges import num_in_range
from ..ui.display import print_preflight_report
from ..ui.display import report_result
from ..utils.error_format import escape_markup

PASSTHROUGH = {"ignore_unknown_options": True, "allow_interspersed_args": False}


def _echo_resolved(result: CheckResult) -> None:
    for resolved in result.details["paths"].values():
        click.echo(resolved)


@click.command(name="require")
@click.argument("names", nargs=-1)
@click.option("--executable", "-x", "mode", flag_value=ResolutionMode.EXECUTABLE.value, help="Only accept executables on PATH")
@click.option("--sudo", "-s", "mode", flag_value=ResolutionMode.SUDO.value, help="Only accept executables on sudo's PATH")
@click.option("--path", "-p", "print_path", is_flag=True, help="Print what each name resolved to")
@click.pass_context
def require_cmd(ctx: click.Context, names: tuple[str, ...], mode: str | None, print_path: bool):
    """Check that every NAME resolves to an invocable command.

    By default aliases, functions and shell builtins known to shaux count as
    resolved. Stops at the first missing command.
    """
    state = get_state(ctx)
    result = require(*names, mode=mode or ResolutionMode.ANY.value, env=state.env)
    if result.ok and print_path:
        _echo_resolved(result)
    ctx.exit(report_result(result))


@click.command(name="file-assert")
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--minsize", "-s", help="Minimum size in bytes (inclusive)")
@click.option("--maxsize", "-S", help="Maximum size in bytes (inclusive)")
@click.pass_context
def file_assert_cmd(ctx: click.Context, paths: tuple[str, ...], minsize: str | None, maxsize: str | None):
    """Check that every PATH is a regular file within the size bounds."""
    state = get_state(ctx)
    result = file_assert(
        *paths,
        minsize=minsize,
        maxsize=maxsize,
        env=state.env,
        default_maxsize=state.settings.maxsize,
    )
    ctx.exit(report_result(result))


@click.command(name="num-in-range", context_settings=PASSTHROUGH)
@click.argument("value")
@click.argument("spec", metavar="MIN:MAX")
@click.pass_context
def num_in_range_cmd(ctx: click.Context, value: str, spec: str):
    """Check that VALUE lies within the inclusive range MIN:MAX.

    Either bound may be omitted: `5:`, `:10`, `:`.
    """
    ctx.exit(report_result(num_in_range(value, spec)))


@click.command(name="var-assert")
@click.argument("names", nargs=-1)
@click.option("--non-empty", "-n", is_flag=True, help="Also require a non-empty value")
@click.pass_context
def var_assert_cmd(ctx: click.Context, names: tuple[str, ...], non_empty: bool):
    """Check that every environment variable NAME is set."""
    state = get_state(ctx)
    ctx.exit(report_result(var_assert(*names, non_empty=non_empty, env=state.env)))


@click.command(name="check", context_settings=PASSTHROUGH)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def check_cmd(ctx: click.Context, args: tuple[str, ...]):
    """Run one check written shell-style.

    \b
    Examples:
      shaux check require -x git
      shaux check "file_assert --minsize 10 data.bin"
    """
    dispatcher = get_state(ctx).dispatcher()
    if len(args) == 1:
        result = dispatcher.run_line(args[0])
    else:
        result = dispatcher.run_argv(list(args))
    if result.details.get("print_path"):
        _echo_resolved(result)
    ctx.exit(report_result(result))


@click.command(name="preflight")
@click.argument("script", type=click.File("r"))
@click.option("--verbose", "-v", is_flag=True, help="Print a table of every executed check")
@click.pass_context
def preflight_cmd(ctx: click.Context, script, verbose: bool):
    """Run the checks in SCRIPT line by line, stopping at the first failure.

    Each line is a check as accepted by `shaux check`. Blank lines and lines
    starting with # are ignored. Use - to read from stdin.
    """
    report = get_state(ctx).dispatcher().run_script(script)
    for step in report.steps:
        if step.result.details.get("print_path"):
            _echo_resolved(step.result)

    if verbose:
        print_preflight_report(report, script.name)

    failed = report.failed_step
    if failed is None:
        ctx.exit(0)

    err_console.print(f"[dim]Stopped at line {failed.line_no}: {escape_markup(failed.line)}[/dim]", highlight=False)
    ctx.exit(report_result(failed.result))
