"""shaux CLI - precondition checks and helpers for interactive shells."""

import logging
import os

import click

from .app_state import AppState
from .commands.checks import check_cmd
from .commands.checks import file_assert_cmd
from .commands.checks import num_in_range_cmd
from .commands.checks import preflight_cmd
from .commands.checks import require_cmd
from .commands.checks import var_assert_cmd
from .commands.config import config_group
from .commands.helpers import contains_cmd
from .commands.helpers import ff_cmd
from .commands.helpers import file_size_cmd
from .commands.helpers import hex_to_dec_cmd
from .commands.helpers import pid_alive_cmd
from .commands.helpers import random_file_cmd
from .commands.helpers import random_string_cmd
from .commands.helpers import subdirs_cmd
from .commands.helpers import with_pwd_cmd
from .logging_setup import ENV_LOG_LEVEL
from .logging_setup import init_console_logging
from .logging_setup import init_json_logging
from .utils.help_formatter import ShauxGroup

logger = logging.getLogger(__name__)


@click.group(cls=ShauxGroup)
@click.version_option(package_name="shaux")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for stderr and the JSONL log (default from settings or $SHAUX_LOG_LEVEL)",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Append JSONL logs to this file")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, log_file: str | None):
    """shaux - give up early rather than late.

    Precondition checks (commands, variables, files, numeric ranges) and small
    helpers for interactive shells and scripts. Checks exit 0 on success and 1
    on failure, with the reason on stderr.
    """
    state = AppState.load()
    ctx.obj = state

    level = log_level or os.environ.get(ENV_LOG_LEVEL) or state.settings.log_level
    init_console_logging(level)
    init_json_logging(log_file or state.settings.log_path, level)
    logger.debug(f"Loaded settings: maxsize={state.settings.maxsize}, aliases={len(state.settings.aliases)}")


for _cmd in (require_cmd, file_assert_cmd, num_in_range_cmd, var_assert_cmd, check_cmd, preflight_cmd):
    cli.add_command(_cmd, check=True)

for _cmd in (
    file_size_cmd,
    random_string_cmd,
    random_file_cmd,
    hex_to_dec_cmd,
    subdirs_cmd,
    pid_alive_cmd,
    contains_cmd,
    ff_cmd,
    with_pwd_cmd,
    config_group,
):
    cli.add_command(_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
