"""Custom Click help formatter that lists checks before helpers.

ShauxGroup shows validation checks in their own section at the top of the
help output and everything else under "Helpers". It also gives malformed
input to a check command exit status 1, like any other failed check.
"""

import click
from click import Context
from click import HelpFormatter

CHECKS_SECTION_HEADER = "Checks"
HELPERS_SECTION_HEADER = "Helpers"


class ShauxGroup(click.Group):
    """Click group that separates check commands from helper commands in help output.

    Commands registered with `check=True` are listed under "Checks".
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.check_commands: set[str] = set()

    def add_command(self, cmd: click.Command, name: str | None = None, check: bool = False) -> None:
        super().add_command(cmd, name)
        if check:
            self.check_commands.add(name or cmd.name)

    def invoke(self, ctx: Context):
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            if e.ctx is not None and e.ctx.info_name in self.check_commands:
                e.exit_code = 1
            raise

    def format_commands(self, ctx: Context, formatter: HelpFormatter) -> None:
        """Write check commands and helper commands as two sections."""
        checks = []
        helpers = []

        for subcommand in self.list_commands(ctx):
            cmd = self.get_command(ctx, subcommand)
            if cmd is None or cmd.hidden:
                continue
            if subcommand in self.check_commands:
                checks.append((subcommand, cmd))
            else:
                helpers.append((subcommand, cmd))

        for header, commands in ((CHECKS_SECTION_HEADER, checks), (HELPERS_SECTION_HEADER, helpers)):
            if not commands:
                continue
            limit = formatter.width - 6 - max(len(cmd[0]) for cmd in commands)
            rows = [(subcommand, cmd.get_short_help_str(limit=limit)) for subcommand, cmd in commands]
            with formatter.section(header):
                formatter.write_dl(rows)
