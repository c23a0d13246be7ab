"""Settings commands: show and set shaux configuration."""

from __future__ import annotations

import click
import yaml
from rich.syntax import Syntax

from ..console import console
from ..settings import SettingsManager


@click.group(name="config", invoke_without_command=True)
@click.pass_context
def config_group(ctx: click.Context):
    """Show or change shaux settings."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@config_group.command(name="show")
def config_show():
    """Show merged settings from all scopes."""
    manager = SettingsManager()
    merged = manager.get_merged_settings()
    if not merged:
        console.print("[dim]No settings found.[/dim]")
        for path in (manager.user_settings_file, manager.project_settings_file, manager.local_settings_file):
            console.print(f"[dim]  {path}[/dim]", highlight=False)
        return
    console.print(Syntax(yaml.safe_dump(merged, sort_keys=False), "yaml"))


@config_group.command(name="set")
@click.argument("key")
@click.argument("value")
@click.option("--local", "scope_flag", flag_value="local", help="Set locally (just you)")
@click.option("--project", "scope_flag", flag_value="project", help="Set for project (team)")
@click.option("--global", "scope_flag", flag_value="user", help="Set globally (all projects)")
def config_set(key: str, value: str, scope_flag: str | None):
    """Set KEY (dotted, e.g. file_assert.maxsize) to VALUE.

    VALUE is parsed as YAML, so numbers and lists keep their type.
    """
    scope = scope_flag or "local"
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError:
        parsed = value
    SettingsManager().set_value(key, parsed, scope=scope)
    console.print(f"[green]✓ Set {key} in {scope} settings[/green]", highlight=False)
