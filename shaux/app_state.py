"""Per-invocation state shared by CLI commands."""

from __future__ import annotations

from dataclasses import dataclass

import click

from .dispatch import CheckDispatcher
from .environment import Environment
from .settings import SettingsManager
from .settings import ToolkitSettings


@dataclass
class AppState:
    settings: ToolkitSettings
    env: Environment

    @classmethod
    def load(cls, manager: SettingsManager | None = None) -> AppState:
        settings = (manager or SettingsManager()).load()
        return cls(settings=settings, env=Environment.from_settings(settings))

    def dispatcher(self) -> CheckDispatcher:
        return CheckDispatcher(self.env, default_maxsize=self.settings.maxsize)


def get_state(ctx: click.Context) -> AppState:
    """Return the AppState attached by the root group, loading one if absent."""
    state = ctx.find_object(AppState)
    if state is None:
        state = AppState.load()
        ctx.obj = state
    return state
