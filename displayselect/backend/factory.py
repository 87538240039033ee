"""Backend factory functions."""

from __future__ import annotations

from displayselect.common.config import Config
from displayselect.common.runtime_models import Components
from displayselect.desktop.hooks import hooksFromConfig_create
from displayselect.desktop.notifier import CommandManualArranger, CommandNotifier, LogNotifier
from displayselect.desktop.picker import DmenuPicker
from displayselect.xrandr.applier import DryRunApplier, XrandrApplier
from displayselect.xrandr.prober import XrandrProber


def components_create(config: Config, dry_run: bool = False, session_check: bool = True) -> Components:
    """
    Create command-backed collaborators from configuration.

    Args:
        config: Loaded configuration
        dry_run: Print the applier command instead of running it
        session_check: Verify the X display via Xlib before probing

    Returns:
        Components for the pipeline
    """
    display_name = config.display.name
    commands = config.commands

    applier_class = DryRunApplier if dry_run else XrandrApplier
    applier = applier_class(
        command=commands.applier, dpi=config.display.dpi, display_name=display_name
    )

    session = None
    if session_check:
        from displayselect.x11.session import DisplaySession

        session = DisplaySession(display_name=display_name)

    return Components(
        prober=XrandrProber(
            command=commands.prober,
            internal_output=config.display.internal_output,
            display_name=display_name,
        ),
        picker=DmenuPicker(
            command=commands.picker,
            prompt_flag=commands.prompt_flag,
            display_name=display_name,
        ),
        applier=applier,
        manual=CommandManualArranger(command=commands.manual, display_name=display_name),
        notifier=(
            LogNotifier()
            if dry_run
            else CommandNotifier(command=commands.notifier, display_name=display_name)
        ),
        hooks=[] if dry_run else hooksFromConfig_create(config.hooks, display_name),
        session=session,
    )
