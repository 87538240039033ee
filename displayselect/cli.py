"""displayselect command-line interface"""

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from displayselect import __version__
from displayselect.common.config import Config, ConfigLoader
from displayselect.common.errors import DisplaySelectError, SelectionCancelledError

logger = logging.getLogger(__name__)

CONSOLE_LOG_FORMAT = "displayselect: %(levelname)s: %(message)s"


def arguments_parse(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments

    Args:
        argv: Argument list, None for sys.argv

    Returns:
        Parsed CLI arguments.
    """
    parser = argparse.ArgumentParser(
        prog="displayselect",
        description="Select and apply a monitor arrangement (single, mirrored, extended)",
    )

    parser.add_argument("--version", action="version", version=f"displayselect {__version__}")

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config file (default: search standard locations)",
    )

    parser.add_argument(
        "--display", type=str, default=None, help="X11 display name (overrides config)"
    )

    parser.add_argument(
        "--internal-output",
        type=str,
        default=None,
        dest="internal_output",
        help="Name of the built-in panel output, e.g. eDP-1 (overrides config)",
    )

    parser.add_argument(
        "--dpi", type=int, default=None, help="DPI passed to xrandr (overrides config)"
    )

    parser.add_argument(
        "--picker",
        type=str,
        default=None,
        help="Picker command line, e.g. 'rofi -dmenu -i' (overrides config)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="Print the xrandr command instead of running it; skip post-apply hooks",
    )

    parser.add_argument(
        "--no-session-check",
        action="store_true",
        dest="no_session_check",
        help="Skip the X11 display/RandR check before probing",
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging (overrides config)"
    )

    parser.add_argument(
        "--info", action="store_true", help="Enable info logging (overrides config)"
    )

    parser.add_argument(
        "--warning", action="store_true", help="Enable warning logging (overrides config)"
    )

    parser.add_argument(
        "--error", action="store_true", help="Enable error logging (overrides config)"
    )

    parser.add_argument(
        "--critical", action="store_true", help="Enable critical logging (overrides config)"
    )

    return parser.parse_args(argv)


def logLevelOverride_get(args: argparse.Namespace) -> str | None:
    """
    Resolve explicit log level override flags.

    Args:
        args: Parsed CLI args.

    Returns:
        Selected log level or None.
    """
    if args.critical:
        return "CRITICAL"
    if args.error:
        return "ERROR"
    if args.warning:
        return "WARNING"
    if args.info:
        return "INFO"
    if args.debug:
        return "DEBUG"
    return None


def logging_setup(level: str, log_format: str, log_file: str | None) -> list[logging.Handler]:
    """
    Attach stderr and optional file handlers to the root logger.

    Stderr lines stay short; the file log uses the configured format with
    the package version after the timestamp.

    Args:
        level: Effective log level token (for example `INFO` or `DEBUG`).
        log_format: Formatter string for the file log.
        log_file: Optional log file path.

    Returns:
        Handlers that were attached.
    """
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
    handlers: list[logging.Handler] = [console]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(log_format.replace("%(asctime)s", f"%(asctime)s [v{__version__}]"))
        )
        handlers.append(file_handler)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root.addHandler(handler)
    return handlers


def configWithOverrides_load(args: argparse.Namespace) -> Config:
    """
    Load configuration and apply CLI overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Loaded config.
    """
    config_path: Path | None = Path(args.config) if args.config else None
    return ConfigLoader.configWithOverrides_load(
        file_path=config_path,
        display=args.display,
        internal_output=args.internal_output,
        dpi=args.dpi,
        picker=args.picker,
    )


def selection_run(args: argparse.Namespace, config: Config) -> int:
    """
    Run one selection and map the outcome to an exit code.

    Args:
        args: Parsed CLI args.
        config: Loaded config.

    Returns:
        Process exit code.
    """
    from displayselect.backend.factory import components_create
    from displayselect.runtime import displaySelect_run

    components = components_create(
        config, dry_run=args.dry_run, session_check=not args.no_session_check
    )
    try:
        displaySelect_run(components, config.display)
    except SelectionCancelledError as e:
        logger.info(str(e))
        return e.exit_code
    except DisplaySelectError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return e.exit_code
    return 0


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main entry point for the displayselect command

    Args:
        argv: Argument list, None for sys.argv
    """
    args = arguments_parse(argv)

    try:
        config = configWithOverrides_load(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    log_level: str = logLevelOverride_get(args) or config.logging.level
    logging_setup(log_level, config.logging.format, config.logging.file)

    try:
        sys.exit(selection_run(args, config))
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
