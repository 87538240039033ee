"""Configuration file loading and management"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from displayselect.common.types import Resolution

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


@dataclass
class DisplayConfig:
    """Output naming and resolution policy"""
    name: Optional[str] = None  # X display, e.g. ":0"
    internal_output: str = "eDP-1"
    close_resolution: Resolution = field(default_factory=lambda: Resolution(1600, 900))
    far_resolution: Resolution = field(default_factory=lambda: Resolution(1920, 1080))
    dpi: Optional[int] = 96


@dataclass
class CommandsConfig:
    """External tool command lines"""
    prober: str = "xrandr --query"
    applier: str = "xrandr"
    picker: str = "dmenu -i"
    prompt_flag: str = "-p"
    notifier: str = "notify-send"
    manual: str = "arandr"


@dataclass
class HookConfig:
    """Single post-apply hook"""
    name: str
    command: str


def _hooks_default() -> List[HookConfig]:
    return [
        HookConfig(name="wallpaper", command="setbg"),
        HookConfig(name="remaps", command="remaps"),
        HookConfig(name="notifications", command="killall dunst; setsid -f dunst"),
    ]


@dataclass
class HooksConfig:
    """Post-apply hook settings"""
    timeout_seconds: float = 10.0
    commands: List[HookConfig] = field(default_factory=_hooks_default)


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str = "WARNING"
    file: Optional[str] = None
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class Config:
    """Complete application configuration"""
    display: DisplayConfig = field(default_factory=DisplayConfig)
    commands: CommandsConfig = field(default_factory=CommandsConfig)
    hooks: HooksConfig = field(default_factory=HooksConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """Loads and parses configuration from YAML files"""

    DEFAULT_CONFIG_PATHS = [
        "config.yml",
        "~/.config/displayselect/config.yml",
        "/etc/displayselect/config.yml",
    ]

    @staticmethod
    def configFile_find() -> Optional[Path]:
        """
        Find configuration file in standard locations

        Returns:
            Path to config file, or None if not found
        """
        for config_path in ConfigLoader.DEFAULT_CONFIG_PATHS:
            path = Path(config_path).expanduser().resolve()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If file does not exist
            yaml.YAMLError: If file is not valid YAML
            ValueError: If the document is not a mapping
        """
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def _section_get(data: Dict[str, Any], key: str) -> Dict[str, Any]:
        section = data.get(key) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Config section '{key}' must be a dictionary")
        return section

    @staticmethod
    def _resolution_parse(value: Any, default: Resolution) -> Resolution:
        if value is None:
            return default
        return Resolution.parse(str(value))

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> Config:
        """
        Parse configuration dictionary into Config object

        Missing sections and keys fall back to the dataclass defaults.

        Args:
            data: Raw configuration dictionary

        Returns:
            Parsed Config object

        Raises:
            ValueError: If a value has the wrong shape
        """
        defaults = Config()

        # Display policy
        display_data = ConfigLoader._section_get(data, "display")
        dpi_value = display_data.get("dpi", defaults.display.dpi)
        display = DisplayConfig(
            name=display_data.get("name"),
            internal_output=str(
                display_data.get("internal_output", defaults.display.internal_output)
            ),
            close_resolution=ConfigLoader._resolution_parse(
                display_data.get("close_resolution"), defaults.display.close_resolution
            ),
            far_resolution=ConfigLoader._resolution_parse(
                display_data.get("far_resolution"), defaults.display.far_resolution
            ),
            dpi=int(dpi_value) if dpi_value is not None else None,
        )

        # External commands
        commands_data = ConfigLoader._section_get(data, "commands")
        commands = CommandsConfig(
            prober=commands_data.get("prober", defaults.commands.prober),
            applier=commands_data.get("applier", defaults.commands.applier),
            picker=commands_data.get("picker", defaults.commands.picker),
            prompt_flag=commands_data.get("prompt_flag", defaults.commands.prompt_flag),
            notifier=commands_data.get("notifier", defaults.commands.notifier),
            manual=commands_data.get("manual", defaults.commands.manual),
        )

        # Post-apply hooks
        hooks_data = ConfigLoader._section_get(data, "hooks")
        hook_list = hooks_data.get("commands")
        if hook_list is None:
            hook_commands = defaults.hooks.commands
        else:
            if not isinstance(hook_list, list):
                raise ValueError("Config key 'hooks.commands' must be a list")
            hook_commands = []
            for index, entry in enumerate(hook_list):
                if (
                    not isinstance(entry, dict)
                    or not entry.get("name")
                    or not entry.get("command")
                ):
                    raise ValueError(f"hooks.commands[{index}] needs name and command")
                hook_commands.append(
                    HookConfig(name=str(entry["name"]), command=str(entry["command"]))
                )
        hooks = HooksConfig(
            timeout_seconds=float(
                hooks_data.get("timeout_seconds", defaults.hooks.timeout_seconds)
            ),
            commands=hook_commands,
        )

        # Logging
        logging_data = ConfigLoader._section_get(data, "logging")
        logging_config = LoggingConfig(
            level=logging_data.get("level", defaults.logging.level),
            file=logging_data.get("file"),
            format=logging_data.get("format", defaults.logging.format),
        )

        return Config(
            display=display,
            commands=commands,
            hooks=hooks,
            logging=logging_config,
        )

    @staticmethod
    def config_load(file_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file

        Args:
            file_path: Optional path to config file. If None, searches standard
                locations and falls back to built-in defaults.

        Returns:
            Parsed Config object

        Raises:
            FileNotFoundError: If an explicit config file does not exist
            ValueError: If config file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find()
            if file_path is None:
                logger.debug(
                    "No config file in %s, using defaults", ConfigLoader.DEFAULT_CONFIG_PATHS
                )
                return Config()

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)

    @staticmethod
    def configWithOverrides_load(
        file_path: Optional[Path] = None,
        **overrides: Any
    ) -> Config:
        """
        Load configuration and apply command-line overrides

        Args:
            file_path: Optional path to config file
            **overrides: Key-value pairs to override config values

        Returns:
            Config object with overrides applied

        Example:
            config = ConfigLoader.configWithOverrides_load(
                display=":1",
                dpi=144
            )
        """
        config = ConfigLoader.config_load(file_path)

        if overrides.get("display") is not None:
            config.display.name = overrides["display"]
        if overrides.get("internal_output") is not None:
            config.display.internal_output = overrides["internal_output"]
        if overrides.get("dpi") is not None:
            config.display.dpi = overrides["dpi"]
        if overrides.get("picker") is not None:
            config.commands.picker = overrides["picker"]

        return config
