"""Pytest configuration and shared fixtures for displayselect tests

This module provides common fixtures and test utilities used across
unit tests.
"""

import logging
from pathlib import Path

import pytest

from displayselect.common.config import Config, ConfigLoader, DisplayConfig
from displayselect.common.types import Output, Resolution


@pytest.fixture
def sample_config() -> Config:
    """Load the shipped sample configuration

    Returns:
        Config object with sample values
    """
    config_path = Path(__file__).parent.parent / "config.yml"
    if not config_path.exists():
        pytest.skip("config.yml not found - required for this test")
    return ConfigLoader.config_load(config_path)


@pytest.fixture
def display_config() -> DisplayConfig:
    """Default display policy (internal eDP-1, close 1600x900, far 1920x1080)"""
    return DisplayConfig()


@pytest.fixture
def internal_output() -> Output:
    """Connected laptop panel"""
    return Output(
        name="eDP-1",
        connected=True,
        modes=(Resolution(1920, 1080), Resolution(1600, 900), Resolution(1280, 720)),
        internal=True,
        preferred=Resolution(1920, 1080),
        current=Resolution(1920, 1080),
    )


@pytest.fixture
def hdmi_output() -> Output:
    """Connected external monitor"""
    return Output(
        name="HDMI-1",
        connected=True,
        modes=(Resolution(3840, 2160), Resolution(2560, 1440), Resolution(1920, 1080)),
        preferred=Resolution(3840, 2160),
    )


@pytest.fixture
def dp_output() -> Output:
    """Second connected external monitor"""
    return Output(name="DP-1", connected=True, modes=(Resolution(2560, 1440),))


@pytest.fixture
def disconnected_output() -> Output:
    """Output with nothing plugged in"""
    return Output(name="VGA-1", connected=False)


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)
