import os
import typing

import pytest

from boottasks.config import config_provider
from boottasks.registry import TaskRegistry
from boottasks.testing import temp_env_vars

from ._helpers import SleepRecorder


@pytest.fixture
def registry() -> TaskRegistry:
    return TaskRegistry()


@pytest.fixture
def log() -> list[str]:
    """Names of the recording tasks, in the order they ran."""
    return []


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture(scope="function", autouse=True)
def cleared_boottasks_env_vars() -> typing.Generator[None, None, None]:
    """Clear BOOTTASKS_* environment variables and config overrides for the test."""
    boottasks_env_vars = [var for var in os.environ if var.startswith("BOOTTASKS_")]
    config_provider.reset()
    with temp_env_vars({var: None for var in boottasks_env_vars}):
        yield
    config_provider.reset()
