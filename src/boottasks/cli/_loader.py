"""Loading of the modules that declare a boot task graph."""

import importlib
import importlib.util
import logging
from pathlib import Path
from types import ModuleType

from boottasks.exceptions import BootTasksError
from boottasks.registry import TaskRegistry

logger = logging.getLogger(__name__)

SETUP_HOOK = "setup"


class SetupLoadError(BootTasksError):
    """A setup module could not be imported or has no setup() hook."""

    pass


def _import(target: str) -> ModuleType:
    path = Path(target)
    if path.suffix == ".py":
        if not path.is_file():
            raise SetupLoadError(f"No such file: {target}")
        spec = importlib.util.spec_from_file_location(path.stem, path)
        if spec is None or spec.loader is None:
            raise SetupLoadError(f"Cannot load {target}")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except (ImportError, SyntaxError) as e:
            raise SetupLoadError(f"Cannot load {target}: {e}") from e
        return module

    try:
        return importlib.import_module(target)
    except (ImportError, SyntaxError) as e:
        raise SetupLoadError(f"Cannot import {target}: {e}") from e


def load_setup_modules(targets: list[str], registry: TaskRegistry) -> None:
    """Import each target and call its ``setup(registry)`` hook, in order."""
    for target in targets:
        module = _import(target)
        hook = getattr(module, SETUP_HOOK, None)
        if not callable(hook):
            raise SetupLoadError(f"{target} has no {SETUP_HOOK}(registry) function")
        logger.debug("Running %s.%s...", module.__name__, SETUP_HOOK)
        hook(registry)
