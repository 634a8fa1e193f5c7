"""Dependencies on the state of the filesystem.

Device nodes, mounts and files show up asynchronously while the system boots;
these kinds only poll for them and never constrain task order.
"""

import logging
import os
import stat
from pathlib import Path

from boottasks._core.dependency import DependencyABC

logger = logging.getLogger(__name__)

PathLike = str | os.PathLike[str]


class Files(DependencyABC):
    """Fulfilled once every given path exists."""

    def __init__(self, *paths: PathLike) -> None:
        if not paths:
            raise ValueError(f"{type(self).__name__} needs at least one path")
        self.paths = tuple(Path(p) for p in paths)

    def fulfilled(self) -> bool:
        return all(self._check(path) for path in self.paths)

    def _check(self, path: Path) -> bool:
        return path.exists()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(str(p) for p in self.paths)})"


class Devices(Files):
    """Fulfilled once every given path is a block or character device node."""

    def _check(self, path: Path) -> bool:
        try:
            mode = path.stat().st_mode
        except OSError:
            return False
        return stat.S_ISBLK(mode) or stat.S_ISCHR(mode)


class Mount(DependencyABC):
    """Fulfilled once the given path is a mount point."""

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)

    def fulfilled(self) -> bool:
        return os.path.ismount(self.path)

    def __repr__(self) -> str:
        return f"Mount({self.path})"
