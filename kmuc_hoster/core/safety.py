"""Safety rail against scaffolding into a filesystem root."""
from pathlib import Path
from typing import Union

from kmuc_hoster.core.errors import UnsafeDirectoryError
from kmuc_hoster.core.logger import get_logger

logger = get_logger(__name__)


def is_filesystem_root(path: Union[str, Path]) -> bool:
    """Return True for '/' or a drive root such as 'C:\\'."""
    raw = str(path)
    if raw in ("/", "C:\\", "C:/"):
        return True
    resolved = Path(path).resolve()
    return resolved == Path(resolved.anchor)


def ensure_safe_directory(path: Union[str, Path]) -> Path:
    """Verify the init workflow may write into ``path``.

    Raises:
        UnsafeDirectoryError: If path is a filesystem root
    """
    if is_filesystem_root(path):
        logger.debug(f"Blocked init in filesystem root {path}")
        raise UnsafeDirectoryError(str(path))
    return Path(path).resolve()
