"""File-system side of generation: directories and rendered files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Union

from goscaffold.errors import FileSystemError

logger = logging.getLogger(__name__)


class FileWriter:
    """Creates directories and writes rendered text as UTF-8.

    Missing ancestors are created; existing files are overwritten.  There is
    no locking and no atomic replacement.
    """

    def create_directories(self, root: Union[str, Path], directories: Iterable[str]) -> list[Path]:
        """Create each relative directory under *root* (and *root* itself)."""
        root = Path(root)
        created: list[Path] = []
        for relative in ("", *directories):
            target = root / relative if relative else root
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise FileSystemError(
                    str(target), _describe(exc, "cannot create directory"), exc.errno
                ) from exc
            logger.debug("Created directory %s", target)
            created.append(target)
        return created

    def write(self, path: Union[str, Path], content: str) -> Path:
        """Write *content* to *path*, creating parent directories first."""
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise FileSystemError(str(target), _describe(exc, "cannot write file"), exc.errno) from exc
        logger.debug("Wrote %s (%d bytes)", target, len(content.encode("utf-8")))
        return target


def _describe(exc: OSError, action: str) -> str:
    reason = exc.strerror or str(exc)
    return f"{action} ({reason})"
