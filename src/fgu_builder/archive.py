"""
Write FGU module archives.

An FGU ``.mod`` file is a zip archive. It is written to a temporary file next
to the destination and renamed into place only once every entry is written,
so a failed build never leaves a truncated module where FGU would load it.
"""

from __future__ import annotations

import logging
import tempfile
import zipfile
from pathlib import Path
from typing import Iterable

from .errors import ArchiveError

logger = logging.getLogger("fgu-builder.archive")


def write_archive(path: Path | str, entries: Iterable[tuple[str, bytes]]) -> Path:
    """Write ``entries`` as a zip archive at ``path``, atomically.

    Args:
        path: Destination file. Its parent directory is created if missing.
        entries: ``(member name, content)`` pairs, written in the given order.

    Returns:
        The destination path.

    Raises:
        ArchiveError: The archive could not be written. Nothing is left at
            ``path`` that was not there before.
    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=target.parent, suffix=".mod.tmp", prefix=".module_",
        )
    except OSError as e:
        raise ArchiveError(f"Cannot prepare {target}: {e}") from e

    try:
        with open(fd, "wb") as f, zipfile.ZipFile(f, "w", zipfile.ZIP_DEFLATED) as zf:
            for name, content in entries:
                zf.writestr(name, content)
                logger.debug("Archived %s (%d bytes)", name, len(content))
        Path(tmp_path).replace(target)
    except (OSError, zipfile.BadZipFile) as e:
        Path(tmp_path).unlink(missing_ok=True)
        raise ArchiveError(f"Cannot write {target}: {e}") from e
    except Exception:
        Path(tmp_path).unlink(missing_ok=True)
        raise

    logger.info("Module written: %s", target)
    return target
