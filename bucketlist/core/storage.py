"""
Atomic file writes for the bookmark file and the preferences file.

A write goes to a temporary file in the target directory, is flushed to disk
and then renamed over the target, so readers only ever see the old or the new
content in full.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def atomic_write_bytes(path: Union[str, Path], data: bytes, mode: int = 0o600) -> None:
    """
    Write ``data`` to ``path`` all-or-nothing.

    Args:
        path: Destination file
        data: Full file content
        mode: Permission bits for the resulting file (owner-only by default)

    Raises:
        OSError: If the temporary file cannot be written or renamed
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as tmp:
            if hasattr(os, "fchmod"):  # not on Windows
                os.fchmod(tmp.fileno(), mode)
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise

    logger.debug(f"Wrote {len(data)} bytes to {target}")
