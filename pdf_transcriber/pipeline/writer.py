"""
Sink: persist the formatted transcript in one all-or-nothing write.

Content goes to a temporary file beside the destination, which is then
renamed over it. A failed run leaves any previous output untouched.
"""

import contextlib
import logging
import os
import stat
import tempfile
from pathlib import Path

from pdf_transcriber.errors import WriteFailedError

logger = logging.getLogger(__name__)


def _target_mode(path: Path) -> int:
    """Mode of the existing output, else what a plain open() would create."""
    if path.is_file():
        return stat.S_IMODE(path.stat().st_mode)
    mask = os.umask(0)
    os.umask(mask)
    return 0o666 & ~mask


def write_transcript(path: str | Path, content: str, encoding: str = "utf-8") -> Path:
    path = Path(path)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding=encoding, newline="") as fh:
            fh.write(content)
        # mkstemp creates 0600
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
        raise WriteFailedError(path, str(exc)) from exc

    logger.info("Wrote %d chars to %s", len(content), path)
    return path
