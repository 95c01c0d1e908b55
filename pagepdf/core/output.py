"""Writing the rendered PDF to its destination."""

import os
import sys
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional

from pagepdf.config.logging import get_logger
from pagepdf.core.errors import OutputWriteError

logger = get_logger(__name__)


def write_output(
    pdf_bytes: bytes, output_path: Optional[str], stream: Optional[BinaryIO] = None
) -> None:
    """
    Save PDF bytes to ``output_path``, or to binary stdout when no path is given.

    The file is written next to its destination and renamed into place, so a
    failed write never leaves a partial PDF behind.

    Raises:
        OutputWriteError: If the bytes cannot be written, or stdout is a terminal
    """
    if output_path is None:
        if stream is None and sys.stdout.isatty():
            raise OutputWriteError("Refusing to write PDF bytes to a terminal, pass --path")
        target = stream if stream is not None else sys.stdout.buffer
        try:
            target.write(pdf_bytes)
            target.flush()
        except (OSError, ValueError) as e:
            raise OutputWriteError(f"Cannot write PDF to stdout: {e}") from e
        return

    destination = Path(output_path).expanduser()
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=destination.parent,
            prefix=f".{destination.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(pdf_bytes)
        # NamedTemporaryFile creates 0600 files
        umask = os.umask(0)
        os.umask(umask)
        os.chmod(tmp_name, 0o666 & ~umask)
        os.replace(tmp_name, destination)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteError(f"Cannot write PDF to {destination}: {e}") from e

    logger.info("Saved PDF", path=str(destination), file_size=len(pdf_bytes))
