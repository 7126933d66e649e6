"""Read-only file access for entropy analysis.

Input files are opened with O_RDONLY semantics and read into memory once,
so the analysed file is never modified, even accidentally.

Key guarantees:
    - Input files are opened exclusively with O_RDONLY.
    - No write, append, or truncate operations are exposed.
    - Paths that resolve to devices, FIFOs, or directories are rejected.
    - Every file-access operation is logged.
"""

from __future__ import annotations

import errno
import logging
import os
import stat
from pathlib import Path

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Standalone validation helpers
# ---------------------------------------------------------------------------


def validate_input_path(path: str | os.PathLike[str]) -> Path:
    """Validate that *path* is a readable regular file.

    Performs the following checks:
        1. The path exists on disk.
        2. The **resolved** path (after symlink resolution) points to a
           regular file -- not a directory, device, FIFO, or socket.
        3. The current process has read permission.

    Parameters
    ----------
    path:
        Filesystem path to validate.

    Returns
    -------
    Path
        The fully-resolved :class:`pathlib.Path`.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    OSError
        If *path* is not a regular file after symlink resolution.
    PermissionError
        If *path* is not readable.
    """
    p = Path(path)

    if not p.exists():
        raise FileNotFoundError(errno.ENOENT, "Input file does not exist", str(p))

    resolved = p.resolve(strict=True)

    # Stat the *resolved* target so symlinks to devices are caught.
    st = resolved.stat()
    if not stat.S_ISREG(st.st_mode):
        raise OSError(
            errno.EINVAL,
            f"Input path is not a regular file (mode {stat.filemode(st.st_mode)})",
            str(resolved),
        )

    if not os.access(resolved, os.R_OK):
        raise PermissionError(errno.EACCES, "Input file is not readable", str(resolved))

    logger.info("Validated input path: %s (size=%d bytes)", resolved, st.st_size)
    return resolved


# ---------------------------------------------------------------------------
# SafeReader
# ---------------------------------------------------------------------------


class SafeReader:
    """Read-only file reader.

    Opens the target file with :data:`os.O_RDONLY` and hands out its
    content as immutable :class:`bytes`.

    Usage::

        with SafeReader("/samples/packed.exe") as reader:
            data = reader.read_all()
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path: Path = validate_input_path(path)
        self._fd: int = -1
        self._size: int = 0
        self._closed: bool = True

    # -- context manager ----------------------------------------------------

    def __enter__(self) -> SafeReader:
        self._open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    # -- internal open / close ----------------------------------------------

    def _open(self) -> None:
        """Open the input file read-only via low-level OS descriptor."""
        if not self._closed:
            return
        self._fd = os.open(str(self._path), os.O_RDONLY)
        self._size = os.fstat(self._fd).st_size
        self._closed = False
        logger.info(
            "Opened input file (fd=%d): %s (%d bytes)",
            self._fd,
            self._path,
            self._size,
        )

    def close(self) -> None:
        """Close the underlying file descriptor if it is still open."""
        if self._closed:
            return
        os.close(self._fd)
        logger.info("Closed input file (fd=%d): %s", self._fd, self._path)
        self._fd = -1
        self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("SafeReader is not open; use it as a context manager")

    # -- public API ---------------------------------------------------------

    @property
    def path(self) -> Path:
        """Return the resolved input file path."""
        return self._path

    def read_all(self) -> bytes:
        """Read the whole file into memory.

        A single ``pread`` may return less than requested on some
        platforms, so reading continues until the recorded size is
        reached or the OS reports end of file.
        """
        self._ensure_open()

        parts: list[bytes] = []
        offset = 0
        while offset < self._size:
            data = os.pread(self._fd, self._size - offset, offset)
            if not data:
                break  # File shrank underneath us.
            parts.append(data)
            offset += len(data)

        logger.info("read_all: %d bytes read from %s", offset, self._path)
        return b"".join(parts)

    def __repr__(self) -> str:
        state = "open" if not self._closed else "closed"
        return f"<SafeReader path={self._path!r} state={state}>"
