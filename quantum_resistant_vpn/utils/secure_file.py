"""
Atomic file updates with advisory locking.

Settings are rewritten through a temporary file in the same directory which
then replaces the target, so readers never observe a half-written file. A
sidecar `.lock` file serializes concurrent writers.
"""

import os
import shutil
import logging
import platform
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

logger = logging.getLogger(__name__)

WINDOWS = platform.system() == "Windows"

if WINDOWS:
    import msvcrt

    def _lock_file(file_handle: BinaryIO) -> None:
        # LK_LOCK retries for 10 seconds before raising OSError
        msvcrt.locking(file_handle.fileno(), msvcrt.LK_LOCK, 1)

    def _unlock_file(file_handle: BinaryIO) -> None:
        file_handle.seek(0)
        msvcrt.locking(file_handle.fileno(), msvcrt.LK_UNLCK, 1)
else:
    import fcntl

    def _lock_file(file_handle: BinaryIO) -> None:
        fcntl.flock(file_handle.fileno(), fcntl.LOCK_EX)

    def _unlock_file(file_handle: BinaryIO) -> None:
        fcntl.flock(file_handle.fileno(), fcntl.LOCK_UN)


class SecureFile:
    """A file handler with atomic replacement and a one-generation backup."""

    def __init__(self, file_path: Union[str, Path]):
        """Initialize a secure file handler.

        Args:
            file_path: The path to the file
        """
        self.file_path = Path(file_path)
        self.lock_path = self.file_path.with_suffix(self.file_path.suffix + '.lock')
        self.backup_path = self.file_path.with_suffix(self.file_path.suffix + '.bak')

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the writer lock for the duration of the block."""
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.lock_path, 'a+b') as lock_handle:
            _lock_file(lock_handle)
            try:
                yield
            finally:
                _unlock_file(lock_handle)

    def read_text(self) -> Optional[str]:
        """Read the file, falling back to the backup when the file is missing.

        Returns:
            The file contents, or None if neither file exists
        """
        for path in (self.file_path, self.backup_path):
            if path.exists():
                if path is self.backup_path:
                    logger.warning(f"Using backup file for {self.file_path}")
                return path.read_text(encoding='utf-8')
        return None

    def write_text(self, text: str) -> None:
        """Atomically replace the file contents.

        Raises:
            OSError: If the file cannot be written
        """
        with self.locked():
            if self.file_path.exists():
                shutil.copy2(self.file_path, self.backup_path)

            with tempfile.NamedTemporaryFile(
                mode='w', encoding='utf-8', delete=False, dir=self.file_path.parent
            ) as temp_file:
                temp_file.write(text)
                temp_file.flush()
                os.fsync(temp_file.fileno())
                temp_path = temp_file.name

            try:
                os.replace(temp_path, self.file_path)
            except OSError:
                os.unlink(temp_path)
                raise

        logger.debug(f"Wrote {len(text)} characters to {self.file_path}")
