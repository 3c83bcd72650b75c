import logging
import os
from pathlib import Path
from typing import BinaryIO, Optional, Protocol

from src.upload_service.exceptions import KeyCollisionError, WriteFailedError


logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024


class StorageClient(Protocol):
    """Abstract interface for the storage area uploads are written to."""

    def ensure_area(self) -> None:
        """Create the storage area if it does not exist yet.

        Raises:
            OSError: If the area cannot be created or is not a directory.
        """
        ...

    def write_new(
        self,
        key: str,
        stream: BinaryIO,
        expected_size: Optional[int] = None,
    ) -> int:
        """Copy a stream into a new object under key.

        Args:
            key: Storage key, a single safe path segment.
            stream: Readable binary stream, consumed until EOF.
            expected_size: Declared length of the stream, if known. A copy
                of any other length counts as a failed write.

        Returns:
            Number of bytes written.

        Raises:
            KeyCollisionError: If an object already exists under key.
            WriteFailedError: If the copy fails or its length does not match
                expected_size. Nothing is left under key.
        """
        ...


class LocalFileStorage:
    """Stores uploads as files directly under a root directory."""

    def __init__(self, root: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.root = Path(root)
        self.chunk_size = chunk_size

    def path_for(self, key: str) -> Path:
        return self.root / key

    def ensure_area(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def write_new(
        self,
        key: str,
        stream: BinaryIO,
        expected_size: Optional[int] = None,
    ) -> int:
        path = self.path_for(key)
        try:
            target = open(path, "xb")
        except FileExistsError as e:
            raise KeyCollisionError(f"Storage key {key} already exists") from e
        except OSError as e:
            raise WriteFailedError(f"Cannot create {key}: {e}") from e

        written = 0
        try:
            with target:
                while True:
                    chunk = stream.read(self.chunk_size)
                    if not chunk:
                        break
                    target.write(chunk)
                    written += len(chunk)
                if expected_size is not None and written != expected_size:
                    raise EOFError(f"expected {expected_size} bytes, received {written}")
                target.flush()
                os.fsync(target.fileno())
        except Exception as e:
            self._discard(path)
            raise WriteFailedError(f"Writing {key} failed after {written} bytes: {e}") from e
        except BaseException:
            self._discard(path)
            raise

        return written

    def _discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.exception("Could not remove partial upload %s", path)
