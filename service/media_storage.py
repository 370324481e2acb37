"""Local persistence of uploaded media files"""
import logging
import uuid
from pathlib import Path
from typing import BinaryIO, Iterable

from core.errors import DomainValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class MediaStorage:
    """Writes uploaded byte streams under generated storage keys in `root`"""

    def __init__(self, root: Path, max_bytes: int, allowed_extensions: Iterable[str]):
        self.root = Path(root)
        self.max_bytes = max_bytes
        self.allowed_extensions = {ext.lower() for ext in allowed_extensions}

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def save(self, stream: BinaryIO, original_filename: str) -> str:
        """
        Copy `stream` to disk in chunks.

        Returns:
            str: Storage key, `<hex id><original extension>`

        Raises:
            DomainValidationError: Unsupported extension or file too large
        """
        suffix = Path(original_filename or "").suffix.lower()
        if suffix not in self.allowed_extensions:
            raise DomainValidationError(
                f"Unsupported file type '{suffix or original_filename}'. "
                f"Allowed: {', '.join(sorted(self.allowed_extensions))}"
            )

        self.ensure_root()
        storage_key = f"{uuid.uuid4().hex}{suffix}"
        destination = self.root / storage_key

        total_size = 0
        try:
            with destination.open("wb") as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    total_size += len(chunk)
                    if total_size > self.max_bytes:
                        break
                    out.write(chunk)
        except Exception:
            destination.unlink(missing_ok=True)
            raise

        if total_size > self.max_bytes:
            destination.unlink(missing_ok=True)
            raise DomainValidationError(
                f"File too large. Max upload size is {self.max_bytes // (1024 * 1024)}MB."
            )

        logger.info("Media stored", extra={"storage_key": storage_key, "size_bytes": total_size})
        return storage_key

    def exists(self, storage_key: str) -> bool:
        """True if `storage_key` is a plain file name already written under root"""
        if not storage_key or Path(storage_key).name != storage_key:
            return False
        return (self.root / storage_key).is_file()

    def discard(self, storage_key: str) -> None:
        if self.exists(storage_key):
            (self.root / storage_key).unlink(missing_ok=True)
            logger.info("Media discarded", extra={"storage_key": storage_key})
