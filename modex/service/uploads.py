"""
Upload flow for network files.

An upload is parsed from its bytes; only if parsing succeeds are the
bytes stored under the uploads directory and the network registered
under the file name. A failed parse leaves the registry and the stored
file as they were.

Parsed networks are never persisted; ``reload`` rebuilds the registry
from the files already on disk.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging
import os
import tempfile
from threading import Lock

from ..errors import (
    NetworkNotFoundError,
    ParseError,
    UploadRejectedError,
)
from ..network.model import Network
from ..network.parser import parse_network_file, parse_network_text
from ..registry.store import NetworkRegistry, suffix_filter

logger = logging.getLogger(__name__)


@dataclass
class UploadConfig:
    """Configuration for the upload service."""
    uploads_dir: str = "uploads"
    list_suffix: str = ".txt"
    max_upload_bytes: int = 10 << 20  # 10 MiB


def status_for(exc: BaseException) -> int:
    """Map an error to the status code a transport layer should answer with."""
    if isinstance(exc, (ParseError, UploadRejectedError)):
        return 400
    if isinstance(exc, NetworkNotFoundError):
        return 404
    return 500


class UploadService:
    """
    Accepts network uploads and serves them back by file name.

    The registry is passed in rather than created here so that every
    consumer of the process shares the same one.
    """

    def __init__(self, registry: NetworkRegistry, config: Optional[UploadConfig] = None):
        self.registry = registry
        self.config = config or UploadConfig()
        self._store_lock = Lock()

    @property
    def uploads_path(self) -> Path:
        return Path(self.config.uploads_dir)

    def _check_filename(self, filename: str) -> None:
        if not filename or not filename.strip():
            raise UploadRejectedError("missing file name")
        if "/" in filename or "\\" in filename or filename in (".", ".."):
            raise UploadRejectedError(f"file name must not contain a path: {filename!r}")
        if "\x00" in filename:
            raise UploadRejectedError("file name contains a NUL byte")

    def upload(self, filename: str, data: bytes) -> Network:
        """
        Parse, store and register an uploaded network file.

        The network is parsed from ``data`` itself. The bytes are written
        to the uploads directory only once they parse, through a
        temporary file renamed over the destination.

        Args:
            filename: Name the network is registered under.
            data: Raw file contents, UTF-8 text.

        Returns:
            The registered network.

        Raises:
            UploadRejectedError: Bad file name, payload too large or
                not UTF-8.
            ParseError: The contents are not a valid network. Neither
                the registry nor the stored file is touched.
        """
        self._check_filename(filename)

        if len(data) > self.config.max_upload_bytes:
            raise UploadRejectedError(
                f"upload is {len(data)} bytes, limit is {self.config.max_upload_bytes}"
            )
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise UploadRejectedError(f"upload is not UTF-8 text: {e}") from e

        try:
            network = parse_network_text(text)
        except ParseError as e:
            logger.warning(f"Rejected upload {filename}: {e}")
            raise

        # Stored file and registry entry change together
        with self._store_lock:
            self._store(filename, data)
            self.registry.put(filename, network)
        return network

    def _store(self, filename: str, data: bytes) -> Path:
        """Atomically write ``data`` to the uploads directory."""
        self.uploads_path.mkdir(parents=True, exist_ok=True)
        dest = self.uploads_path / filename

        fd, tmp_name = tempfile.mkstemp(dir=str(self.uploads_path), prefix=".upload-")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, dest)
        except OSError:
            os.unlink(tmp_name)
            raise

        logger.debug(f"Stored upload {filename} ({len(data)} bytes) at {dest}")
        return dest

    def list_files(self) -> List[str]:
        """Registered file names matching the configured suffix."""
        return self.registry.list_keys(suffix_filter(self.config.list_suffix))

    def lookup(self, filename: str) -> Dict[str, Any]:
        """
        Return the registered network as a plain dict.

        Raises:
            UploadRejectedError: No file name was given.
            NetworkNotFoundError: Nothing is registered under the name.
        """
        if not filename:
            raise UploadRejectedError("missing file name")
        return self.registry.require(filename).to_dict()

    def reload(self) -> int:
        """
        Re-parse every stored upload into the registry.

        Files that no longer parse are logged and skipped.

        Returns:
            Number of networks registered.
        """
        if not self.uploads_path.is_dir():
            return 0

        loaded = 0
        for path in sorted(self.uploads_path.glob(f"*{self.config.list_suffix}")):
            if not path.is_file():
                continue
            try:
                network = parse_network_file(str(path))
            except (ParseError, UnicodeDecodeError) as e:
                logger.warning(f"Skipping stored upload {path.name}: {e}")
                continue
            self.registry.put(path.name, network)
            loaded += 1

        logger.info(f"Reloaded {loaded} networks from {self.uploads_path}")
        return loaded
