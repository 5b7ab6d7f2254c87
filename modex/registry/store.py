"""
Named registry of parsed networks.

The registry maps an upload identifier (in practice the uploaded file
name) to a complete Network. It is an explicit object owning its lock
and its map; build one at startup and hand it to every consumer.

Stored networks are frozen, so ``get`` returns the stored value itself:
readers cannot change what other readers see. A network is only
inserted once fully built, so a reader never observes a network
without its derived fields.
"""

from typing import Callable, Dict, List, Optional
import logging

from ..errors import NetworkNotFoundError
from ..network.model import Network
from .rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


KeyPredicate = Callable[[str], bool]


def suffix_filter(suffix: str) -> KeyPredicate:
    """Build a key predicate that keeps keys ending in ``suffix``."""
    def matches(key: str) -> bool:
        return key.endswith(suffix)
    return matches


class NetworkRegistry:
    """
    Thread-safe map from upload identifiers to networks.

    Reads (``get``, ``list_keys``, ``in``, ``len``) share the lock;
    ``put`` holds it exclusively. Two writers racing on the same key
    leave whichever was admitted last.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._networks: Dict[str, Network] = {}

    def put(self, key: str, network: Network) -> None:
        """Insert or overwrite the network stored under ``key``."""
        with self._lock.write_locked():
            replaced = key in self._networks
            self._networks[key] = network

        if replaced:
            logger.info(f"Updated registry with file: {key} (replaced previous network)")
        else:
            logger.info(f"Updated registry with file: {key}")

    def get(self, key: str) -> Optional[Network]:
        """Return the network stored under ``key``, or None if there is none."""
        with self._lock.read_locked():
            return self._networks.get(key)

    def require(self, key: str) -> Network:
        """Like ``get`` but raise NetworkNotFoundError on a miss."""
        network = self.get(key)
        if network is None:
            raise NetworkNotFoundError(key)
        return network

    def list_keys(self, predicate: Optional[KeyPredicate] = None) -> List[str]:
        """
        Return the stored keys in sorted order.

        Args:
            predicate: Optional filter; only keys for which it returns
                True are listed.
        """
        with self._lock.read_locked():
            keys = list(self._networks)

        if predicate is not None:
            keys = [key for key in keys if predicate(key)]
        return sorted(keys)

    def __contains__(self, key: object) -> bool:
        with self._lock.read_locked():
            return key in self._networks

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._networks)

    def __repr__(self) -> str:
        return f"NetworkRegistry(networks={len(self)})"
